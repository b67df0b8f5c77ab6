from __future__ import annotations

from .page import render_data_table, render_page
