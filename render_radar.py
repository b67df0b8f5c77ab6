#!/usr/bin/env python3
import argparse
import os
import sys

from stackradar import logging as slog
from stackradar.config import ConfigLoader, RadarConfig
from stackradar.ingest import SnapshotParser
from stackradar.interfaces import Viewport
from stackradar.radar import RadarChart
from stackradar.reporting.page import render_page
from stackradar.scene.node import attach_surface
from stackradar.scene.svg import to_svg

DEFAULT_VIEWPORT = Viewport(width=600, height=600)


def _load_config(path):
    if not path:
        slog.log_step("Using default configuration")
        return RadarConfig()
    slog.log_step("Loading configuration:", path)
    config = ConfigLoader(path).load()
    slog.log_ok(f"Configuration loaded ({config.segment_levels} segment levels).")
    return config


def _resolve_viewport(args, from_file):
    viewport = from_file or DEFAULT_VIEWPORT
    width = args.width if args.width is not None else viewport.width
    height = args.height if args.height is not None else viewport.height
    return Viewport(width=width, height=height)


def main(argv=None):
    p = argparse.ArgumentParser(
        description="Render a stacked radar chart from a snapshot JSON file (SVG or HTML)."
    )
    p.add_argument("-i", "--input", required=True, help="Path to the snapshot JSON file")
    p.add_argument("-c", "--config", default=None, help="Path to a radar YAML configuration")
    p.add_argument("-o", "--output-file", default="radar.svg",
                   help="Output path; .html writes a standalone page, anything else raw SVG")
    p.add_argument("--width", type=float, default=None, help="Viewport width (overrides the snapshot)")
    p.add_argument("--height", type=float, default=None, help="Viewport height (overrides the snapshot)")
    p.add_argument("--title", default=None, help="Page title for HTML output")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Increase log verbosity (-v, -vv)")
    p.add_argument("--log-file", default=None, help="Also write the log to this file")

    args = p.parse_args(argv)
    slog.setup_logging(args.verbose, args.log_file)

    config = _load_config(args.config)

    slog.log_step("Reading snapshot:", args.input)
    snapshot, viewport_in = SnapshotParser().parse(args.input)
    viewport = _resolve_viewport(args, viewport_in)
    slog.log_ok(f"Snapshot loaded: {len(snapshot.categories)} categor(ies), {len(snapshot.series)} series.")

    handle = attach_surface(viewport)
    chart = RadarChart(config)
    result = chart.update(handle, snapshot, viewport, suppress_animations=True)
    if result is None:
        slog.log_warn("Nothing to draw; writing an empty chart.")
    else:
        counts = handle.layer_nodes()
        slog.log_info(f"    • scene: {counts}")

    svg_markup = to_svg(handle.root)
    out_path = args.output_file
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    slog.log_step("Writing output:", out_path)
    with open(out_path, "w", encoding="utf-8") as f:
        if out_path.lower().endswith((".html", ".htm")):
            title = args.title or snapshot.category_display_name or "Radar chart"
            f.write(render_page(svg_markup, result, title=title))
        else:
            f.write(svg_markup)

    slog.log_ok("Done.")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        from stackradar import logging as slog
        slog.log_err(f"Error: {e}")
        sys.exit(1)
