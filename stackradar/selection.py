from __future__ import annotations
import hashlib
from typing import Callable, List, Optional
from stackradar import logging as slog
from stackradar.interfaces import SelectionId, SelectionManager


def series_identity(display_name: str, occurrence: int = 0) -> SelectionId:
    """
    Deterministic identity for a series.
    Derived from the series source (its display name) and the occurrence number
    of that name, so identities survive value changes and series reordering.
    """
    payload = f"series\x1f{display_name}\x1f{occurrence}".encode("utf-8")
    return SelectionId(hashlib.sha1(payload).hexdigest()[:16])


class InMemorySelectionManager(SelectionManager):
    """
    Single-select by default: selecting the identity that is already the only
    selection clears it. With multi=True the identity is toggled in place.
    `on_change` is called with the new selection after every request.
    """

    def __init__(self, on_change: Optional[Callable[[List[SelectionId]], None]] = None):
        self._selected: List[SelectionId] = []
        self._on_change = on_change

    @property
    def selected(self) -> List[SelectionId]:
        return list(self._selected)

    async def select(self, identity: SelectionId, multi: bool = False) -> List[SelectionId]:
        if multi:
            if identity in self._selected:
                self._selected.remove(identity)
            else:
                self._selected.append(identity)
        elif self._selected == [identity]:
            self._selected = []
        else:
            self._selected = [identity]

        slog.log_debug(f"selection -> {[str(s) for s in self._selected]}")
        if self._on_change is not None:
            self._on_change(self.selected)
        return self.selected

    def clear(self) -> None:
        self._selected = []
        if self._on_change is not None:
            self._on_change([])
