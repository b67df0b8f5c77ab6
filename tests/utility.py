# stackradar/tests/utility.py
from __future__ import annotations
import asyncio
import json
import math
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from stackradar.config import RadarConfig
from stackradar.interfaces import SelectionId, SelectionManager, SeriesInput, TabularSnapshot, Viewport
from stackradar.radar import RadarChart, UpdateResult
from stackradar.scene.node import SceneHandle, SceneNode, attach_surface


# -------------------------
# Paths
# -------------------------

# Returns repository root (one level above tests/).
def project_root() -> Path:
    return Path(__file__).resolve().parents[1]


# Builds an absolute path inside the repo from path parts.
def repo_path(*parts: str) -> Path:
    return project_root().joinpath(*parts)


# Returns the example snapshot shipped under data/examples.
def example_snapshot_path() -> Path:
    return repo_path("data", "examples", "team_skills.json")


# Returns the example YAML configuration shipped under data/.
def example_config_path() -> Path:
    return repo_path("data", "radar.yml")


# Loads a JSON file into a dict (fails if the root isn't a mapping).
def load_json(path: Path) -> Dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise AssertionError(f"JSON did not parse into dict: {path}")
    return data


# -------------------------
# Builders
# -------------------------

# Builds a snapshot from plain lists; series names default to S0, S1, ...
def make_snapshot(
    categories: Sequence[str],
    *values: Sequence[Any],
    names: Optional[Sequence[str]] = None,
    title: str = "Category",
) -> TabularSnapshot:
    names = list(names or [f"S{i}" for i in range(len(values))])
    series = [SeriesInput(display_name=n, values=list(v)) for n, v in zip(names, values)]
    return TabularSnapshot(categories=list(categories), series=series, category_display_name=title)


VIEWPORT_400 = Viewport(width=400, height=400)


# Runs one update on a fresh (or given) surface and returns (handle, chart, result).
def render(
    snapshot: TabularSnapshot,
    viewport: Viewport = VIEWPORT_400,
    *,
    config: Optional[RadarConfig] = None,
    selection_manager: Optional[SelectionManager] = None,
    handle: Optional[SceneHandle] = None,
    chart: Optional[RadarChart] = None,
    suppress_animations: bool = False,
) -> Tuple[SceneHandle, RadarChart, Optional[UpdateResult]]:
    handle = handle or attach_surface()
    chart = chart or RadarChart(config, selection_manager=selection_manager)
    result = chart.update(handle, snapshot, viewport, suppress_animations=suppress_animations)
    return handle, chart, result


# Parses an SVG "points" attribute into float pairs.
def parse_points(points: str) -> List[Tuple[float, float]]:
    out: List[Tuple[float, float]] = []
    for pair in points.split():
        x, y = pair.split(",")
        out.append((float(x), float(y)))
    return out


# Returns the polygon node of the j-th series group.
def polygon_of(handle: SceneHandle, j: int) -> SceneNode:
    group = handle.chart.select_all("chartNode")[j]
    return group.select_all("chartPolygon")[0]


# Asserts no coordinate-like attribute in the scene is NaN or infinite.
def assert_finite_scene(handle: SceneHandle) -> None:
    for node in handle.root.walk():
        for k, v in node.attrs.items():
            if isinstance(v, float):
                assert math.isfinite(v), f"{node!r}.{k} is not finite: {v}"
            if k == "points":
                for x, y in parse_points(v):
                    assert math.isfinite(x) and math.isfinite(y), f"{node!r} has non-finite vertex"


# -------------------------
# Selection collaborators
# -------------------------

class RecordingSelectionManager(SelectionManager):
    """Acknowledges every request right away (or fails it when fail=True)."""

    def __init__(self, *, fail: bool = False):
        self.calls: List[SelectionId] = []
        self.fail = fail

    async def select(self, identity: SelectionId, multi: bool = False) -> List[SelectionId]:
        self.calls.append(identity)
        await asyncio.sleep(0)
        if self.fail:
            raise RuntimeError("selection host unavailable")
        return [identity]


class GatedSelectionManager(SelectionManager):
    """Holds every request until the test resolves (or fails) it explicitly."""

    def __init__(self):
        self.calls: List[Tuple[SelectionId, "asyncio.Future[List[SelectionId]]"]] = []

    async def select(self, identity: SelectionId, multi: bool = False) -> List[SelectionId]:
        fut = asyncio.get_running_loop().create_future()
        self.calls.append((identity, fut))
        return await fut

    def resolve(self, i: int) -> None:
        identity, fut = self.calls[i]
        fut.set_result([identity])

    def reject(self, i: int) -> None:
        self.calls[i][1].set_exception(RuntimeError("selection rejected"))


# -------------------------
# CLI helper
# -------------------------

# Runs render_radar.py with the given arguments and returns the completed process.
def run_render_radar(args: List[str], *, cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    cmd = [sys.executable, str(repo_path("render_radar.py")), *args]
    return subprocess.run(cmd, cwd=str(cwd or project_root()), capture_output=True, text=True)
