from __future__ import annotations
import html
from typing import Any, List
from stackradar.scene.node import SceneNode

# elements written as <tag/> when they have no content
_VOID_OK = {"line", "circle", "polygon", "rect", "path"}


def _fmt(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float):
        s = f"{v:.2f}"
        if s == "-0.00":
            s = "0.00"
        return s
    return str(v)


def _style_text(node: SceneNode) -> str:
    decl = [f"{k}:{_fmt(v)}" for k, v in node.style.items()]
    if node.transition is not None and node.transition.duration_ms > 0:
        decl.append(f"transition:{node.transition.prop} {node.transition.duration_ms}ms")
    return ";".join(decl)


def _open_tag(node: SceneNode) -> str:
    attrs: List[str] = []
    if node.cls:
        attrs.append(f'class="{html.escape(node.cls)}"')
    for k, v in node.attrs.items():
        attrs.append(f'{k}="{html.escape(_fmt(v))}"')
    style = _style_text(node)
    if style:
        attrs.append(f'style="{html.escape(style)}"')
    return f"<{node.tag}{(' ' + ' '.join(attrs)) if attrs else ''}"


def _write(node: SceneNode, parts: List[str]) -> None:
    head = _open_tag(node)
    if not node.children and node.text is None and node.title is None and node.tag in _VOID_OK:
        parts.append(head + "/>")
        return
    parts.append(head + ">")
    if node.title is not None:
        parts.append(f"<title>{html.escape(node.title)}</title>")
    if node.text is not None:
        parts.append(html.escape(node.text))
    for ch in node.children:
        _write(ch, parts)
    parts.append(f"</{node.tag}>")


def to_svg(root: SceneNode) -> str:
    """Serialize a scene (normally `handle.root`) to an SVG document fragment."""
    parts: List[str] = []
    _write(root, parts)
    return "".join(parts)
