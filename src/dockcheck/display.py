"""Tree of optionally colored lines, rendered with rich."""

from __future__ import annotations

from typing import Any, Optional, Protocol, Union

from rich.markup import escape
from rich.tree import Tree

from dockcheck.status.models import Severity

Color = Union[Severity, str]

PALETTE = frozenset({"green", "yellow", "red"})


def color_name(color: Color) -> str:
    """Resolve a severity or palette name to a palette name."""
    name = color.color if isinstance(color, Severity) else color
    if name not in PALETTE:
        raise ValueError(f"Unknown color: {color!r}")
    return name


def colorize(color: Color, text: str) -> str:
    """Wrap *text* in rich markup for *color*."""
    name = color_name(color)
    return f"[{name}]{escape(text)}[/{name}]"


class LineSink(Protocol):
    """Anything that accepts nested, optionally colored lines."""

    def add_line(self, text: str, color: Optional[Color] = None) -> LineSink: ...


class StatusDisplay:
    """A line with child lines. Implements LineSink."""

    def __init__(self, text: str = "", color: Optional[Color] = None) -> None:
        self.text = text
        self.color = color_name(color) if color is not None else None
        self.children: list[StatusDisplay] = []

    def add_line(self, text: str, color: Optional[Color] = None) -> StatusDisplay:
        child = StatusDisplay(text, color)
        self.children.append(child)
        return child

    def label(self) -> str:
        if self.color is None:
            return escape(self.text)
        return colorize(self.color, self.text)

    def to_tree(self) -> Tree:
        tree = Tree(self.label(), guide_style="dim")
        self._attach(tree)
        return tree

    def _attach(self, tree: Tree) -> None:
        for child in self.children:
            child._attach(tree.add(child.label()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "color": self.color,
            "children": [child.to_dict() for child in self.children],
        }
