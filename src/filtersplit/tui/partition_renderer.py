"""
TUI Partition Renderer

Draws split results as Rich trees for debugging.
"""

import io
from collections.abc import Mapping
from typing import Any, Optional

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from filtersplit.models.filters import CrossTableValue, Filter, FilterSet


class PartitionRenderer:
    """Renders a partition map as one branch per key."""

    KEY_COLORS = {
        "smart": "bold magenta",
        "default": "bold cyan",
    }

    def __init__(self, display_rules: Optional[dict[str, Any]] = None):
        self.rules = display_rules or {}
        self.max_value_chars = self.rules.get("max_value_chars", 40)

    def render(self, partitions: Mapping[str, FilterSet]) -> Tree:
        root = Tree(Text("partitions", style="bold white"))
        if not partitions:
            root.add(Text("(empty)", style="dim"))
            return root

        for key, filter_set in partitions.items():
            label = Text()
            label.append(key, style=self.KEY_COLORS.get(key, "bold white"))
            label.append(f" [{filter_set.conjunction or 'and'}]", style="dim")
            self._add_children(root.add(label), filter_set)
        return root

    def render_text(self, partitions: Mapping[str, FilterSet], width: int = 100) -> str:
        buffer = io.StringIO()
        console = Console(file=buffer, width=width, force_terminal=False, color_system=None)
        console.print(self.render(partitions))
        return buffer.getvalue()

    def _add_children(self, branch: Tree, filter_set: FilterSet) -> None:
        for node in filter_set.filters:
            if isinstance(node, FilterSet):
                label = Text(f"group [{node.conjunction or 'inherit'}]", style="yellow")
                self._add_children(branch.add(label), node)
            elif isinstance(node.value, CrossTableValue):
                label = Text(f"{node.operator} cross-table", style="green")
                self._add_children(branch.add(label), node.value.embedded)
            else:
                branch.add(self._filter_label(node))

    def _filter_label(self, node: Filter) -> Text:
        value = repr(node.value)
        if len(value) > self.max_value_chars:
            value = value[: self.max_value_chars - 3] + "..."
        label = Text()
        label.append(node.operator or "?", style="bold")
        label.append(f" {value}")
        if node.conjunction:
            label.append(f" ({node.conjunction})", style="dim")
        return label
