"""
This module provides `TreeFormatter`, the builder used to compose the
multi-line diagnostics raised by the engine.

A diagnostic is a tree of nodes. `node` starts a new node at the current
depth, `append*` extends the text of the current node, and
`start_children`/`end_children` open and close a nested level. Rendering
produces one line per node, children indented under their parent:

    Could not generate a decorated class for type Widget.
      - Cannot use @inject annotation on method Widget.service() as it is static.
"""

from typing import Any

from typeweave._utils import MethodInfo, _type_name


class TreeFormatter:
    """Compose a hierarchical, human readable error message."""

    def __init__(self) -> None:
        self._nodes: list[list] = []
        self._depth = 0

    def node(self, text: str) -> "TreeFormatter":
        """Start a new node at the current depth."""
        self._nodes.append([self._depth, str(text)])
        return self

    def append(self, text: str) -> "TreeFormatter":
        """Append text to the current node."""
        if not self._nodes:
            return self.node(text)
        self._nodes[-1][1] += str(text)
        return self

    def append_type(self, t: Any) -> "TreeFormatter":
        return self.append(_type_name(t))

    def append_method(self, method: MethodInfo) -> "TreeFormatter":
        return self.append(method.signature_text)

    def start_children(self) -> "TreeFormatter":
        if not self._nodes:
            raise RuntimeError("Cannot start children before the first node.")
        self._depth += 1
        return self

    def end_children(self) -> "TreeFormatter":
        if self._depth == 0:
            raise RuntimeError("No children level to end.")
        self._depth -= 1
        return self

    def __str__(self) -> str:
        lines = []
        for depth, text in self._nodes:
            if depth == 0:
                lines.append(text)
            else:
                lines.append(f"{'    ' * (depth - 1)}  - {text}")
        return "\n".join(lines)
