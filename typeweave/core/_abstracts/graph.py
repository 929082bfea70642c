"""
This module provides the abstract base class for the graph visualizations of
typeweave. Subclasses turn a `GenerationReport` into a networkx graph and
render it with graphviz, grouping every handler with the properties it
claimed.

A subclass fills `self.graph` in `_setup`, tagging each node with a `type`
that `_node_styles` maps to a shape and a fill color. Nodes whose type has no
style are left to graphviz defaults.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

import graphviz
from networkx import DiGraph

from typeweave._decorators import GenerationReport


class _BaseGraph(ABC):
    """Abstract base class for all typeweave graphs."""

    _graph_defaults = {
        "rankdir": "LR",
        "nodesep": "0.2",
        "ranksep": "1.0",
        "fontname": "Helvetica",
        "fontsize": "10",
        "concentrate": "true",
    }

    def __init__(self, report: GenerationReport):
        self.report = report
        self.graph = DiGraph()

    @property
    @abstractmethod
    def _collector(self) -> dict[str, dict]:
        """Handler name -> {"properties": [...], "members": [...]}."""

    @property
    @abstractmethod
    def _legend_details(self) -> tuple[list[str], list[str]]:
        """Legend labels and their colors, in display order."""

    @property
    @abstractmethod
    def _node_styles(self) -> dict[str, tuple[str, str]]:
        """Node type -> (shape, fill color)."""

    @abstractmethod
    def _style_graph_edges(self, g: graphviz.Digraph, **kwargs):
        """Copy the edges of `self.graph` to `g`."""

    @abstractmethod
    def _setup(self):
        """Populate `self.graph` with nodes and edges from the report."""

    def _add_nodes(self, nodes: str | Iterable[str] | None, **attrs) -> None:
        """
        Add nodes to `self.graph`.

        A node that already exists keeps its first attributes, so a property
        shared by a claim and a fallback record is drawn once.
        """
        if nodes is None:
            return
        for node in [nodes] if isinstance(nodes, str) else nodes:
            if node not in self.graph.nodes:
                self.graph.add_node(node, **attrs)

    def build(
        self,
        graph: graphviz.Digraph | None = None,
        additional_graph_attr: dict[str, str] | None = None,
        size: int = 12,
        legend: bool = True,
        sink_source: bool = False,
    ) -> graphviz.Digraph:
        """Builds and returns the Graphviz Digraph object.

        Args:
            graph (graphviz.Digraph | None, optional): Graph to draw into. A
                new one is created when None. Defaults to None.
            additional_graph_attr (dict[str, str] | None, optional): Graphviz
                attributes overriding the defaults. Defaults to None.
            size (int, optional): Width and height in inches. Defaults to 12.
            legend (bool, optional): Draw the color legend. Defaults to True.
            sink_source (bool, optional): Pin nodes without inputs to the left
                and nodes without outputs to the right. Defaults to False.

        Returns:
            graphviz.Digraph: The drawn graph, renderable with `.render()`.
        """
        self._setup()

        graph_attr = {
            **self._graph_defaults,
            "size": f"{size},{size}!",
            "label": f"<<b>{type(self).__name__} for {self.report._type_name!r}</b>>",
            "labelloc": "t",
            **(additional_graph_attr or {}),
        }
        g = graph or graphviz.Digraph(graph_attr=graph_attr)

        if sink_source:
            self._pin_rank(g, "source", [n for n, d in self.graph.in_degree() if d == 0])
            self._pin_rank(g, "sink", [n for n, d in self.graph.out_degree() if d == 0])
        self._draw_nodes(g)
        if legend:
            self._draw_legend(g)
        return g

    def _draw_nodes(self, g: graphviz.Digraph) -> None:
        styles = self._node_styles
        for node, data in self.graph.nodes(data=True):
            style = styles.get(data.get("type"))
            if style is None:
                continue
            shape, color = style
            g.node(
                node,
                label=data.get("label", node),
                shape=shape,
                style="filled",
                fillcolor=color,
                height="0.35",
            )

    @staticmethod
    def _pin_rank(g: graphviz.Digraph, rank: str, nodes: list[str]) -> None:
        with g.subgraph() as s:
            s.attr(rank=rank)
            for node in nodes:
                s.node(node)

    def _draw_legend(self, g: graphviz.Digraph) -> None:
        names, colors = self._legend_details
        with g.subgraph(name="cluster_legend") as c:
            c.attr(label="<<b>Legend</b>>", fontsize="12", style="rounded", padding="0.05")
            for name, color in zip(names, colors, strict=True):
                c.node(
                    f"legend_{name}",
                    label=name,
                    shape="box",
                    style="filled",
                    fillcolor=color,
                    height="0.12",
                    fontsize="10",
                )

    def _create_handler_clusters(self, g: graphviz.Digraph) -> None:
        """Box each handler together with the properties it claimed."""
        for handler, collected in self._collector.items():
            if not collected.get("properties"):
                continue
            with g.subgraph(name=f"cluster_{handler}") as c:
                c.attr(label=handler, style="rounded", color="gray", fontcolor="gray")
                c.node(handler)
                for node in collected["properties"]:
                    c.node(node)


__all__ = ["_BaseGraph"]
