"""
This module provides the graph visualization of a generation pass.

`ClaimGraph` turns the `GenerationReport` of an augmented type into a
directed graph that reads left to right:

- **handlers** point to the properties they claimed, and the extensible
  handler points to the properties it gave convention support (dashed);
- **properties** point to the members synthesized for them, while members
  not tied to a property (closure overloads, dynamic fallback) hang
  directly off the handler that emitted them, and the constructor stands
  alone;
- every **member**, every **mix-in** and the **specification type** point to
  the **generated type**.

The graph is built with `networkx` and rendered with `graphviz`; the same
report can be shown as a table with `build_matrix()`.
"""

import sys

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

import graphviz
from pandas import DataFrame

from ._abstracts import _BaseGraph
from ._matrix import ClaimMatrix


def _property_node(name: str) -> str:
    return f"property {name}"


def _member_node(attribute: str, kind: str) -> str:
    return f"member {attribute} ({kind})"


class ClaimGraph(_BaseGraph):
    """Generates and visualizes the claim graph of an augmented type.

    Attributes:
        report (GenerationReport): The report of the generation pass.
    """

    def __init__(self, augmented: object):
        """Initializes the ClaimGraph.

        Args:
            augmented (AugmentedType | GenerationReport): The augmented type,
                or directly its generation report.
        """
        super().__init__(getattr(augmented, "report", augmented))

    @property
    def _collector(self) -> dict[str, dict]:
        collector: dict[str, dict] = {
            h: {"properties": [], "members": []} for h in self.report._handlers
        }
        for prop, handler in self.report._claims.items():
            collector.setdefault(handler, {"properties": [], "members": []})
            collector[handler]["properties"].append(_property_node(prop))
        for handler, _, attribute, kind in self.report._members:
            if handler in collector:
                collector[handler]["members"].append(_member_node(attribute, kind))
        return collector

    @property
    def _node_styles(self) -> dict:
        """Return the node style dictionary (shapes and colors)."""
        return {
            "handler": ("box", "#9999ff"),
            "claimed": ("box", "#f08080"),
            "fallback": ("box", "#99ff99"),
            "member": ("box", "#fbec5d"),
            "property": ("box", "#f5deb3"),
            "mixin": ("box", "#ffb6c1"),
            "type": ("box", "#d3d3d3"),
        }

    @property
    def _legend_details(self) -> tuple[list[str], list[str]]:
        """Return the names and colors for the legend."""
        names = [
            "Handlers",
            "Claimed Properties",
            "Convention Properties",
            "Synthesized Members",
            "Unclaimed Properties",
            "Mix-ins",
            "Types",
        ]
        colors = [self._node_styles[t][1] for t in self._node_styles]
        return names, colors

    def _setup(self):
        """Builds the internal networkx graph from the generation report."""
        report = self.report
        generated = report._generated_name

        self._add_nodes(report._handlers, type="handler")
        self._add_nodes(report._type_name, type="type")
        self._add_nodes(generated, type="type")
        self.graph.add_edge(report._type_name, generated, flow="subclass")

        for prop, handler in report._claims.items():
            node = _property_node(prop)
            self._add_nodes(node, type="claimed", label=prop)
            self.graph.add_edge(handler, node, flow="claim")

        for prop in report._fallback_properties:
            node = _property_node(prop)
            self._add_nodes(node, type="fallback", label=prop)
            self.graph.add_edge("extensible", node, flow="fallback")

        for handler, prop, attribute, kind in report._members:
            node = _member_node(attribute, kind)
            self._add_nodes(node, type="member", label=f"{attribute}\n{kind}")
            self.graph.add_edge(node, generated, flow="member")
            if not handler:
                # Emitted by the pass itself, e.g. the constructor
                continue
            source = _property_node(prop) if prop else handler
            if source not in self.graph.nodes:
                self._add_nodes(source, type="property", label=prop)
                self.graph.add_edge(handler, source, flow="synthesize")
            self.graph.add_edge(source, node, flow="synthesize")

        for mixin in report._mixins:
            self._add_nodes(mixin, type="mixin")
            self.graph.add_edge(mixin, generated, flow="mixin")

    def _style_graph_edges(self, g: graphviz.Digraph, member_edges: bool = True):
        """Applies styles to edges in the graph.

        Convention edges are dashed and mix-in edges dotted.

        Args:
            g (graphviz.Digraph): The graphviz graph to style.
            member_edges (bool): If False, edges from synthesized members to
                the generated type are omitted, which declutters large graphs.
        """
        for n1, n2, attrs in self.graph.edges(data=True):
            flow = attrs.get("flow")
            if flow == "member" and not member_edges:
                continue
            edge_attrs = {}
            if flow == "fallback":
                edge_attrs["style"] = "dashed"
            elif flow == "mixin":
                edge_attrs["style"] = "dotted"
            g.edge(n1, n2, **edge_attrs)

    @override
    def build(
        self,
        graph: graphviz.Digraph | None = None,
        additional_graph_attr: dict[str, str] | None = None,
        size: int = 12,
        legend: bool = True,
        sink_source: bool = False,
        member_edges: bool = True,
        cluster_handlers: bool = False,
    ) -> graphviz.Digraph:
        """Builds and returns the Graphviz Digraph object for the claim graph.

        Args:
            graph (graphviz.Digraph | None, optional): An existing graphviz
                graph to add nodes and edges to. If None, a new graph is created.
                Defaults to None.
            additional_graph_attr (dict[str, str] | None, optional): Additional
                attributes to add to the graph. Defaults to None.
            size (int, optional): The size of the graph in inches. Defaults to 12.
            legend (bool, optional): If True, includes a color-coded legend.
                Defaults to True.
            sink_source (bool, optional): If True, ranks source and sink nodes.
                Defaults to False.
            member_edges (bool, optional): If True, connects every synthesized
                member to the generated type. Defaults to True.
            cluster_handlers (bool, optional): If True, groups each handler with
                its claimed properties in a visual cluster. Defaults to False.

        Returns:
            graphviz.Digraph: A Graphviz Digraph object representing the claims.

        Example:
            ```python
            import typeweave as tw

            graph = tw.ClaimGraph(tw.augment(Widget))
            g = graph.build(size=16)
            g.render("widget_claims", format="png", cleanup=True)
            ```
        """
        g = super().build(
            graph=graph,
            additional_graph_attr=additional_graph_attr,
            size=size,
            legend=legend,
            sink_source=sink_source,
        )

        self._style_graph_edges(g, member_edges=member_edges)

        if cluster_handlers:
            self._create_handler_clusters(g)

        return g

    def build_matrix(self) -> DataFrame:
        """Construct and return the ClaimMatrix of the same report.

        Returns:
            pd.DataFrame: Properties as rows, handlers as columns.
        """
        return ClaimMatrix(self.report).build()


__all__ = ["ClaimGraph"]
