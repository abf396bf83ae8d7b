"""Hierarchical layout of person nodes via Graphviz."""

import logging

import networkx as nx

from graph import FamilyGraph, parent_unions
from models import Person

logger = logging.getLogger(__name__)

NODE_WIDTH = 256
NODE_HEIGHT = 280
POINTS_PER_INCH = 72


def build_layout_request(
    people: list[Person],
    graph: FamilyGraph,
    width: int = NODE_WIDTH,
    height: int = NODE_HEIGHT,
) -> dict:
    """
    Build the layout request: one node per person and a parent -> child edge for
    every member of every parent union. Partnerships carry no layout edge.
    """
    unions = parent_unions(graph)
    nodes = [{"id": p.id, "width": width, "height": height} for p in people]
    edges = [
        {"id": f"e-{parent}-{child}", "source": parent, "target": child}
        for union in unions
        for parent in union["parents"]
        for child in union["children"]
    ]
    return {"nodes": nodes, "edges": edges, "unions": unions}


def compute_layout(request: dict, prog: str = "dot") -> dict:
    """
    Position the request's nodes with Graphviz.

    Returns {"nodes": [{"id", "position": {"x", "y"}}]} where the position is the
    node's top-left corner and ancestors have the smallest y.
    """
    if not request["nodes"]:
        return {"nodes": []}

    G = nx.DiGraph()
    G.graph["graph"] = {"rankdir": "TB", "nodesep": "0.6", "ranksep": "0.8"}
    G.graph["node"] = {"shape": "box", "fixedsize": "true"}
    sizes = {}
    for node in request["nodes"]:
        sizes[node["id"]] = (node["width"], node["height"])
        G.add_node(
            node["id"],
            width=str(node["width"] / POINTS_PER_INCH),
            height=str(node["height"] / POINTS_PER_INCH),
        )
    for edge in request["edges"]:
        G.add_edge(edge["source"], edge["target"])

    positions = nx.nx_pydot.graphviz_layout(G, prog=prog)
    logger.debug("Graphviz placed %d of %d nodes", len(positions), len(sizes))

    # Graphviz reports centers with y growing upward
    top = max(y for _, y in positions.values())
    nodes = []
    for node_id, (width, height) in sizes.items():
        if node_id not in positions:
            continue
        x, y = positions[node_id]
        nodes.append(
            {"id": node_id, "position": {"x": x - width / 2, "y": (top - y) - height / 2}}
        )
    return {"nodes": nodes}
