"""Visualization functions for family tree graphs."""

from pathlib import Path

import networkx as nx
import pydot

from graph import build_union_layout_graph
from models import DIVORCED, FEMALE, MALE, NOT_MARRIED

# Partnership type -> Graphviz edge style between a partner and the family node
PARTNER_STYLES = {
    DIVORCED: "dashed",
    NOT_MARRIED: "dotted",
}


def person_label(data: dict, kinship_label: str | None = None) -> str:
    """Node text: optional kinship label, name, and birth-death years."""
    name = data.get("person_name") or ""
    birth_date = data.get("birth_date") or ""
    death_date = data.get("death_date") or ""

    years = f"{birth_date[:4]}-{death_date[:4]}"
    if data.get("deceased") and not death_date:
        years += "†"

    lines = [name, years]
    if kinship_label:
        lines.insert(0, kinship_label.upper())
    return "\n".join(lines)


def build_dot(
    G: nx.DiGraph,
    kinship_labels: dict[str, str | None] | None = None,
    pov_id: str | None = None,
) -> pydot.Dot:
    """
    Build a Graphviz chart using the union-node model.

    - Parents appear above children (ancestors at top)
    - Partners are aligned horizontally on the same rank
    - Foster links and ended or non-marital partnerships are drawn with broken lines
    """
    kinship_labels = kinship_labels or {}
    H = build_union_layout_graph(G)

    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")
    P.set("splines", "ortho")
    P.set("nodesep", "0.4")
    P.set("ranksep", "0.6")

    couples: list[tuple] = []

    for node, data in H.nodes(data=True):
        if data.get("node_type") == "family":
            P.add_node(pydot.Node(str(node), shape="point", width="0.1", height="0.1", label=""))
            spouses = data.get("spouses", ())
            if len(spouses) == 2 and "relationship_type" in data:
                couples.append(spouses)
            continue

        gender = data.get("gender")
        if gender == MALE:
            fillcolor = "lightblue"
        elif gender == FEMALE:
            fillcolor = "lightpink"
        else:
            fillcolor = "lightgray"

        attrs = {
            "label": person_label(data, kinship_labels.get(node)),
            "shape": "box",
            "style": "rounded,filled",
            "fillcolor": fillcolor,
            "fontsize": "10",
        }
        if node == pov_id:
            attrs["penwidth"] = "3"
        P.add_node(pydot.Node(str(node), **attrs))

    for u, v, data in H.edges(data=True):
        edge_type = data.get("edge_type", "")

        if edge_type == "spouse_to_family":
            style = PARTNER_STYLES.get(H.nodes[v].get("relationship_type"), "solid")
            P.add_edge(pydot.Edge(str(u), str(v), dir="none", color="darkgray", style=style))
        elif edge_type == "family_to_child":
            style = "dashed" if data.get("fostered") else "solid"
            P.add_edge(pydot.Edge(str(u), str(v), color="darkgray", style=style))

    for i, (a, b) in enumerate(couples):
        sg = pydot.Subgraph(f"couple_{i}", rank="same")
        sg.add_node(pydot.Node(str(a)))
        sg.add_node(pydot.Node(str(b)))
        P.add_subgraph(sg)

    return P


def plot_graph(
    G: nx.DiGraph,
    output_path: Path | None = None,
    kinship_labels: dict[str, str | None] | None = None,
    pov_id: str | None = None,
):
    """
    Render the family tree with Graphviz.

    Args:
        G: Graph from build_graph()
        output_path: Path to save the output image (png, svg or pdf). If None, displays interactively.
        kinship_labels: Optional person id -> kinship label, shown above each name
        pov_id: Person the labels are relative to; drawn with a heavier border
    """
    P = build_dot(G, kinship_labels, pov_id)

    if output_path:
        ext = output_path.suffix.lower().lstrip(".")
        if ext not in ("png", "svg", "pdf"):
            ext = "png"

        P.write(str(output_path), format=ext)
        print(f"Graph saved to {output_path}")
    else:
        import tempfile

        import matplotlib.image as mpimg
        import matplotlib.pyplot as plt

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            P.write(f.name, format="png")
            img = mpimg.imread(f.name)
            plt.figure(figsize=(20, 16))
            plt.imshow(img)
            plt.axis("off")
            plt.tight_layout()
            plt.show()
