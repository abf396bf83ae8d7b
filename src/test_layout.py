"""Tests for layout requests and position mapping."""

import networkx as nx

from graph import build_family_graph
from layout import NODE_HEIGHT, NODE_WIDTH, build_layout_request, compute_layout
from models import MARRIED, Person, Relationship


def test_build_layout_request():
    people = [Person(id=i) for i in ("M", "F", "C")]
    graph = build_family_graph(
        [Relationship("M", "F", MARRIED), Relationship("M", "C"), Relationship("F", "C")]
    )
    request = build_layout_request(people, graph)

    assert request["nodes"][0] == {"id": "M", "width": NODE_WIDTH, "height": NODE_HEIGHT}
    assert request["edges"] == [
        {"id": "e-F-C", "source": "F", "target": "C"},
        {"id": "e-M-C", "source": "M", "target": "C"},
    ]
    assert request["unions"] == [{"parents": ["F", "M"], "children": ["C"]}]


def test_request_for_family(family, family_graph):
    people, _ = family
    request = build_layout_request(people, family_graph, width=100, height=50)
    assert len(request["nodes"]) == len(people)
    # 18 parent links, no partnership edges
    assert len(request["edges"]) == 18
    assert {"id": "e-3_eko-4_alya", "source": "3_eko", "target": "4_alya"} in request["edges"]


def test_compute_layout(monkeypatch):
    captured = {}

    def fake_layout(G, prog):
        captured["graph"] = G
        captured["prog"] = prog
        return {"P": (200.0, 300.0), "C": (200.0, 100.0)}

    monkeypatch.setattr(nx.nx_pydot, "graphviz_layout", fake_layout)

    request = {
        "nodes": [{"id": "P", "width": 144, "height": 72}, {"id": "C", "width": 144, "height": 72}],
        "edges": [{"id": "e-P-C", "source": "P", "target": "C"}],
    }
    result = compute_layout(request)

    assert captured["prog"] == "dot"
    assert captured["graph"].nodes["P"]["width"] == "2.0"
    assert list(captured["graph"].edges) == [("P", "C")]
    assert result == {
        "nodes": [
            {"id": "P", "position": {"x": 128.0, "y": -36.0}},
            {"id": "C", "position": {"x": 128.0, "y": 164.0}},
        ]
    }


def test_compute_layout_empty():
    assert compute_layout({"nodes": [], "edges": []}) == {"nodes": []}
