"""Kinship graph indices and NetworkX graph building."""

from dataclasses import dataclass
import itertools
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple

import networkx as nx

from models import FOSTER_PARENT, MARRIED, PARENT_TYPES, PARTNER_TYPES, Person, Relationship

logger = logging.getLogger(__name__)


class SpouseLink(NamedTuple):
    id: str
    type: str


@dataclass(frozen=True)
class FamilyGraph:
    """
    Read-only indices derived from a flat list of relationship edges.

    Built once per graph load and passed explicitly into every kinship query.
    """

    parents: Mapping[str, tuple[str, ...]]
    children: Mapping[str, tuple[str, ...]]
    spouses: Mapping[str, tuple[SpouseLink, ...]]
    foster_links: frozenset[tuple[str, str]]
    edges: tuple[Relationship, ...]

    def parents_of(self, person_id: str) -> tuple[str, ...]:
        return self.parents.get(person_id, ())

    def children_of(self, person_id: str) -> tuple[str, ...]:
        return self.children.get(person_id, ())

    def spouses_of(self, person_id: str) -> tuple[SpouseLink, ...]:
        return self.spouses.get(person_id, ())

    def married_spouses_of(self, person_id: str) -> list[str]:
        """Spouses whose partnership propagates in-law kinship."""
        return [link.id for link in self.spouses_of(person_id) if link.type == MARRIED]

    def partner_type(self, a: str, b: str) -> str | None:
        """Type of the partnership between a and b, or None when they are not partners."""
        for link in self.spouses_of(a):
            if link.id == b:
                return link.type
        return None

    def is_foster(self, parent_id: str, child_id: str) -> bool:
        return (parent_id, child_id) in self.foster_links


def _append_unique(index: dict, key, value):
    values = index.setdefault(key, [])
    if value not in values:
        values.append(value)


def build_family_graph(edges: Iterable[Relationship]) -> FamilyGraph:
    """
    Build the parents/children/spouses indices from typed relationship edges.

    Partnerships are indexed symmetrically. Dangling ids and self-loops are kept
    as-is; callers are responsible for supplying a well-formed graph.
    """
    edges = tuple(edges)
    parents: dict[str, list[str]] = {}
    children: dict[str, list[str]] = {}
    spouses: dict[str, list[SpouseLink]] = {}
    biological: set[tuple[str, str]] = set()
    fostered: set[tuple[str, str]] = set()

    for edge in edges:
        if edge.type in PARENT_TYPES:
            _append_unique(parents, edge.target, edge.source)
            _append_unique(children, edge.source, edge.target)
            if edge.type == FOSTER_PARENT:
                fostered.add((edge.source, edge.target))
            else:
                biological.add((edge.source, edge.target))
        elif edge.type in PARTNER_TYPES:
            _append_unique(spouses, edge.source, SpouseLink(edge.target, edge.type))
            _append_unique(spouses, edge.target, SpouseLink(edge.source, edge.type))
        else:
            logger.warning("Ignoring relationship with unknown type %r", edge.type)

    logger.debug(
        "Built family graph: %d edges, %d children with parents, %d partnered people",
        len(edges),
        len(parents),
        len(spouses),
    )

    return FamilyGraph(
        parents=MappingProxyType({k: tuple(v) for k, v in parents.items()}),
        children=MappingProxyType({k: tuple(v) for k, v in children.items()}),
        spouses=MappingProxyType({k: tuple(v) for k, v in spouses.items()}),
        foster_links=frozenset(fostered - biological),
        edges=edges,
    )


def parent_unions(graph: FamilyGraph) -> list[dict]:
    """
    Group children by their (sorted) set of parents.

    Each union is {"parents": [...], "children": [...]}; siblings sharing the same
    parents hang from the same union.
    """
    unions: dict[tuple[str, ...], dict] = {}
    for child, parents in graph.parents.items():
        key = tuple(sorted(parents))
        union = unions.setdefault(key, {"parents": list(key), "children": []})
        union["children"].append(child)
    return list(unions.values())


def build_graph(people: Iterable[Person], relationships: Iterable[Relationship]) -> nx.DiGraph:
    """Build a NetworkX directed graph from people and relationships."""
    G = nx.DiGraph()

    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    for p in people:
        G.add_node(
            p.id,
            person_name=p.name,
            gender=p.gender,
            birth_date=p.birth_date,
            death_date=p.death_date,
            deceased=p.deceased,
        )

    for r in relationships:
        G.add_edge(r.source, r.target, relationship_type=r.type)

    return G


def get_ego_subgraph(G: nx.DiGraph, center_id: str, radius: int = 2) -> nx.DiGraph:
    """
    Extract a subgraph containing nodes within a given degree of a center node.

    Args:
        G: The full graph
        center_id: The person ID to center the subgraph on
        radius: Maximum distance from center (default 2)

    Returns:
        A subgraph containing only nodes within `radius` edges of `center_id`
    """
    if center_id not in G:
        raise ValueError(f"Person ID {center_id} not found in graph")

    # Undirected view so parents, children and partners are all reachable
    undirected = G.to_undirected()
    ego = nx.ego_graph(undirected, center_id, radius=radius)

    return G.subgraph(ego.nodes()).copy()


def build_union_layout_graph(G: nx.DiGraph) -> nx.DiGraph:
    """
    Build a layout graph using the union-node model for better family tree visualization.

    Creates "family nodes" (union nodes) that connect partner pairs to their children,
    so partners sit on the same generation and siblings align under one connector.

    Args:
        G: Graph from build_graph() with parent and partner edges

    Returns:
        A new graph with family nodes suitable for hierarchical layout
    """
    H = nx.DiGraph()

    for n, data in G.nodes(data=True):
        H.add_node(n, node_type="person", **data)

    partner_pairs: dict[tuple, str] = {}
    for u, v, edata in G.edges(data=True):
        rel_type = edata.get("relationship_type")
        if rel_type in PARTNER_TYPES:
            a, b = tuple(sorted([u, v], key=str))
            partner_pairs[(a, b)] = rel_type

    fam_for_pair: dict[tuple, str] = {}
    for (a, b), rel_type in partner_pairs.items():
        fam_id = f"FAM_{a}_{b}"
        fam_for_pair[(a, b)] = fam_id
        H.add_node(fam_id, node_type="family", spouses=(a, b), relationship_type=rel_type)
        H.add_edge(a, fam_id, edge_type="spouse_to_family")
        H.add_edge(b, fam_id, edge_type="spouse_to_family")

    parents_by_child: dict[str, list[str]] = {}
    foster_edges: set[tuple] = set()
    for u, v, edata in G.edges(data=True):
        rel_type = edata.get("relationship_type")
        if rel_type in PARENT_TYPES:
            parents_by_child.setdefault(v, []).append(u)
            if rel_type == FOSTER_PARENT:
                foster_edges.add((u, v))

    for child, parents in parents_by_child.items():
        parents = list(dict.fromkeys(parents))

        fam_id = None

        # Prefer a family node for a partnered pair among the parents
        if len(parents) >= 2:
            for p1, p2 in itertools.combinations(parents, 2):
                a, b = tuple(sorted([p1, p2], key=str))
                if (a, b) in fam_for_pair:
                    fam_id = fam_for_pair[(a, b)]
                    break

        if fam_id is None:
            fam_id = f"FAM_{'_'.join(map(str, sorted(parents, key=str)))}"
            if fam_id not in H:
                H.add_node(fam_id, node_type="family", spouses=tuple(parents))
                for p in parents:
                    H.add_edge(p, fam_id, edge_type="spouse_to_family")

        fostered = all((p, child) in foster_edges for p in parents)
        H.add_edge(fam_id, child, edge_type="family_to_child", fostered=fostered)

    return H
