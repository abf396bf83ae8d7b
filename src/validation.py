"""Graph validation for family tree data."""

from collections import Counter

import networkx as nx

from graph import build_graph
from models import PARENT_TYPES, Person, Relationship

MAX_PARENTS = 2


def validate_graph(G: nx.DiGraph) -> list[str]:
    """
    Validate the family tree graph for:
    - Cycles in parent-child relationships
    - Relationships that reference unknown people or the same person twice
    - People with more than two parents
    - Impossible ages (child born before parent) and death before birth

    Returns a list of warning messages. The kinship resolver does not require a
    clean result; this is a lint pass for editors and importers.
    """
    warnings: list[str] = []

    parent_edges = [
        (u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") in PARENT_TYPES
    ]
    parent_graph = nx.DiGraph(parent_edges)

    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    # Nodes created only by an edge never received person attributes
    for node, data in G.nodes(data=True):
        if "person_name" not in data:
            warnings.append(f"Relationship references unknown person: {node}")

    for u, v, data in G.edges(data=True):
        if u == v:
            warnings.append(f"Self-referencing {data.get('relationship_type')} relationship: {u}")

    for child, count in Counter(v for _, v in parent_edges).items():
        if count > MAX_PARENTS:
            warnings.append(f"{_name(G, child)} has {count} parents (expected at most {MAX_PARENTS})")

    # birth_date is ISO format (YYYY-MM-DD) which can be compared as strings
    for parent, child in parent_edges:
        parent_birth = G.nodes[parent].get("birth_date")
        child_birth = G.nodes[child].get("birth_date")

        if not (parent_birth and child_birth):
            continue
        if child_birth < parent_birth:
            warnings.append(
                f"Impossible: {_name(G, child)} born before parent {_name(G, parent)}"
            )
            continue
        try:
            if int(child_birth[:4]) - int(parent_birth[:4]) < 12:
                warnings.append(
                    f"Suspicious: {_name(G, parent)} was less than 12 years "
                    f"old when {_name(G, child)} was born"
                )
        except ValueError:
            pass

    for node, data in G.nodes(data=True):
        birth = data.get("birth_date")
        death = data.get("death_date")

        if birth and death and death < birth:
            warnings.append(f"Impossible: {_name(G, node)} died before being born")

    return warnings


def validate_definition(people: list[Person], relationships: list[Relationship]) -> list[str]:
    """Validate a parsed graph definition, including duplicate person ids."""
    warnings = [
        f"Duplicate person id: {person_id}"
        for person_id, count in Counter(p.id for p in people).items()
        if count > 1
    ]
    return warnings + validate_graph(build_graph(people, relationships))


def _name(G: nx.DiGraph, node) -> str:
    return G.nodes[node].get("person_name") or str(node)
