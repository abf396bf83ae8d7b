"""
Kinship inference between a point-of-view (POV) person and a target person.

Blood relationships are classified from a generational coordinate: the number
of generations up from the POV to the nearest common ancestor, and down from
that ancestor to the target. When no common ancestor exists, a fixed sequence
of affinal (in-law) searches is tried, each rooted at a marriage one hop away
from the POV or the target.
"""

from collections import deque
import logging
from typing import Iterable, Mapping, NamedTuple

from graph import FamilyGraph, build_family_graph
from labels import DEFAULT_LANGUAGE, Kinship, display_label
from models import DIVORCED, FEMALE, MALE, MARRIED, NOT_MARRIED, Person, Relationship, normalize_gender

logger = logging.getLogger(__name__)


class Coordinate(NamedTuple):
    up: int  # generations from the POV up to the ancestor
    down: int  # generations from the ancestor down to the target
    ancestor: str


def _same(term: Kinship) -> tuple[Kinship, Kinship, Kinship]:
    return (term, term, term)


# (up, down) -> (female, male, neutral)
BLOOD_TERMS = {
    (0, 0): _same(Kinship.SELF),
    (1, 0): (Kinship.MOTHER, Kinship.FATHER, Kinship.PARENT),
    (2, 0): (Kinship.GRANDMOTHER, Kinship.GRANDFATHER, Kinship.GRANDPARENT),
    (3, 0): (Kinship.GREAT_GRANDMOTHER, Kinship.GREAT_GRANDFATHER, Kinship.GREAT_GRANDPARENT),
    (4, 0): _same(Kinship.GREAT_GREAT_GRANDPARENT),
    (5, 0): _same(Kinship.GREAT_GREAT_GREAT_GRANDPARENT),
    (0, 1): (Kinship.DAUGHTER, Kinship.SON, Kinship.CHILD),
    (0, 2): (Kinship.GRANDDAUGHTER, Kinship.GRANDSON, Kinship.GRANDCHILD),
    (0, 3): _same(Kinship.GREAT_GRANDCHILD),
    (1, 1): (Kinship.SISTER, Kinship.BROTHER, Kinship.SIBLING),
    (2, 1): (Kinship.AUNT, Kinship.UNCLE, Kinship.AUNT_UNCLE),
    (1, 2): (Kinship.NIECE, Kinship.NEPHEW, Kinship.NIECE_NEPHEW),
    (2, 2): _same(Kinship.COUSIN),
    (3, 3): _same(Kinship.SECOND_COUSIN),
    # Great-aunts and great-uncles are addressed as grandparents
    (3, 1): (Kinship.GRANDMOTHER, Kinship.GRANDFATHER, Kinship.GRANDPARENT),
    (1, 3): _same(Kinship.GRANDNEPHEW_NIECE),
    (3, 2): (Kinship.AUNT, Kinship.UNCLE, Kinship.AUNT_UNCLE),
    (2, 3): (Kinship.NIECE, Kinship.NEPHEW, Kinship.NIECE_NEPHEW),
}

PARTNER_TERMS = {
    MARRIED: (Kinship.WIFE, Kinship.HUSBAND, Kinship.SPOUSE),
    DIVORCED: (Kinship.EX_WIFE, Kinship.EX_HUSBAND, Kinship.EX_SPOUSE),
    NOT_MARRIED: _same(Kinship.RELATIVE),
}

# Coordinate (POV -> target's spouse)
SPOUSE_OF_RELATIVE_TERMS = {
    (1, 0): (Kinship.MOTHER, Kinship.FATHER, Kinship.PARENT),
    (2, 0): (Kinship.GRANDMOTHER, Kinship.GRANDFATHER, Kinship.GRANDPARENT),
    (1, 1): _same(Kinship.SIBLING_IN_LAW),
    (0, 1): _same(Kinship.CHILD_IN_LAW),
    (0, 2): _same(Kinship.GRANDCHILD_IN_LAW),
    (0, 3): _same(Kinship.GREAT_GRANDCHILD_IN_LAW),
    (2, 1): (Kinship.AUNT, Kinship.UNCLE, Kinship.AUNT_UNCLE),
    (3, 2): (Kinship.AUNT, Kinship.UNCLE, Kinship.AUNT_UNCLE),
    (1, 2): (Kinship.NIECE, Kinship.NEPHEW, Kinship.NIECE_NEPHEW),
    (2, 2): _same(Kinship.COUSIN_IN_LAW),
}

# Coordinate (POV's spouse -> target)
RELATIVE_OF_SPOUSE_TERMS = {
    (1, 0): _same(Kinship.PARENT_IN_LAW),
    (2, 0): (Kinship.GRANDMOTHER_IN_LAW, Kinship.GRANDFATHER_IN_LAW, Kinship.GRANDPARENT_IN_LAW),
    (1, 1): _same(Kinship.SIBLING_IN_LAW),
    (2, 1): (Kinship.AUNT, Kinship.UNCLE, Kinship.AUNT_UNCLE),
    (2, 2): _same(Kinship.COUSIN_IN_LAW),
    (1, 2): (Kinship.NIECE, Kinship.NEPHEW, Kinship.NIECE_NEPHEW),
    (2, 3): (Kinship.NIECE, Kinship.NEPHEW, Kinship.NIECE_NEPHEW),
    # Step-children are labelled like children
    (0, 1): (Kinship.DAUGHTER, Kinship.SON, Kinship.CHILD),
    (0, 2): (Kinship.GRANDDAUGHTER, Kinship.GRANDSON, Kinship.GRANDCHILD),
}

# Coordinate (POV's spouse -> target's spouse)
SPOUSE_OF_SPOUSES_RELATIVE_TERMS = {
    (1, 1): _same(Kinship.SIBLING_IN_LAW),
    (2, 2): _same(Kinship.COUSIN_IN_LAW),
}

# Coordinate (spouse of POV's aunt/uncle or parent's cousin -> target)
MARRIED_IN_FAMILY_TERMS = {
    (1, 0): (Kinship.GRANDMOTHER, Kinship.GRANDFATHER, Kinship.GRANDPARENT),
    (2, 0): _same(Kinship.GREAT_GRANDPARENT),
    (1, 1): (Kinship.AUNT, Kinship.UNCLE, Kinship.AUNT_UNCLE),
}

# Coordinate (spouse of POV's cousin -> target)
COUSIN_SPOUSE_FAMILY_TERMS = {
    (1, 0): (Kinship.AUNT, Kinship.UNCLE, Kinship.AUNT_UNCLE),
    (2, 0): (Kinship.GRANDMOTHER, Kinship.GRANDFATHER, Kinship.GRANDPARENT),
    (1, 1): _same(Kinship.COUSIN),
}


def _pick(terms: tuple[Kinship, Kinship, Kinship], gender: str | None) -> Kinship:
    female, male, neutral = terms
    if gender == FEMALE:
        return female
    if gender == MALE:
        return male
    return neutral


def ancestors_of(person_id: str, parents: Mapping[str, Iterable[str]]) -> dict[str, int]:
    """
    Breadth-first walk up the parent index.

    Returns {ancestor_id: generations}, including the person at distance 0. The
    first (shortest) distance found for an ancestor is kept, and the map doubles
    as the visited set so a parent cycle cannot loop forever.
    """
    distances = {person_id: 0}
    queue = deque([person_id])
    while queue:
        current = queue.popleft()
        for parent in parents.get(current, ()):
            if parent not in distances:
                distances[parent] = distances[current] + 1
                queue.append(parent)
    return distances


def _closest(pov_ancestors: dict[str, int], target_ancestors: dict[str, int]) -> Coordinate | None:
    # Smallest up + down wins; ties go to the smaller up, then to BFS discovery order
    best = None
    for ancestor, up in pov_ancestors.items():
        down = target_ancestors.get(ancestor)
        if down is None:
            continue
        if best is None or (up + down, up) < (best.up + best.down, best.up):
            best = Coordinate(up, down, ancestor)
    return best


def nearest_common_ancestor(
    pov_id: str, target_id: str, parents: Mapping[str, Iterable[str]]
) -> Coordinate | None:
    """Coordinate of the closest shared ancestor, or None when the two share none."""
    return _closest(ancestors_of(pov_id, parents), ancestors_of(target_id, parents))


def classify_blood(up: int, down: int, gender: str | None) -> Kinship:
    """Map a blood coordinate to a kinship term; untabulated distances are just relatives."""
    terms = BLOOD_TERMS.get((up, down))
    if terms is None:
        return Kinship.RELATIVE
    return _pick(terms, gender)


def aunts_and_uncles(person_id: str, graph: FamilyGraph) -> list[str]:
    """Blood aunts/uncles: the grandparents' children other than the person's own parents."""
    own_parents = graph.parents_of(person_id)
    found: list[str] = []
    for parent in own_parents:
        for grandparent in graph.parents_of(parent):
            for sibling in graph.children_of(grandparent):
                if sibling in own_parents or sibling == person_id or sibling in found:
                    continue
                found.append(sibling)
    return found


class _Lineage:
    """Ancestor maps memoized for the duration of a single query."""

    def __init__(self, graph: FamilyGraph):
        self.graph = graph
        self._maps: dict[str, dict[str, int]] = {}

    def ancestors(self, person_id: str) -> dict[str, int]:
        if person_id not in self._maps:
            self._maps[person_id] = ancestors_of(person_id, self.graph.parents)
        return self._maps[person_id]

    def coordinate(self, a: str, b: str) -> Coordinate | None:
        return _closest(self.ancestors(a), self.ancestors(b))


def _lookup(lineage: _Lineage, a: str, b: str, table: dict, gender: str | None) -> Kinship | None:
    coord = lineage.coordinate(a, b)
    if coord is None:
        return None
    terms = table.get((coord.up, coord.down))
    return _pick(terms, gender) if terms else None


def _spouse_of_relative(pov_id, target_id, lineage, gender):
    for spouse in lineage.graph.married_spouses_of(target_id):
        found = _lookup(lineage, pov_id, spouse, SPOUSE_OF_RELATIVE_TERMS, gender)
        if found:
            return found
    return None


def _relative_of_spouse(pov_id, target_id, lineage, gender):
    graph = lineage.graph
    own_spouses = graph.married_spouses_of(pov_id)
    for spouse in own_spouses:
        found = _lookup(lineage, spouse, target_id, RELATIVE_OF_SPOUSE_TERMS, gender)
        if found:
            return found
    for spouse in own_spouses:
        for target_spouse in graph.married_spouses_of(target_id):
            found = _lookup(lineage, spouse, target_spouse, SPOUSE_OF_SPOUSES_RELATIVE_TERMS, gender)
            if found:
                return found
    return None


def _blood_relatives_at(pov_id: str, lineage: _Lineage, up: int, down: int) -> list[str]:
    """Blood relatives whose coordinate from the POV is exactly (up, down)."""
    found: list[str] = []
    for ancestor, distance in lineage.ancestors(pov_id).items():
        if distance != up:
            continue
        generation = [ancestor]
        for _ in range(down):
            generation = [c for p in generation for c in lineage.graph.children_of(p)]
        for relative in generation:
            if relative in found:
                continue
            coord = lineage.coordinate(pov_id, relative)
            if coord is not None and (coord.up, coord.down) == (up, down):
                found.append(relative)
    return found


def _married_in_family(pov_id, target_id, lineage, gender):
    graph = lineage.graph
    searches = (
        (aunts_and_uncles(pov_id, graph), MARRIED_IN_FAMILY_TERMS),
        (_blood_relatives_at(pov_id, lineage, 2, 2), COUSIN_SPOUSE_FAMILY_TERMS),
        (_blood_relatives_at(pov_id, lineage, 3, 2), MARRIED_IN_FAMILY_TERMS),
    )
    for relatives, table in searches:
        for relative in relatives:
            for in_law in graph.married_spouses_of(relative):
                found = _lookup(lineage, in_law, target_id, table, gender)
                if found:
                    return found
    return None


def _co_parent_in_law(pov_id, target_id, lineage, gender):
    graph = lineage.graph
    children = graph.children_of(pov_id)
    descendants = list(children)
    for child in children:
        descendants.extend(g for g in graph.children_of(child) if g not in descendants)

    target_parents = set(graph.parents_of(target_id))
    for descendant in descendants:
        for in_law in graph.married_spouses_of(descendant):
            if in_law == target_id:
                continue
            if lineage.ancestors(in_law).get(target_id, 0) > 0:
                return Kinship.CO_PARENT_IN_LAW
            if target_parents & set(graph.parents_of(in_law)):
                return Kinship.CO_PARENT_IN_LAW
    return None


AFFINAL_PASSES = (
    _spouse_of_relative,
    _relative_of_spouse,
    _married_in_family,
    _co_parent_in_law,
)


def resolve_kinship(
    pov_id: str, target_id: str, graph: FamilyGraph, genders: Mapping[str, str | None]
) -> Kinship:
    """
    Kinship of `target_id` as seen from `pov_id`.

    Never raises for well-formed ids; anything unclassified is Kinship.RELATIVE.
    """
    if pov_id == target_id:
        return Kinship.SELF

    gender = genders.get(target_id)

    partnership = graph.partner_type(pov_id, target_id)
    if partnership is not None:
        return _pick(PARTNER_TERMS[partnership], gender)

    lineage = _Lineage(graph)
    coord = lineage.coordinate(pov_id, target_id)
    if coord is not None:
        if (coord.up, coord.down) == (1, 0) and graph.is_foster(target_id, pov_id):
            return _pick((Kinship.FOSTER_MOTHER, Kinship.FOSTER_FATHER, Kinship.FOSTER_PARENT), gender)
        if (coord.up, coord.down) == (0, 1) and graph.is_foster(pov_id, target_id):
            return Kinship.FOSTER_CHILD
        return classify_blood(coord.up, coord.down, gender)

    for search in AFFINAL_PASSES:
        found = search(pov_id, target_id, lineage, gender)
        if found is not None:
            logger.debug("%s -> %s matched %s: %s", pov_id, target_id, search.__name__, found.name)
            return found

    return Kinship.RELATIVE


def gender_index(people: Iterable[Person | Mapping]) -> dict[str, str | None]:
    """Map person id -> normalized gender; accepts Person objects or plain dicts."""
    genders = {}
    for p in people:
        if isinstance(p, Mapping):
            genders[str(p["id"])] = normalize_gender(p.get("gender"))
        else:
            genders[p.id] = normalize_gender(p.gender)
    return genders


def label_all(
    pov_id: str | None,
    graph: FamilyGraph,
    people: Iterable[Person | Mapping],
    language: str = DEFAULT_LANGUAGE,
) -> dict[str, str | None]:
    """Label every person relative to one POV; all None when no POV is selected."""
    genders = gender_index(people)
    if not pov_id:
        return {person_id: None for person_id in genders}
    return {
        person_id: display_label(resolve_kinship(pov_id, person_id, graph, genders), language)
        for person_id in genders
    }


def resolve(
    pov_id: str | None,
    target_id: str | None,
    edges: Iterable[Relationship],
    people: Iterable[Person | Mapping],
    language: str = DEFAULT_LANGUAGE,
) -> str | None:
    """
    Kinship label of `target_id` relative to `pov_id`.

    Builds the graph indices on every call; use label_all() with a prebuilt
    FamilyGraph when labelling a whole tree. Returns None when either id is missing.
    """
    if not pov_id or not target_id:
        return None
    graph = build_family_graph(edges)
    kinship = resolve_kinship(pov_id, target_id, graph, gender_index(people))
    return display_label(kinship, language)
