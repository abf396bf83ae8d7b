"""Graph-definition (YAML) and GEDCOM parsing."""

from datetime import date
from pathlib import Path
import logging
import re

from ged4py import GedcomReader
import yaml

from models import (
    DIVORCED,
    FOSTER_PARENT,
    MARRIED,
    PARENT,
    PARENT_TYPES,
    RELATIONSHIP_TYPES,
    Person,
    Relationship,
    normalize_gender,
)

logger = logging.getLogger(__name__)

SCHEMA_ERROR = "YAML must contain 'people' and 'relationships' arrays"

# Document keys that map onto Person fields; anything else goes to Person.extra
PERSON_KEYS = {
    "id": "id",
    "name": "name",
    "gender": "gender",
    "birthDate": "birth_date",
    "birth_date": "birth_date",
    "deathDate": "death_date",
    "death_date": "death_date",
    "deceased": "deceased",
    "address": "address",
    "phone_number": "phone_number",
    "photo_link": "photo_link",
    "short_bio": "short_bio",
}

MONTHS = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}  # fmt: skip

# GEDCOM pedigree values that mark a non-biological parent link
FOSTER_PEDIGREES = {"ADOPTED", "FOSTER"}


# ============================================================================
# Graph-definition documents
# ============================================================================


def person_from_dict(data: dict) -> Person:
    """Build a Person from one entry of the document's `people` list."""
    if "id" not in data:
        raise ValueError(f"Person entry without an id: {data!r}")

    fields: dict = {"extra": {}}
    for key, value in data.items():
        attr = PERSON_KEYS.get(key)
        if attr is None:
            fields["extra"][key] = value
        else:
            fields[attr] = value

    fields["id"] = str(fields["id"])
    fields["gender"] = normalize_gender(fields.get("gender"))
    # YAML reads unquoted dates as date objects
    for attr in ("birth_date", "death_date"):
        if isinstance(fields.get(attr), date):
            fields[attr] = fields[attr].isoformat()
    if fields.get("address") is None:
        fields.pop("address", None)
    fields["deceased"] = bool(fields.get("deceased", False))
    return Person(**fields)


def relationship_from_dict(data: dict) -> Relationship:
    """
    Build a Relationship from one entry of the document's `relationships` list.

    For parent types the document reads child -> parent (`from` is the child,
    `to` the parent); edges are stored parent -> child.
    """
    if "from" not in data or "to" not in data:
        raise ValueError(f"Relationship entry needs 'from' and 'to': {data!r}")

    rel_type = data.get("type") or PARENT
    if rel_type not in RELATIONSHIP_TYPES:
        raise ValueError(f"Unknown relationship type {rel_type!r} in {data!r}")

    src, dst = str(data["from"]), str(data["to"])
    if rel_type in PARENT_TYPES:
        return Relationship(source=dst, target=src, type=rel_type)
    return Relationship(source=src, target=dst, type=rel_type)


def parse_definition(text: str) -> tuple[list[Person], list[Relationship]]:
    """Parse graph-definition YAML text into people and relationships."""
    data = yaml.safe_load(text)

    if not (
        isinstance(data, dict)
        and isinstance(data.get("people"), list)
        and isinstance(data.get("relationships"), list)
    ):
        raise ValueError(SCHEMA_ERROR)

    people = [person_from_dict(p) for p in data["people"]]
    relationships = [relationship_from_dict(r) for r in data["relationships"]]
    logger.debug("Parsed %d people and %d relationships", len(people), len(relationships))
    return people, relationships


def load_definition(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """Read and parse a graph-definition YAML file."""
    return parse_definition(Path(filepath).read_text(encoding="utf-8"))


def person_to_dict(person: Person) -> dict:
    data: dict = {"id": person.id, "name": person.name}
    if person.gender:
        data["gender"] = person.gender
    if person.birth_date:
        data["birthDate"] = person.birth_date
    if person.death_date:
        data["deathDate"] = person.death_date
    if person.deceased:
        data["deceased"] = True
    for key in ("address", "phone_number", "photo_link", "short_bio"):
        value = getattr(person, key)
        if value:
            data[key] = value
    data.update(person.extra)
    return data


def relationship_to_dict(rel: Relationship) -> dict:
    if rel.type in PARENT_TYPES:
        return {"from": rel.target, "to": rel.source, "type": rel.type}
    return {"from": rel.source, "to": rel.target, "type": rel.type}


def dump_definition(people: list[Person], relationships: list[Relationship]) -> str:
    """Serialize people and relationships as a graph-definition YAML document."""
    document = {
        "people": [person_to_dict(p) for p in people],
        "relationships": [relationship_to_dict(r) for r in relationships],
    }
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)


# ============================================================================
# GEDCOM import
# ============================================================================


def normalize_date(date_str: str | None) -> str | None:
    """
    Parse a GEDCOM date string into ISO format (YYYY-MM-DD).

    Handles "25 NOV 1954", "NOV 1954", "1954", "1839-08-29" and qualified forms
    such as "ABT 1905" or "BEF 12 JAN 1900". Returns None otherwise.
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?").upper()
    s = re.sub(r"^(ABT|ABOUT|BEF|AFT|EST|CAL|FROM|TO|BET|CIRCA|CA)\.?:?\s*", "", s).strip()

    match = re.match(r"^(\d{4})-(\d{2})-(\d{2})$", s)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return f"{year:04d}-{max(month, 1):02d}-{max(day, 1):02d}"

    match = re.match(r"^(?:(\d{1,2})\s+)?([A-Z]{3})[A-Z]*\.?,?\s*(\d{4})$", s)
    if match:
        month = MONTHS.get(match.group(2))
        if month:
            day = int(match.group(1) or 1)
            return f"{int(match.group(3)):04d}-{month:02d}-{day:02d}"

    match = re.match(r"^(\d{4})$", s)
    if match:
        return f"{int(match.group(1)):04d}-01-01"

    return None


def gedcom_id(xref_id: str) -> str:
    """Turn a GEDCOM xref like '@I_347421849@' into a person id ('I_347421849')."""
    ident = xref_id.strip().strip("@")
    if not ident:
        raise ValueError(f"No id found in: {xref_id!r}")
    return ident


def extract_name(indi) -> str:
    """Extract the display name from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return "Unknown"

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        parts = [p for p in name_rec.value if p]
        return " ".join(parts) if parts else "Unknown"

    return str(name_rec.value).replace("/", "").strip() or "Unknown"


def extract_event_date(indi, tag: str) -> tuple[bool, str | None]:
    """Whether the event (BIRT, DEAT, ...) is recorded, and its ISO date if parseable."""
    event = indi.sub_tag(tag)
    if event is None:
        return (False, None)

    date_rec = event.sub_tag("DATE")
    # ged4py may return DateValue objects
    date_val = str(date_rec.value) if date_rec and date_rec.value else None
    return (True, normalize_date(date_val))


def foster_families(indi) -> set[str]:
    """Family ids this individual joined through adoption or fostering."""
    found = set()
    for famc in indi.sub_tags("FAMC", follow=False):
        pedigree = famc.sub_tag_value("PEDI")
        # ged4py wraps "@F1@" values in Pointer objects when not following them
        xref = getattr(famc.value, "value", famc.value)
        if xref and pedigree and str(pedigree).upper() in FOSTER_PEDIGREES:
            found.add(gedcom_id(xref))
    return found


def read_gedcom(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """
    Extract people and relationships from a GEDCOM file.

    FAM records become a married (or divorced, when a DIV event exists) partnership
    between HUSB and WIFE, plus a parent edge from each spouse to every CHIL.
    """
    reader = GedcomReader(str(filepath))
    people: list[Person] = []
    relationships: list[Relationship] = []
    fostered_into: dict[str, set[str]] = {}

    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            logger.warning("Skipping INDI record without an xref id")
            continue

        person_id = gedcom_id(rec.xref_id)
        sex = rec.sub_tag("SEX")
        _, birth_date = extract_event_date(rec, "BIRT")
        died, death_date = extract_event_date(rec, "DEAT")

        people.append(
            Person(
                id=person_id,
                name=extract_name(rec),
                gender=normalize_gender(sex.value if sex else None),
                birth_date=birth_date,
                death_date=death_date,
                deceased=died,
            )
        )
        fostered_into[person_id] = foster_families(rec)

    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue
        fam_id = gedcom_id(rec.xref_id)

        husb = rec.sub_tag("HUSB")
        wife = rec.sub_tag("WIFE")
        partners = [gedcom_id(p.xref_id) for p in (husb, wife) if p is not None and p.xref_id]

        if len(partners) == 2:
            rel_type = DIVORCED if rec.sub_tag("DIV") is not None else MARRIED
            relationships.append(Relationship(partners[0], partners[1], rel_type))

        for child in rec.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            child_id = gedcom_id(child.xref_id)
            if child_id not in fostered_into:
                logger.warning("Family %s lists unknown child %s", fam_id, child_id)
            rel_type = FOSTER_PARENT if fam_id in fostered_into.get(child_id, ()) else PARENT
            for parent_id in partners:
                relationships.append(Relationship(parent_id, child_id, rel_type))

    return people, relationships
