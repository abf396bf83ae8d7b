"""Data classes for family tree entities."""

from dataclasses import dataclass, field

# Relationship types as they appear in the graph-definition document
PARENT = "parent"
FOSTER_PARENT = "foster_parent"
MARRIED = "married"
DIVORCED = "divorced"
NOT_MARRIED = "not_married"

PARENT_TYPES = frozenset({PARENT, FOSTER_PARENT})
PARTNER_TYPES = frozenset({MARRIED, DIVORCED, NOT_MARRIED})
RELATIONSHIP_TYPES = PARENT_TYPES | PARTNER_TYPES

MALE = "male"
FEMALE = "female"


def normalize_gender(value) -> str | None:
    """Map free-form sex/gender values ("M", "female", "F", ...) onto male/female."""
    if value is None:
        return None
    g = str(value).strip().lower()
    if g in {"male", "m", "man"}:
        return MALE
    if g in {"female", "f", "woman"}:
        return FEMALE
    return None


@dataclass
class Person:
    id: str
    name: str = ""
    gender: str | None = None
    birth_date: str | None = None  # ISO format YYYY-MM-DD or None
    death_date: str | None = None
    deceased: bool = False
    address: list[dict] = field(default_factory=list)
    phone_number: dict | None = None
    photo_link: str | None = None
    short_bio: str | None = None
    extra: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Relationship:
    source: str  # parent for parent types, either partner otherwise
    target: str
    type: str = PARENT

    @property
    def is_partnership(self) -> bool:
        return self.type in PARTNER_TYPES
