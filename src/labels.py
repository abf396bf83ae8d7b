"""Kinship terms and their display strings."""

from enum import Enum

DEFAULT_LANGUAGE = "en"


class Kinship(Enum):
    """Every relationship the resolver can report. Values are the English labels."""

    SELF = "Self"

    FATHER = "Father"
    MOTHER = "Mother"
    PARENT = "Parent"
    FOSTER_FATHER = "Foster Father"
    FOSTER_MOTHER = "Foster Mother"
    FOSTER_PARENT = "Foster Parent"
    SON = "Son"
    DAUGHTER = "Daughter"
    CHILD = "Child"
    FOSTER_CHILD = "Foster Child"

    GRANDFATHER = "Grandfather"
    GRANDMOTHER = "Grandmother"
    GRANDPARENT = "Grandparent"
    GRANDSON = "Grandson"
    GRANDDAUGHTER = "Granddaughter"
    GRANDCHILD = "Grandchild"
    GREAT_GRANDFATHER = "Great-Grandfather"
    GREAT_GRANDMOTHER = "Great-Grandmother"
    GREAT_GRANDPARENT = "Great-Grandparent"
    GREAT_GREAT_GRANDPARENT = "Great-Great-Grandparent"
    GREAT_GREAT_GREAT_GRANDPARENT = "Great-Great-Great-Grandparent"
    GREAT_GRANDCHILD = "Great-Grandchild"

    BROTHER = "Brother"
    SISTER = "Sister"
    SIBLING = "Sibling"
    UNCLE = "Uncle"
    AUNT = "Aunt"
    AUNT_UNCLE = "Aunt/Uncle"
    NEPHEW = "Nephew"
    NIECE = "Niece"
    NIECE_NEPHEW = "Niece/Nephew"
    GRANDNEPHEW_NIECE = "Grandnephew/niece"
    COUSIN = "Cousin"
    SECOND_COUSIN = "Second Cousin"

    HUSBAND = "Husband"
    WIFE = "Wife"
    SPOUSE = "Spouse"
    EX_HUSBAND = "Ex-Husband"
    EX_WIFE = "Ex-Wife"
    EX_SPOUSE = "Ex-Spouse"

    PARENT_IN_LAW = "Parent-in-Law"
    CHILD_IN_LAW = "Son/Daughter-in-Law"
    SIBLING_IN_LAW = "Sibling-in-Law"
    CO_PARENT_IN_LAW = "Co-Parent-in-Law"
    GRANDFATHER_IN_LAW = "Grandfather-in-Law"
    GRANDMOTHER_IN_LAW = "Grandmother-in-Law"
    GRANDPARENT_IN_LAW = "Grandparent-in-Law"
    COUSIN_IN_LAW = "Cousin-in-Law"
    GRANDCHILD_IN_LAW = "Grandchild-in-Law"
    GREAT_GRANDCHILD_IN_LAW = "Great-Grandchild-in-Law"

    RELATIVE = "Relative"

    @property
    def is_in_law(self) -> bool:
        return self in IN_LAW_TERMS


IN_LAW_TERMS = frozenset(
    {
        Kinship.PARENT_IN_LAW,
        Kinship.CHILD_IN_LAW,
        Kinship.SIBLING_IN_LAW,
        Kinship.CO_PARENT_IN_LAW,
        Kinship.GRANDFATHER_IN_LAW,
        Kinship.GRANDMOTHER_IN_LAW,
        Kinship.GRANDPARENT_IN_LAW,
        Kinship.COUSIN_IN_LAW,
        Kinship.GRANDCHILD_IN_LAW,
        Kinship.GREAT_GRANDCHILD_IN_LAW,
    }
)

INDONESIAN = {
    Kinship.SELF: "Diri Sendiri",
    Kinship.FATHER: "Ayah",
    Kinship.MOTHER: "Ibu",
    Kinship.PARENT: "Orang Tua",
    Kinship.FOSTER_FATHER: "Ayah Angkat",
    Kinship.FOSTER_MOTHER: "Ibu Angkat",
    Kinship.FOSTER_PARENT: "Orang Tua Angkat",
    Kinship.SON: "Putra",
    Kinship.DAUGHTER: "Putri",
    Kinship.CHILD: "Anak",
    Kinship.FOSTER_CHILD: "Anak Angkat",
    Kinship.GRANDFATHER: "Kakek",
    Kinship.GRANDMOTHER: "Nenek",
    Kinship.GRANDPARENT: "Kakek/Nenek",
    Kinship.GRANDSON: "Cucu Laki-laki",
    Kinship.GRANDDAUGHTER: "Cucu Perempuan",
    Kinship.GRANDCHILD: "Cucu",
    Kinship.GREAT_GRANDFATHER: "Kakek Buyut",
    Kinship.GREAT_GRANDMOTHER: "Nenek Buyut",
    Kinship.GREAT_GRANDPARENT: "Buyut",
    Kinship.GREAT_GREAT_GRANDPARENT: "Canggah",
    Kinship.GREAT_GREAT_GREAT_GRANDPARENT: "Wareng",
    Kinship.GREAT_GRANDCHILD: "Cicit",
    Kinship.BROTHER: "Saudara Laki-laki",
    Kinship.SISTER: "Saudara Perempuan",
    Kinship.SIBLING: "Saudara Kandung",
    Kinship.UNCLE: "Paman",
    Kinship.AUNT: "Bibi",
    Kinship.AUNT_UNCLE: "Paman/Bibi",
    Kinship.NEPHEW: "Keponakan Laki-laki",
    Kinship.NIECE: "Keponakan Perempuan",
    Kinship.NIECE_NEPHEW: "Keponakan",
    Kinship.GRANDNEPHEW_NIECE: "Cucu Keponakan",
    Kinship.COUSIN: "Sepupu",
    Kinship.SECOND_COUSIN: "Sepupu",
    Kinship.HUSBAND: "Suami",
    Kinship.WIFE: "Istri",
    Kinship.SPOUSE: "Pasangan",
    Kinship.EX_HUSBAND: "Mantan Suami",
    Kinship.EX_WIFE: "Mantan Istri",
    Kinship.EX_SPOUSE: "Mantan Pasangan",
    Kinship.PARENT_IN_LAW: "Mertua",
    Kinship.CHILD_IN_LAW: "Menantu",
    Kinship.SIBLING_IN_LAW: "Ipar",
    Kinship.CO_PARENT_IN_LAW: "Besan",
    Kinship.GRANDFATHER_IN_LAW: "Kakek Mertua",
    Kinship.GRANDMOTHER_IN_LAW: "Nenek Mertua",
    Kinship.GRANDPARENT_IN_LAW: "Kakek/Nenek Mertua",
    Kinship.COUSIN_IN_LAW: "Sepupu Ipar",
    Kinship.GRANDCHILD_IN_LAW: "Cucu Menantu",
    Kinship.GREAT_GRANDCHILD_IN_LAW: "Cicit Menantu",
    Kinship.RELATIVE: "Kerabat",
}

TRANSLATIONS: dict[str, dict[Kinship, str]] = {
    "en": {k: k.value for k in Kinship},
    "id": INDONESIAN,
}


def display_label(kinship: Kinship, language: str = DEFAULT_LANGUAGE) -> str:
    """Materialize a kinship term as a display string in the given language."""
    try:
        table = TRANSLATIONS[language]
    except KeyError:
        raise ValueError(
            f"Unsupported language {language!r}; expected one of {sorted(TRANSLATIONS)}"
        ) from None
    return table[kinship]
