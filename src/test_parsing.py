"""Tests for graph-definition and GEDCOM parsing."""

import pytest
import yaml

from models import DIVORCED, FOSTER_PARENT, MARRIED, NOT_MARRIED, PARENT, Person, Relationship
from parsing import (
    SCHEMA_ERROR,
    dump_definition,
    gedcom_id,
    load_definition,
    normalize_date,
    parse_definition,
    read_gedcom,
    relationship_from_dict,
)
from validation import validate_definition


class TestDefinition:
    def test_load(self, definition_file):
        people, relationships = load_definition(definition_file)
        assert len(people) == 19
        assert len(relationships) == 24

    def test_person_fields(self):
        people, _ = parse_definition(
            """
people:
  - id: p1
    name: Siti
    gender: Female
    birthDate: "1950-04-02"
    deceased: true
    short_bio: Teacher
    address:
      - {address: Jl. Merdeka 1, gmap_link: "https://maps.example/1"}
    nickname: Ti
relationships: []
"""
        )
        p = people[0]
        assert p.id == "p1"
        assert p.gender == "female"
        assert p.birth_date == "1950-04-02"
        assert p.deceased is True
        assert p.short_bio == "Teacher"
        assert p.address[0]["address"] == "Jl. Merdeka 1"
        assert p.extra == {"nickname": "Ti"}

    def test_unquoted_dates_stay_strings(self):
        people, relationships = parse_definition(
            """
people:
  - {id: p, name: Parent, birthDate: 1950-01-01, deathDate: 2020-12-31}
  - {id: c, name: Child, birthDate: 1975-06-01}
relationships:
  - {from: c, to: p}
"""
        )
        assert people[0].birth_date == "1950-01-01"
        assert people[0].death_date == "2020-12-31"
        assert people[1].birth_date == "1975-06-01"
        assert validate_definition(people, relationships) == []

    def test_numeric_ids_become_strings(self):
        people, relationships = parse_definition(
            "people: [{id: 1}, {id: 2}]\nrelationships: [{from: 2, to: 1}]"
        )
        assert people[0].id == "1"
        assert relationships == [Relationship("1", "2", PARENT)]

    def test_parent_direction_is_child_to_parent(self):
        rel = relationship_from_dict({"from": "kid", "to": "mom"})
        assert rel == Relationship(source="mom", target="kid", type=PARENT)

    def test_foster_direction(self):
        rel = relationship_from_dict({"from": "kid", "to": "mom", "type": "foster_parent"})
        assert rel == Relationship(source="mom", target="kid", type=FOSTER_PARENT)

    @pytest.mark.parametrize("rel_type", [MARRIED, DIVORCED, NOT_MARRIED])
    def test_partner_direction(self, rel_type):
        rel = relationship_from_dict({"from": "a", "to": "b", "type": rel_type})
        assert rel == Relationship(source="a", target="b", type=rel_type)

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown relationship type"):
            relationship_from_dict({"from": "a", "to": "b", "type": "friend"})

    def test_missing_endpoint(self):
        with pytest.raises(ValueError):
            relationship_from_dict({"from": "a"})

    def test_missing_person_id(self):
        with pytest.raises(ValueError):
            parse_definition("people: [{name: Nobody}]\nrelationships: []")

    @pytest.mark.parametrize(
        "text",
        [
            "people: []",
            "relationships: []",
            "people: {}\nrelationships: []",
            "- just a list",
            "",
        ],
    )
    def test_schema_check(self, text):
        with pytest.raises(ValueError, match=SCHEMA_ERROR):
            parse_definition(text)

    def test_invalid_yaml(self):
        with pytest.raises(yaml.YAMLError):
            parse_definition("people: [unclosed")

    def test_dump_then_parse(self, family):
        people, relationships = family
        again_people, again_relationships = parse_definition(dump_definition(people, relationships))
        assert again_relationships == relationships
        assert [p.id for p in again_people] == [p.id for p in people]
        assert again_people[10].birth_date == "1980-02-01"

    def test_dump_uses_document_direction(self):
        text = dump_definition(
            [Person(id="mom", name="Mom"), Person(id="kid", name="Kid")],
            [Relationship("mom", "kid", PARENT)],
        )
        assert yaml.safe_load(text)["relationships"] == [
            {"from": "kid", "to": "mom", "type": "parent"}
        ]


class TestDates:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("25 NOV 1954", "1954-11-25"),
            ("NOV 1954", "1954-11-01"),
            ("November 1954", "1954-11-01"),
            ("1698", "1698-01-01"),
            ("ABT 1905", "1905-01-01"),
            ("BEF 12 JAN 1900", "1900-01-12"),
            ("(1839-08-29)", "1839-08-29"),
            ("1746-00-00", "1746-01-01"),
            ("1789?", "1789-01-01"),
            ("sometime", None),
            ("", None),
            (None, None),
        ],
    )
    def test_normalize_date(self, raw, expected):
        assert normalize_date(raw) == expected


def test_gedcom_id():
    assert gedcom_id("@I_347421849@") == "I_347421849"
    with pytest.raises(ValueError):
        gedcom_id("@@")


GEDCOM = """0 HEAD
1 CHAR UTF-8
1 GEDC
2 VERS 5.5.1
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 DATE 25 NOV 1954
0 @I2@ INDI
1 NAME Mary /Jones/
1 SEX F
1 DEAT Y
0 @I3@ INDI
1 NAME Ann /Smith/
1 SEX F
1 FAMC @F1@
0 @I4@ INDI
1 NAME Ben /Smith/
1 SEX M
1 FAMC @F1@
2 PEDI adopted
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 DIV Y
1 CHIL @I3@
1 CHIL @I4@
0 TRLR
"""


def test_read_gedcom(tmp_path):
    path = tmp_path / "tree.ged"
    path.write_text(GEDCOM, encoding="utf-8")

    people, relationships = read_gedcom(path)
    by_id = {p.id: p for p in people}

    assert by_id["I1"].name == "John Smith"
    assert by_id["I1"].gender == "male"
    assert by_id["I1"].birth_date == "1954-11-25"
    assert by_id["I2"].deceased is True
    assert by_id["I3"].deceased is False

    assert Relationship("I1", "I2", DIVORCED) in relationships
    assert Relationship("I1", "I3", PARENT) in relationships
    assert Relationship("I2", "I3", PARENT) in relationships
    assert Relationship("I1", "I4", FOSTER_PARENT) in relationships
    assert len(relationships) == 5
