"""Shared fixtures: a four-generation family with several married-in households."""

import pytest

from graph import build_family_graph
from kinship import gender_index
from parsing import parse_definition

# Parent relationships read child -> parent (`from` is the child)
FAMILY_YAML = """
people:
  - {id: 1_gp, name: Raden, gender: male}
  - {id: 1_grandma, name: Siti, gender: female}
  - {id: 1_sastro, name: Sastro, gender: male}
  - {id: 1_bapak, name: Bapak, gender: male}
  - {id: 2_budi, name: Budi, gender: male}
  - {id: 2_sri, name: Sri, gender: female}
  - {id: 2_agus, name: Agus, gender: male}
  - {id: 2_ani, name: Ani, gender: female}
  - {id: 2_herman, name: Herman, gender: male}
  - {id: 2_joko, name: Joko, gender: male}
  - {id: 3_eko, name: Eko, gender: male, birthDate: 1980-02-01}
  - {id: 3_dewi, name: Dewi, gender: female}
  - {id: 3_tono, name: Tono, gender: male}
  - {id: 3_lina, name: Lina, gender: female}
  - {id: 3_rina, name: Rina, gender: female}
  - {id: 3_dika, name: Dika, gender: male}
  - {id: 3_sari, name: Sari, gender: female}
  - {id: 4_alya, name: Alya, gender: female}
  - {id: 4_rini, name: Rini, gender: female}
relationships:
  - {from: 1_gp, to: 1_grandma, type: married}
  - {from: 2_budi, to: 1_gp}
  - {from: 2_budi, to: 1_grandma}
  - {from: 2_agus, to: 1_gp, type: parent}
  - {from: 2_agus, to: 1_grandma, type: parent}
  - {from: 2_budi, to: 2_sri, type: married}
  - {from: 3_eko, to: 2_budi}
  - {from: 3_eko, to: 2_sri}
  - {from: 3_tono, to: 2_budi}
  - {from: 3_tono, to: 3_lina, type: married}
  - {from: 2_agus, to: 2_ani, type: married}
  - {from: 3_rina, to: 2_agus}
  - {from: 3_rina, to: 2_ani}
  - {from: 2_ani, to: 1_bapak}
  - {from: 2_joko, to: 1_bapak}
  - {from: 3_eko, to: 3_dewi, type: married}
  - {from: 4_alya, to: 3_eko}
  - {from: 4_alya, to: 3_dewi}
  - {from: 3_rina, to: 3_dika, type: married}
  - {from: 4_rini, to: 3_rina}
  - {from: 4_rini, to: 3_dika}
  - {from: 2_herman, to: 1_sastro}
  - {from: 3_dika, to: 2_herman}
  - {from: 3_sari, to: 2_herman}
"""


@pytest.fixture
def family():
    return parse_definition(FAMILY_YAML)


@pytest.fixture
def family_graph(family):
    _, relationships = family
    return build_family_graph(relationships)


@pytest.fixture
def genders(family):
    people, _ = family
    return gender_index(people)


@pytest.fixture
def definition_file(tmp_path):
    path = tmp_path / "family.yaml"
    path.write_text(FAMILY_YAML, encoding="utf-8")
    return path
