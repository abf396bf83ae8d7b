"""Tests for the command-line entry point."""

import json

import networkx as nx

from main import main


def test_labels(definition_file, capsys):
    assert main(["labels", str(definition_file), "--pov", "3_eko"]) == 0
    out = capsys.readouterr().out
    assert "Agus (2_agus): Uncle" in out
    assert "Eko (3_eko): Self" in out
    assert "Lina (3_lina): Sibling-in-Law" in out


def test_labels_in_indonesian(definition_file, capsys):
    assert main(["labels", str(definition_file), "--pov", "3_dewi", "--lang", "id"]) == 0
    assert "Budi (2_budi): Mertua" in capsys.readouterr().out


def test_labels_unknown_pov(definition_file, capsys):
    assert main(["labels", str(definition_file), "--pov", "nobody"]) == 1
    assert "Unknown person id: nobody" in capsys.readouterr().err


def test_validate_clean(definition_file, capsys):
    assert main(["validate", str(definition_file)]) == 0
    assert "No validation issues found" in capsys.readouterr().out


def test_schema_error_is_reported(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("people: []\n", encoding="utf-8")
    assert main(["validate", str(path)]) == 1
    assert "YAML must contain 'people' and 'relationships' arrays" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["labels", str(tmp_path / "missing.yaml"), "--pov", "x"]) == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_layout(definition_file, capsys, monkeypatch):
    def fake_layout(G, prog):
        return {node: (0.0, float(i)) for i, node in enumerate(G.nodes)}

    monkeypatch.setattr(nx.nx_pydot, "graphviz_layout", fake_layout)

    assert main(["layout", str(definition_file), "--width", "72", "--height", "72"]) == 0
    result = json.loads(capsys.readouterr().out)
    assert len(result["nodes"]) == 19
    assert result["nodes"][0]["position"]["x"] == -36.0


def test_validate_with_unquoted_dates(tmp_path, capsys):
    path = tmp_path / "dated.yaml"
    path.write_text(
        "people:\n"
        "  - {id: p, name: Parent, birthDate: 1950-01-01}\n"
        "  - {id: c, name: Child, birthDate: 1955-06-01}\n"
        "relationships:\n"
        "  - {from: c, to: p}\n",
        encoding="utf-8",
    )
    assert main(["validate", str(path)]) == 1
    assert "less than 12 years old" in capsys.readouterr().out
