"""Unit tests for loading gate trees from definition files."""

import json
from pathlib import Path

import pytest

from doors import Gate, LoadError
from doors.config import GateFileFormat
from doors.loader import (
    GateDefinitionModel,
    build_gate,
    dump_definition,
    load_definition,
    load_gate,
    parse_definition,
)


class TestParseDefinition:
    """Validation of raw definition data."""

    def test_parses_nested_definition(self, release_definition):
        definition = parse_definition(release_definition)

        assert definition.name == "release"
        assert definition.locks[0] == "build"
        assert isinstance(definition.locks[1], GateDefinitionModel)
        assert definition.locks[1].locks == ["unit", "integration"]

    def test_locks_default_to_empty(self):
        assert parse_definition({"name": "solo"}).locks == []

    @pytest.mark.parametrize(
        "data",
        [
            {"locks": ["a"]},
            {"name": ""},
            {"name": "g", "locks": ["a", "a"]},
            {"name": "g", "locks": ["a", {"name": "a"}]},
            {"name": "g", "locks": [""]},
            {"name": "g", "locks": [{"locks": ["x"]}]},
            {"name": "g", "unexpected": True},
        ],
    )
    def test_invalid_definitions_raise(self, data):
        with pytest.raises(LoadError) as exc_info:
            parse_definition(data, source="inline")

        assert exc_info.value.source == "inline"

    def test_non_mapping_raises(self):
        with pytest.raises(LoadError, match="must be a mapping"):
            parse_definition(["a", "b"])


class TestBuildGate:
    """Building gates from validated definitions."""

    def test_build_matches_constructor_semantics(self, release_definition):
        gate = build_gate(parse_definition(release_definition))

        assert gate.name == "release"
        assert gate.keys == ("docs", "tests", "build")
        assert set(gate.held) == {"docs", "tests", "build"}

    def test_nested_definition_becomes_nested_gate(self, release_definition):
        gate = build_gate(parse_definition(release_definition))
        tests = gate.find("tests")

        assert isinstance(tests, Gate)
        assert tests.parent is gate
        assert tests.keys == ("integration", "unit")

    def test_nested_gate_releases_parent(self, release_definition):
        gate = build_gate(parse_definition(release_definition))

        gate.find("tests").unlock()

        assert not gate.has("tests")

    def test_dump_definition_round_trips(self, release_definition):
        definition = parse_definition(release_definition)

        dumped = dump_definition(build_gate(definition))

        assert dumped == release_definition
        assert parse_definition(dumped) == definition


class TestLoadDefinition:
    """Reading definition files."""

    def test_load_yaml(self, release_yaml):
        gate = load_gate(release_yaml)

        assert gate.name == "release"
        assert "tests" in gate

    def test_load_json(self, release_json):
        gate = load_gate(release_json)

        assert gate.keys == ("docs", "tests", "build")

    def test_yaml_and_json_agree(self, release_yaml, release_json):
        assert load_definition(release_yaml) == load_definition(release_json)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(LoadError, match="File not found"):
            load_definition(tmp_path / "missing.yaml")

    def test_malformed_json_raises(self, tmp_path: Path):
        file_path = tmp_path / "broken.json"
        file_path.write_text('{"name": ', encoding="utf-8")

        with pytest.raises(LoadError, match="Error parsing JSON"):
            load_definition(file_path)

    def test_malformed_yaml_raises(self, tmp_path: Path):
        file_path = tmp_path / "broken.yaml"
        file_path.write_text("name: [unclosed\n", encoding="utf-8")

        with pytest.raises(LoadError, match="Error parsing YAML"):
            load_definition(file_path)

    def test_unknown_extension_tries_json_then_yaml(self, tmp_path: Path):
        json_file = tmp_path / "gate.def"
        json_file.write_text(json.dumps({"name": "j", "locks": ["a"]}), encoding="utf-8")
        yaml_file = tmp_path / "other.def"
        yaml_file.write_text("name: y\nlocks:\n  - a\n", encoding="utf-8")

        assert load_definition(json_file).name == "j"
        assert load_definition(yaml_file).name == "y"

    def test_explicit_format_overrides_extension(self, tmp_path: Path):
        file_path = tmp_path / "gate.txt"
        file_path.write_text("name: forced\n", encoding="utf-8")

        definition = load_definition(file_path, GateFileFormat.YAML)

        assert definition.name == "forced"

    def test_invalid_content_raises_with_source(self, tmp_path: Path):
        file_path = tmp_path / "bad.yaml"
        file_path.write_text("locks: [a]\n", encoding="utf-8")

        with pytest.raises(LoadError) as exc_info:
            load_gate(file_path)

        assert exc_info.value.source == str(file_path)
