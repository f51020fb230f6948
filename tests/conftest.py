"""Pytest configuration and fixtures for Doors tests.

This module provides shared fixtures for the Doors test suite: ready-made
gates, nested gate trees and gate definition files.
"""

import json
from pathlib import Path
from typing import Any

import pytest
from ruamel.yaml import YAML

from doors import Gate


@pytest.fixture
def root_gate() -> Gate:
    """Gate with two plain keys, both held."""
    return Gate("root", ["a", "b"])


@pytest.fixture
def nested_tree() -> dict[str, Gate]:
    """Parent gate 'p' holding key 'k' and nested gate 'c' with keys 'x' and 'y'."""
    child = Gate("c", ["x", "y"])
    parent = Gate("p", [child, "k"])
    return {"parent": parent, "child": child}


@pytest.fixture
def release_definition() -> dict[str, Any]:
    """Definition of a small release pipeline gate tree."""
    return {
        "name": "release",
        "locks": [
            "build",
            {"name": "tests", "locks": ["unit", "integration"]},
            "docs",
        ],
    }


@pytest.fixture
def release_yaml(tmp_path: Path, release_definition: dict[str, Any]) -> Path:
    """Write the release definition as YAML."""
    file_path = tmp_path / "release.yaml"
    yaml = YAML()
    yaml.default_flow_style = False
    with open(file_path, "w", encoding="utf-8") as f:
        yaml.dump(release_definition, f)
    return file_path


@pytest.fixture
def release_json(tmp_path: Path, release_definition: dict[str, Any]) -> Path:
    """Write the release definition as JSON."""
    file_path = tmp_path / "release.json"
    file_path.write_text(json.dumps(release_definition), encoding="utf-8")
    return file_path
