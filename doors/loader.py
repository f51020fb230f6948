"""
Loading gate trees from declarative definitions.

A definition names a gate and lists its locks; a lock is either a key
string or a nested definition:

    name: release
    locks:
      - build
      - name: tests
        locks: [unit, integration]

Definitions describe structure only. Gates built from them start with every
lock held, exactly as ``Gate(name, locks)`` does.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from doors.config import GateFileFormat
from doors.exceptions import LoadError, LockError, OwnershipError
from doors.gate import Gate
from doors.lock import LockKind

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)


class GateDefinitionModel(BaseModel):
    """Validated, recursive gate definition."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="Gate name, its key when nested")
    description: str = Field(default="", description="Free-form description")
    locks: list["str | GateDefinitionModel"] = Field(
        default_factory=list, description="Plain keys or nested gate definitions"
    )

    @field_validator("locks")
    @classmethod
    def validate_locks(cls, locks: list["str | GateDefinitionModel"]):
        """Lock keys must be non-empty and unique within a gate."""
        seen: set[str] = set()
        for lock in locks:
            key = lock if isinstance(lock, str) else lock.name
            if not key:
                raise ValueError("Lock keys cannot be empty")
            if key in seen:
                raise ValueError(f"Duplicate lock key '{key}'")
            seen.add(key)
        return locks


GateDefinitionModel.model_rebuild()


def parse_definition(data: Any, source: str | None = None) -> GateDefinitionModel:
    """
    Validate raw definition data.

    Raises:
        LoadError: If the data does not describe a valid gate tree
    """
    if not isinstance(data, dict):
        raise LoadError("Gate definition must be a mapping", source=source)
    try:
        return GateDefinitionModel.model_validate(data)
    except ValidationError as e:
        raise LoadError(
            f"Invalid gate definition: {e}",
            source=source,
            context={"errors": e.errors(include_url=False)},
        ) from e


def build_gate(definition: GateDefinitionModel) -> Gate:
    """Construct the gate tree described by ``definition``, leaves first."""
    locks: list[str | Gate] = [
        lock if isinstance(lock, str) else build_gate(lock) for lock in definition.locks
    ]
    return Gate(definition.name, locks)


def dump_definition(gate: Gate) -> dict[str, Any]:
    """Describe the structure of ``gate`` as definition data (no lock state)."""
    locks: list[Any] = []
    for key in reversed(gate.keys):
        target = gate.locks[key]
        if target.kind is LockKind.GATE:
            locks.append(dump_definition(target.gate))
        else:
            locks.append(key)
    return {"name": gate.name, "locks": locks}


def _parse_yaml(content: str) -> Any:
    yaml_parser = YAML(typ="safe")
    return yaml_parser.load(content)


def _detect_format(file_path: Path, file_format: GateFileFormat) -> GateFileFormat:
    if file_format is not GateFileFormat.AUTO:
        return file_format
    suffix = file_path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return GateFileFormat.YAML
    if suffix in JSON_SUFFIXES:
        return GateFileFormat.JSON
    return GateFileFormat.AUTO


def load_definition(
    file_path: str | Path, file_format: GateFileFormat = GateFileFormat.AUTO
) -> GateDefinitionModel:
    """
    Load a gate definition from a YAML or JSON file.

    With ``GateFileFormat.AUTO`` the format follows the file extension; an
    unknown extension is tried as JSON, then YAML.

    Raises:
        LoadError: If the file is missing, unreadable, or invalid
    """
    file_path = Path(file_path)
    source = str(file_path)

    if not file_path.exists():
        raise LoadError(f"File not found: {file_path}", source=source)

    try:
        content = file_path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise LoadError(f"Permission denied reading {file_path}", source=source) from e
    except OSError as e:
        raise LoadError(f"Failed to read {file_path}: {e}", source=source) from e

    resolved = _detect_format(file_path, file_format)
    try:
        if resolved is GateFileFormat.JSON:
            data = json.loads(content)
        elif resolved is GateFileFormat.YAML:
            data = _parse_yaml(content)
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                data = _parse_yaml(content)
    except json.JSONDecodeError as e:
        raise LoadError(f"Error parsing JSON in {file_path}: {e}", source=source) from e
    except YAMLError as e:
        raise LoadError(f"Error parsing YAML in {file_path}: {e}", source=source) from e

    return parse_definition(data, source=source)


def load_gate(
    file_path: str | Path, file_format: GateFileFormat = GateFileFormat.AUTO
) -> Gate:
    """
    Load a definition file and build its gate tree.

    Raises:
        LoadError: If loading fails or the tree cannot be assembled
    """
    definition = load_definition(file_path, file_format)
    try:
        return build_gate(definition)
    except (LockError, OwnershipError) as e:
        logger.error(f"Failed to build gate tree from {file_path}: {e}")
        raise LoadError(str(e), source=str(file_path)) from e
