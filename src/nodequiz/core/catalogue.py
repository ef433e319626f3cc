"""Node schema catalogue.

The catalogue maps a node type string to its ``NodeSchema``. It is loaded
once and never mutated.

Lookups return a tagged result instead of ``None``: a node type outside the
catalogue is a legitimate state (validation then runs in permissive mode),
so callers must handle ``SchemaUnknown`` explicitly.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from importlib.resources import files
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import ValidationError

from nodequiz.contracts.types import NodeTypeName
from nodequiz.contracts.workflow import NodeSchema, WorkflowGraph
from nodequiz.core.logging import get_logger

logger = get_logger(__name__)

_BUILTIN_RESOURCE = "node_schemas.yaml"


class CatalogueError(ValueError):
    """Raised when a catalogue file cannot be read or parsed."""

    pass


@dataclass(frozen=True, slots=True)
class SchemaFound:
    """The node type is in the catalogue."""

    schema: NodeSchema


@dataclass(frozen=True, slots=True)
class SchemaUnknown:
    """The node type is not in the catalogue."""

    node_type: str


type SchemaLookup = SchemaFound | SchemaUnknown


class SchemaCatalogue(Mapping[str, NodeSchema]):
    """Immutable mapping of node type to schema."""

    def __init__(self, schemas: Mapping[str, NodeSchema] | None = None) -> None:
        self._schemas: MappingProxyType[str, NodeSchema] = MappingProxyType(dict(schemas or {}))

    def __getitem__(self, node_type: str) -> NodeSchema:
        return self._schemas[node_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def __repr__(self) -> str:
        return f"SchemaCatalogue({sorted(self._schemas)!r})"

    def lookup(self, node_type: str | None) -> SchemaLookup:
        """Look up a node type, tagging the outcome."""
        if node_type is not None and node_type in self._schemas:
            return SchemaFound(self._schemas[node_type])
        return SchemaUnknown(node_type or "")

    def restrict_to(self, node_types: Iterable[str]) -> SchemaCatalogue:
        """Sub-catalogue holding only the given node types that are known."""
        return SchemaCatalogue({t: self._schemas[t] for t in node_types if t in self._schemas})

    def for_workflow(self, workflow: WorkflowGraph) -> SchemaCatalogue:
        """Sub-catalogue for every invocation node type used by a workflow."""
        return self.restrict_to(workflow.invocation_types())

    def to_dict(self) -> dict[str, Any]:
        return {t: s.model_dump(by_alias=True, mode="json", exclude_none=True) for t, s in self._schemas.items()}

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> SchemaCatalogue:
        """Build a catalogue from parsed YAML/JSON.

        Each key is the node type; an entry without ``type`` takes its key.

        Raises:
            CatalogueError: If an entry is malformed or its type disagrees with its key
        """
        schemas: dict[str, NodeSchema] = {}
        for node_type, entry in raw.items():
            if not isinstance(entry, Mapping):
                raise CatalogueError(f"Schema entry '{node_type}' must be a mapping, got {type(entry).__name__}")
            try:
                schema = NodeSchema.model_validate({"type": node_type, **entry})
            except ValidationError as e:
                raise CatalogueError(f"Invalid schema for node type '{node_type}': {e}") from e
            if schema.type != node_type:
                raise CatalogueError(f"Schema key '{node_type}' does not match its type '{schema.type}'")
            schemas[NodeTypeName(node_type)] = schema
        return cls(schemas)

    @classmethod
    def from_file(cls, path: Path) -> SchemaCatalogue:
        """Load a catalogue from a YAML or JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            CatalogueError: If the file can't be parsed
        """
        if not path.exists():
            raise FileNotFoundError(f"Schema catalogue not found: {path}")
        raw = _parse_document(path.read_text(encoding="utf-8"), source=str(path), as_json=path.suffix == ".json")
        catalogue = cls.from_mapping(raw)
        logger.debug("catalogue_loaded", path=str(path), node_types=len(catalogue))
        return catalogue

    @classmethod
    def builtin(cls) -> SchemaCatalogue:
        """The catalogue shipped with the package."""
        text = files("nodequiz").joinpath("data", _BUILTIN_RESOURCE).read_text(encoding="utf-8")
        return cls.from_mapping(_parse_document(text, source=_BUILTIN_RESOURCE, as_json=False))


def _parse_document(text: str, *, source: str, as_json: bool) -> Mapping[str, Any]:
    try:
        raw = json.loads(text) if as_json else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogueError(f"Cannot parse schema catalogue {source}: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise CatalogueError(f"Schema catalogue {source} must be a mapping of node type to schema")
    return raw
