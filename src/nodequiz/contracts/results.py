"""Decision outcomes returned by the engine.

These types answer: "What did a check produce?"

All results are frozen value objects. ``to_dict()`` renders the camelCase
transport shape the quiz front end consumes; no other serialization exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from nodequiz.contracts.enums import SubmissionErrorKind
from nodequiz.contracts.types import NodeID, PortName
from nodequiz.contracts.workflow import GraphEdge


@dataclass(frozen=True, slots=True)
class EdgeCheckResult:
    """Legality of a single proposed connection.

    Use the factory methods; ``error`` is set exactly when ``valid`` is False.
    """

    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> EdgeCheckResult:
        return cls(valid=True)

    @classmethod
    def rejected(cls, error: str) -> EdgeCheckResult:
        return cls(valid=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        if self.error is None:
            return {"valid": self.valid}
        return {"valid": self.valid, "error": self.error}


@dataclass(frozen=True, slots=True)
class SubmissionError:
    """A proposed edge that did not match the answer."""

    kind: SubmissionErrorKind
    message: str
    edge: GraphEdge

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": str(self.kind),
            "message": self.message,
            "edge": self.edge.model_dump(by_alias=True, mode="json", exclude_none=True),
        }


@dataclass(frozen=True, slots=True)
class SubmissionReport:
    """Score of a full submission against the hidden answer set.

    Invariants:
    - valid == (not errors)
    - completed implies valid and correct_edges == total_edges
    """

    correct_edges: int
    total_edges: int
    errors: tuple[SubmissionError, ...] = field(default_factory=tuple)

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def completed(self) -> bool:
        return self.correct_edges == self.total_edges and not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
            "correctEdges": self.correct_edges,
            "totalEdges": self.total_edges,
            "completed": self.completed,
        }


@dataclass(frozen=True, slots=True)
class HintInfo:
    """The next hidden connection, described for display."""

    source_node_id: NodeID
    source_node_label: str
    source_field_name: PortName
    target_node_id: NodeID
    target_node_label: str
    target_field_name: PortName

    def to_dict(self) -> dict[str, str]:
        return {
            "sourceNodeId": self.source_node_id,
            "sourceNodeLabel": self.source_node_label,
            "sourceFieldName": self.source_field_name,
            "targetNodeId": self.target_node_id,
            "targetNodeLabel": self.target_node_label,
            "targetFieldName": self.target_field_name,
        }
