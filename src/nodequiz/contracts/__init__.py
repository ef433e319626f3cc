"""Shared contracts for cross-boundary data types.

All models, dataclasses and enums that cross the engine boundary are
defined here. This package is a LEAF MODULE with no outbound dependencies
to core.

Import patterns:
    from nodequiz.contracts import Quiz, FieldType, SubmissionReport
"""

from nodequiz.contracts.enums import (
    Cardinality,
    EdgeKind,
    InputMode,
    NodeKind,
    QuizDifficulty,
    SubmissionErrorKind,
)
from nodequiz.contracts.results import (
    EdgeCheckResult,
    HintInfo,
    SubmissionError,
    SubmissionReport,
)
from nodequiz.contracts.types import (
    EdgeID,
    EdgeKey,
    NodeID,
    NodeTypeName,
    PortName,
    QuizID,
)
from nodequiz.contracts.workflow import (
    EdgeProposal,
    FieldType,
    GraphEdge,
    GraphNode,
    NodeData,
    NodePort,
    NodeSchema,
    PlayerNodeMapping,
    Position,
    Quiz,
    Submission,
    WorkflowGraph,
    edge_key,
)

__all__ = [
    "Cardinality",
    "EdgeCheckResult",
    "EdgeID",
    "EdgeKey",
    "EdgeKind",
    "EdgeProposal",
    "FieldType",
    "GraphEdge",
    "GraphNode",
    "HintInfo",
    "InputMode",
    "NodeData",
    "NodeID",
    "NodeKind",
    "NodePort",
    "NodeSchema",
    "NodeTypeName",
    "PlayerNodeMapping",
    "PortName",
    "Position",
    "Quiz",
    "QuizDifficulty",
    "QuizID",
    "Submission",
    "SubmissionError",
    "SubmissionErrorKind",
    "SubmissionReport",
    "WorkflowGraph",
    "edge_key",
]
