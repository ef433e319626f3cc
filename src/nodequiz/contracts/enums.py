"""All modes, kinds and classifications used across subsystem boundaries.

Values match the wire format of workflow and quiz JSON files, so every
enum serializes as its plain string value.
"""

from enum import StrEnum


class Cardinality(StrEnum):
    """How many values a port carries.

    SINGLE_OR_COLLECTION ports accept either shape.
    """

    SINGLE = "SINGLE"
    COLLECTION = "COLLECTION"
    SINGLE_OR_COLLECTION = "SINGLE_OR_COLLECTION"


class InputMode(StrEnum):
    """How an input port may receive its value.

    Values:
        CONNECTION: Only via a wired edge
        DIRECT: Only as a fixed in-place value (never accepts edges)
        ANY: Either way
    """

    CONNECTION = "connection"
    DIRECT = "direct"
    ANY = "any"


class NodeKind(StrEnum):
    """Kind of node in a workflow graph.

    Only INVOCATION nodes have a schema and take part in edges.
    NOTES nodes are free-text annotations.
    """

    INVOCATION = "invocation"
    NOTES = "notes"


class EdgeKind(StrEnum):
    """Kind of edge in a workflow graph.

    DEFAULT edges are port-to-port data connections. COLLAPSED edges are a
    presentation artefact of collapsed nodes and carry no handles.
    """

    DEFAULT = "default"
    COLLAPSED = "collapsed"


class QuizDifficulty(StrEnum):
    """Difficulty label of a quiz, also its listing order."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def rank(self) -> int:
        """Sort position (easy first)."""
        return _DIFFICULTY_RANK[self]


_DIFFICULTY_RANK = {
    QuizDifficulty.EASY: 0,
    QuizDifficulty.MEDIUM: 1,
    QuizDifficulty.HARD: 2,
}


class SubmissionErrorKind(StrEnum):
    """Classification of a proposed edge that is not part of the answer.

    INVALID_CONNECTION: The edge is structurally illegal (self-connection,
        missing node or port, direct-only input, type mismatch, cycle).
    TYPE_MISMATCH: The edge is legal but is not the expected connection.
        This is a near miss rather than a user error.
    """

    INVALID_CONNECTION = "invalid_connection"
    TYPE_MISMATCH = "type_mismatch"
