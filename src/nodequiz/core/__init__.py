"""Core engine: schema catalogue, type compatibility, cycle detection, edge
validation, submission scoring, hints, quiz library, configuration, logging."""

from nodequiz.core.catalogue import (
    CatalogueError,
    SchemaCatalogue,
    SchemaFound,
    SchemaLookup,
    SchemaUnknown,
)
from nodequiz.core.compatibility import cardinality_matches, is_compatible, types_equal
from nodequiz.core.config import NodeQuizSettings, load_settings
from nodequiz.core.cycles import build_adjacency, would_create_cycle
from nodequiz.core.hints import next_hint, remaining_hidden_edges
from nodequiz.core.matching import resolve_player_nodes, score_submission
from nodequiz.core.quizzes import (
    PlayerQuizView,
    QuizLibrary,
    QuizLoadError,
    QuizNotFoundError,
    QuizSummary,
    hide_answers,
    parse_quiz,
)
from nodequiz.core.validation import validate_edge

__all__ = [
    "CatalogueError",
    "NodeQuizSettings",
    "PlayerQuizView",
    "QuizLibrary",
    "QuizLoadError",
    "QuizNotFoundError",
    "QuizSummary",
    "SchemaCatalogue",
    "SchemaFound",
    "SchemaLookup",
    "SchemaUnknown",
    "build_adjacency",
    "cardinality_matches",
    "hide_answers",
    "is_compatible",
    "load_settings",
    "next_hint",
    "parse_quiz",
    "remaining_hidden_edges",
    "resolve_player_nodes",
    "score_submission",
    "types_equal",
    "validate_edge",
    "would_create_cycle",
]
