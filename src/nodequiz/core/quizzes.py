"""Quiz library: loading quiz files and deriving what the player may see.

Every ``*.json`` file in the quizzes directory holds one quiz. Files are
parsed once into an in-memory cache keyed by quiz id; ``reload()`` re-reads
the directory. A malformed file is logged and skipped so one bad quiz does
not take the whole library down.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from nodequiz.contracts.enums import QuizDifficulty
from nodequiz.contracts.types import QuizID
from nodequiz.contracts.workflow import Quiz, WorkflowGraph
from nodequiz.core.catalogue import SchemaCatalogue
from nodequiz.core.logging import get_logger

logger = get_logger(__name__)


class QuizNotFoundError(LookupError):
    """Raised when a quiz id is not in the library."""

    def __init__(self, quiz_id: str) -> None:
        super().__init__(f"Quiz not found: {quiz_id}")
        self.quiz_id = quiz_id


class QuizLoadError(ValueError):
    """Raised when a quiz file cannot be parsed."""

    pass


@dataclass(frozen=True, slots=True)
class QuizSummary:
    """Listing entry for a quiz."""

    id: QuizID
    name: str
    description: str
    difficulty: QuizDifficulty
    edge_count: int
    hidden_edge_count: int
    hidden_node_count: int

    @classmethod
    def of(cls, quiz: Quiz) -> QuizSummary:
        return cls(
            id=quiz.id,
            name=quiz.name,
            description=quiz.description,
            difficulty=quiz.difficulty,
            edge_count=len(quiz.workflow.edges),
            hidden_edge_count=len(quiz.hidden_edges),
            hidden_node_count=len(quiz.hidden_nodes),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "difficulty": str(self.difficulty),
            "edgeCount": self.edge_count,
            "hiddenEdgeCount": self.hidden_edge_count,
            "hiddenNodeCount": self.hidden_node_count,
        }


@dataclass(frozen=True, slots=True)
class PlayerQuizView:
    """What the player is shown: the workflow minus its hidden parts.

    ``schemas`` covers every node type of the full workflow, hidden nodes
    included, so the player can add them back.
    """

    summary: QuizSummary
    workflow: WorkflowGraph
    schemas: SchemaCatalogue

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.summary.id,
            "name": self.summary.name,
            "description": self.summary.description,
            "difficulty": str(self.summary.difficulty),
            "workflow": self.workflow.model_dump(by_alias=True, mode="json", exclude_none=True),
            "hiddenEdgeCount": self.summary.hidden_edge_count,
            "hiddenNodeCount": self.summary.hidden_node_count,
            "nodeSchemas": self.schemas.to_dict(),
        }


def parse_quiz(text: str, *, source: str = "<string>") -> Quiz:
    """Parse one quiz document.

    Raises:
        QuizLoadError: If the text is not JSON or not a valid quiz
    """
    try:
        return Quiz.model_validate(json.loads(text))
    except json.JSONDecodeError as e:
        raise QuizLoadError(f"{source}: invalid JSON: {e}") from e
    except ValidationError as e:
        raise QuizLoadError(f"{source}: invalid quiz: {e}") from e


def hide_answers(quiz: Quiz) -> WorkflowGraph:
    """Copy of the quiz workflow with hidden edges and hidden nodes removed."""
    hidden_edges = set(quiz.hidden_edges)
    hidden_nodes = set(quiz.hidden_nodes)
    return quiz.workflow.model_copy(
        update={
            "nodes": [n for n in quiz.workflow.nodes if n.id not in hidden_nodes],
            "edges": [e for e in quiz.workflow.edges if e.id not in hidden_edges],
        }
    )


class QuizLibrary:
    """In-memory cache of the quizzes in one directory."""

    def __init__(self, quizzes_dir: Path) -> None:
        self._quizzes_dir = quizzes_dir
        self._cache: dict[QuizID, Quiz] = {}
        self._load()

    @property
    def quizzes_dir(self) -> Path:
        return self._quizzes_dir

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, quiz_id: object) -> bool:
        return quiz_id in self._cache

    def _load(self) -> None:
        if not self._quizzes_dir.is_dir():
            logger.warning("quizzes_dir_missing", path=str(self._quizzes_dir))
            return

        for path in sorted(self._quizzes_dir.glob("*.json")):
            try:
                quiz = parse_quiz(path.read_text(encoding="utf-8"), source=path.name)
            except QuizLoadError as e:
                logger.warning("quiz_file_skipped", path=str(path), error=str(e))
                continue
            if quiz.id in self._cache:
                logger.warning("quiz_id_duplicate", quiz_id=quiz.id, path=str(path))
            self._cache[quiz.id] = quiz

        logger.debug("quizzes_loaded", path=str(self._quizzes_dir), count=len(self._cache))

    def reload(self) -> None:
        """Drop the cache and re-read the directory."""
        self._cache.clear()
        self._load()

    def list_quizzes(self) -> list[QuizSummary]:
        """Summaries of all quizzes, easiest first."""
        summaries = [QuizSummary.of(q) for q in self._cache.values()]
        return sorted(summaries, key=lambda s: s.difficulty.rank)

    def get(self, quiz_id: str) -> Quiz:
        """Full quiz including its answers.

        Raises:
            QuizNotFoundError: If no quiz has this id
        """
        try:
            return self._cache[QuizID(quiz_id)]
        except KeyError:
            raise QuizNotFoundError(quiz_id) from None

    def player_view(self, quiz_id: str, catalogue: SchemaCatalogue) -> PlayerQuizView:
        """The quiz as shown to the player.

        Raises:
            QuizNotFoundError: If no quiz has this id
        """
        quiz = self.get(quiz_id)
        return PlayerQuizView(
            summary=QuizSummary.of(quiz),
            workflow=hide_answers(quiz),
            schemas=catalogue.for_workflow(quiz.workflow),
        )
