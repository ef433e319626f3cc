# tests/conftest.py
"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/

Workflow and quiz data is built with the helpers in tests/helpers/workflows.py;
the fixtures below wrap the common text-to-image scenario.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from nodequiz.contracts import Quiz, QuizDifficulty, WorkflowGraph
from nodequiz.core.catalogue import SchemaCatalogue
from tests.helpers.workflows import (
    DENOISE_DECODE,
    MODEL_CLIP_NEGATIVE,
    MODEL_VAE_DECODE,
    NEGATIVE_DENOISE,
    POSITIVE_DENOISE,
    make_quiz,
    text_to_image_workflow,
)

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Logging isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo configure_logging() so handlers never outlive a captured stream."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.contextvars.clear_contextvars()


# =============================================================================
# Catalogue and workflow fixtures
# =============================================================================


@pytest.fixture(scope="session")
def catalogue() -> SchemaCatalogue:
    """The built-in node schema catalogue."""
    return SchemaCatalogue.builtin()


@pytest.fixture
def workflow() -> WorkflowGraph:
    return text_to_image_workflow()


@pytest.fixture
def conditioning_quiz(workflow: WorkflowGraph) -> Quiz:
    """Two hidden edges, no hidden nodes."""
    return make_quiz(
        workflow,
        quiz_id="conditioning",
        name="Conditioning",
        hidden_edges=[POSITIVE_DENOISE, DENOISE_DECODE],
    )


@pytest.fixture
def decode_quiz(workflow: WorkflowGraph) -> Quiz:
    """The decoder node and both of its incoming edges are hidden."""
    return make_quiz(
        workflow,
        quiz_id="decode",
        name="Decoding",
        hidden_edges=[DENOISE_DECODE, MODEL_VAE_DECODE],
        hidden_nodes=["decode"],
        difficulty=QuizDifficulty.MEDIUM,
    )


@pytest.fixture
def negative_prompt_quiz(workflow: WorkflowGraph) -> Quiz:
    """The negative prompt node is hidden along with its two edges."""
    return make_quiz(
        workflow,
        quiz_id="negative",
        name="Negative Prompt",
        hidden_edges=[MODEL_CLIP_NEGATIVE, NEGATIVE_DENOISE],
        hidden_nodes=["negative"],
        difficulty=QuizDifficulty.HARD,
    )


@pytest.fixture
def quizzes_dir(tmp_path: Path, negative_prompt_quiz: Quiz, conditioning_quiz: Quiz, decode_quiz: Quiz) -> Path:
    """A directory holding the three quizzes as JSON files, hardest written first."""
    directory = tmp_path / "quizzes"
    directory.mkdir()
    for quiz in (negative_prompt_quiz, conditioning_quiz, decode_quiz):
        (directory / f"{quiz.id}.json").write_text(quiz.model_dump_json(by_alias=True), encoding="utf-8")
    return directory
