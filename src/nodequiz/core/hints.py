"""Next-hint selection."""

from __future__ import annotations

from collections.abc import Iterable

from nodequiz.contracts.results import HintInfo
from nodequiz.contracts.types import PortName
from nodequiz.contracts.workflow import Quiz
from nodequiz.core.logging import get_logger

logger = get_logger(__name__)


def remaining_hidden_edges(quiz: Quiz, connected_edge_ids: Iterable[str]) -> list[str]:
    """Hidden edge ids not yet connected, in quiz order."""
    connected = set(connected_edge_ids)
    return [edge_id for edge_id in quiz.hidden_edges if edge_id not in connected]


def next_hint(quiz: Quiz, connected_edge_ids: Iterable[str]) -> HintInfo | None:
    """Describe the first hidden edge the player hasn't connected yet.

    Deterministic: always the earliest remaining edge in the quiz's
    ``hidden_edges`` order.

    Returns:
        HintInfo, or None when every hidden edge is connected or the next
        edge doesn't join two invocation nodes with a port connection
    """
    remaining = remaining_hidden_edges(quiz, connected_edge_ids)
    if not remaining:
        return None

    edge = quiz.workflow.get_edge(remaining[0])
    if edge is None or not edge.is_connection:
        logger.warning("hint_edge_unresolvable", quiz_id=quiz.id, edge_id=remaining[0])
        return None

    source = quiz.workflow.get_node(edge.source)
    target = quiz.workflow.get_node(edge.target)
    if source is None or target is None or not source.is_invocation or not target.is_invocation:
        logger.warning("hint_edge_unresolvable", quiz_id=quiz.id, edge_id=edge.id)
        return None

    return HintInfo(
        source_node_id=source.id,
        source_node_label=source.display_label,
        source_field_name=edge.source_handle or PortName(""),
        target_node_id=target.id,
        target_node_label=target.display_label,
        target_field_name=edge.target_handle or PortName(""),
    )
