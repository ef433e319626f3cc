"""Scoring of a full submission against a quiz's hidden answer set.

Edges are compared by identity key (source, source port, target, target
port), never by edge id: the player's edges get fresh ids.

Nodes the player added stand in for hidden nodes. They are matched to hidden
nodes by declared type before edge keys are compared:

    - Mappings are resolved in the order they were submitted.
    - For each mapping, hidden nodes are scanned in the order the quiz lists
      them, and the first unclaimed node of the same type is taken.
    - A hidden node is claimed at most once. A mapping with no free hidden
      node of its type stays unresolved and its id is used as-is.

Because resolution is greedy, two submissions with the same mappings in a
different order can resolve differently when several hidden nodes share a
type.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from nodequiz.contracts.enums import SubmissionErrorKind
from nodequiz.contracts.results import SubmissionError, SubmissionReport
from nodequiz.contracts.types import EdgeKey, NodeID
from nodequiz.contracts.workflow import EdgeProposal, GraphEdge, PlayerNodeMapping, Quiz
from nodequiz.core.catalogue import SchemaCatalogue
from nodequiz.core.logging import get_logger
from nodequiz.core.validation import validate_edge

logger = get_logger(__name__)

NOT_EXPECTED = "This connection is valid but not the expected one"
INVALID_FALLBACK = "Invalid connection"


def resolve_player_nodes(quiz: Quiz, mappings: Iterable[PlayerNodeMapping]) -> dict[NodeID, NodeID]:
    """Map player-assigned node ids to the hidden node ids they stand for.

    See the module docstring for the resolution order. Hidden node ids that
    are missing from the workflow or are not invocation nodes are skipped.

    Returns:
        Dict of player id -> hidden node id, for resolved mappings only
    """
    hidden_nodes = [node for node_id in quiz.hidden_nodes if (node := quiz.workflow.get_node(node_id)) is not None]
    resolved: dict[NodeID, NodeID] = {}
    claimed: set[NodeID] = set()

    for mapping in mappings:
        for node in hidden_nodes:
            if node.id in claimed or node.node_type != mapping.node_type:
                continue
            resolved[mapping.id] = node.id
            claimed.add(node.id)
            break
        else:
            logger.debug("player_node_unresolved", quiz_id=quiz.id, player_node=mapping.id, node_type=mapping.node_type)

    return resolved


def score_submission(
    quiz: Quiz,
    catalogue: SchemaCatalogue,
    proposed_edges: Sequence[GraphEdge],
    player_node_mappings: Sequence[PlayerNodeMapping] = (),
) -> SubmissionReport:
    """Score proposed edges against the quiz's hidden edges.

    Each proposed edge, after its endpoints are resolved through the player
    node mapping, either matches a hidden edge (counted as correct) or is
    reported:
    - INVALID_CONNECTION with the validator's message when it is illegal
    - TYPE_MISMATCH when it is legal but not expected

    Completion requires every hidden edge and no reported edge, so an extra
    legal edge blocks completion.

    Args:
        quiz: Quiz holding the full workflow and its hidden answer set
        catalogue: Node schema catalogue for validating misses
        proposed_edges: The player's edges, with the player's own node ids
        player_node_mappings: Nodes the player added, in the order added

    Returns:
        SubmissionReport
    """
    hidden_edges = quiz.hidden_answer_edges()
    answers: dict[EdgeKey, GraphEdge] = {edge.key: edge for edge in hidden_edges}
    node_map = resolve_player_nodes(quiz, player_node_mappings)
    errors: list[SubmissionError] = []
    correct = 0

    for edge in proposed_edges:
        proposal = _resolved_proposal(edge, node_map)

        if proposal.key in answers:
            correct += 1
            continue

        check = validate_edge(quiz.workflow, catalogue, proposal)
        if check.valid:
            errors.append(SubmissionError(kind=SubmissionErrorKind.TYPE_MISMATCH, message=NOT_EXPECTED, edge=edge))
        else:
            errors.append(
                SubmissionError(
                    kind=SubmissionErrorKind.INVALID_CONNECTION,
                    message=check.error or INVALID_FALLBACK,
                    edge=edge,
                )
            )

    report = SubmissionReport(correct_edges=correct, total_edges=len(hidden_edges), errors=tuple(errors))
    logger.debug(
        "submission_scored",
        quiz_id=quiz.id,
        correct_edges=report.correct_edges,
        total_edges=report.total_edges,
        errors=len(report.errors),
        completed=report.completed,
    )
    return report


def _resolved_proposal(edge: GraphEdge, node_map: Mapping[NodeID, NodeID]) -> EdgeProposal:
    proposal = EdgeProposal.from_edge(edge)
    return proposal.model_copy(
        update={
            "source_node": node_map.get(proposal.source_node, proposal.source_node),
            "target_node": node_map.get(proposal.target_node, proposal.target_node),
        }
    )
