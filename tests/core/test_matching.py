# tests/core/test_matching.py
"""Tests for submission scoring and player node resolution."""

from nodequiz.contracts import GraphEdge, Quiz, SubmissionErrorKind
from nodequiz.core.catalogue import SchemaCatalogue
from nodequiz.core.matching import NOT_EXPECTED, resolve_player_nodes, score_submission
from tests.helpers.workflows import connection, make_quiz, mapping, text_to_image_workflow


def fresh_ids(edges: list[GraphEdge]) -> list[GraphEdge]:
    """Copy edges under player-style ids."""
    return [edge.model_copy(update={"id": f"player-{i}"}) for i, edge in enumerate(edges)]


class TestScoreSubmission:
    """Tests for score_submission."""

    def test_exact_answer_completes(self, conditioning_quiz: Quiz, catalogue: SchemaCatalogue) -> None:
        report = score_submission(conditioning_quiz, catalogue, fresh_ids(conditioning_quiz.hidden_answer_edges()))
        assert report.correct_edges == 2
        assert report.total_edges == 2
        assert report.valid
        assert report.completed

    def test_partial_answer(self, conditioning_quiz: Quiz, catalogue: SchemaCatalogue) -> None:
        report = score_submission(conditioning_quiz, catalogue, fresh_ids(conditioning_quiz.hidden_answer_edges()[:1]))
        assert report.correct_edges == 1
        assert report.valid
        assert not report.completed

    def test_empty_submission(self, conditioning_quiz: Quiz, catalogue: SchemaCatalogue) -> None:
        report = score_submission(conditioning_quiz, catalogue, [])
        assert report.to_dict() == {
            "valid": True,
            "errors": [],
            "correctEdges": 0,
            "totalEdges": 2,
            "completed": False,
        }

    def test_quiz_without_hidden_edges_completes_on_empty_submission(self, catalogue: SchemaCatalogue) -> None:
        report = score_submission(make_quiz(text_to_image_workflow()), catalogue, [])
        assert report.completed

    def test_extra_legal_edge_blocks_completion(self, conditioning_quiz: Quiz, catalogue: SchemaCatalogue) -> None:
        extra = connection("player-extra", "noise", "noise", "denoise", "noise")
        edges = [*fresh_ids(conditioning_quiz.hidden_answer_edges()), extra]

        report = score_submission(conditioning_quiz, catalogue, edges)

        assert report.correct_edges == 2
        assert not report.valid
        assert not report.completed
        assert len(report.errors) == 1
        error = report.errors[0]
        assert error.kind == SubmissionErrorKind.TYPE_MISMATCH
        assert error.message == NOT_EXPECTED
        assert error.edge == extra

    def test_illegal_edge_reports_validator_message(self, conditioning_quiz: Quiz, catalogue: SchemaCatalogue) -> None:
        bad = connection("player-bad", "model", "vae", "decode", "latents")

        report = score_submission(conditioning_quiz, catalogue, [bad])

        assert report.errors[0].kind == SubmissionErrorKind.INVALID_CONNECTION
        assert report.errors[0].message.startswith("Type mismatch: VAEField (SINGLE)")
        assert report.errors[0].to_dict()["edge"]["sourceHandle"] == "vae"

    def test_duplicate_correct_edge_is_tallied_per_proposal(self, conditioning_quiz: Quiz, catalogue: SchemaCatalogue) -> None:
        edge = conditioning_quiz.hidden_answer_edges()[0]
        report = score_submission(conditioning_quiz, catalogue, fresh_ids([edge, edge]))
        assert report.correct_edges == 2
        assert report.completed

    def test_added_node_stands_in_for_hidden_node(self, decode_quiz: Quiz, catalogue: SchemaCatalogue) -> None:
        edges = [
            connection("p1", "denoise", "latents", "player-decoder", "latents"),
            connection("p2", "model", "vae", "player-decoder", "vae"),
        ]
        report = score_submission(decode_quiz, catalogue, edges, [mapping("player-decoder", "l2i")])
        assert report.correct_edges == 2
        assert report.completed

    def test_added_node_of_wrong_type_is_not_resolved(self, decode_quiz: Quiz, catalogue: SchemaCatalogue) -> None:
        edges = [connection("p1", "denoise", "latents", "player-node", "latents")]
        report = score_submission(decode_quiz, catalogue, edges, [mapping("player-node", "i2l")])
        assert report.correct_edges == 0
        assert report.errors[0].kind == SubmissionErrorKind.INVALID_CONNECTION
        assert report.errors[0].message == "Source or target node not found"

    def test_hidden_node_claimed_once(self, negative_prompt_quiz: Quiz, catalogue: SchemaCatalogue) -> None:
        edges = [
            connection("p1", "model", "clip", "first", "clip"),
            connection("p2", "model", "clip", "second", "clip"),
        ]
        mappings = [mapping("first", "compel"), mapping("second", "compel")]

        report = score_submission(negative_prompt_quiz, catalogue, edges, mappings)

        assert report.correct_edges == 1
        assert len(report.errors) == 1
        assert report.errors[0].edge.id == "p2"


class TestResolvePlayerNodes:
    """Tests for resolve_player_nodes."""

    def test_first_unclaimed_in_quiz_order(self) -> None:
        quiz = make_quiz(text_to_image_workflow(), hidden_nodes=["negative", "positive"])
        resolved = resolve_player_nodes(quiz, [mapping("a", "compel"), mapping("b", "compel")])
        assert resolved == {"a": "negative", "b": "positive"}

    def test_submission_order_decides(self) -> None:
        quiz = make_quiz(text_to_image_workflow(), hidden_nodes=["negative", "positive"])
        resolved = resolve_player_nodes(quiz, [mapping("b", "compel"), mapping("a", "compel")])
        assert resolved == {"b": "negative", "a": "positive"}

    def test_unmatched_type_skipped(self) -> None:
        quiz = make_quiz(text_to_image_workflow(), hidden_nodes=["decode"])
        assert resolve_player_nodes(quiz, [mapping("a", "compel"), mapping("b", "l2i")]) == {"b": "decode"}

    def test_more_mappings_than_hidden_nodes(self) -> None:
        quiz = make_quiz(text_to_image_workflow(), hidden_nodes=["decode"])
        assert resolve_player_nodes(quiz, [mapping("a", "l2i"), mapping("b", "l2i")]) == {"a": "decode"}

    def test_hidden_node_missing_from_workflow(self) -> None:
        quiz = make_quiz(text_to_image_workflow(), hidden_nodes=["ghost"])
        assert resolve_player_nodes(quiz, [mapping("a", "l2i")]) == {}

    def test_no_hidden_nodes(self, conditioning_quiz: Quiz) -> None:
        assert resolve_player_nodes(conditioning_quiz, [mapping("a", "l2i")]) == {}
