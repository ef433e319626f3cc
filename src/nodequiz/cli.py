# src/nodequiz/cli.py
"""NodeQuiz Command Line Interface.

Entry point for the nodequiz CLI tool. Every command prints JSON on stdout;
logs and error messages go to stderr.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from nodequiz import __version__
from nodequiz.contracts import EdgeProposal, Quiz, Submission
from nodequiz.core.catalogue import CatalogueError, SchemaCatalogue, SchemaFound, SchemaUnknown
from nodequiz.core.config import NodeQuizSettings, load_settings
from nodequiz.core.hints import next_hint
from nodequiz.core.matching import score_submission
from nodequiz.core.quizzes import QuizLibrary, QuizNotFoundError
from nodequiz.core.validation import validate_edge

__all__ = [
    "app",
]

# Exit code for "the thing you asked about does not exist".
EXIT_NOT_FOUND = 2

app = typer.Typer(
    name="nodequiz",
    help="NodeQuiz: rebuild the hidden connections of a node workflow.",
    no_args_is_help=True,
)


@dataclass
class _State:
    """Per-invocation state shared by the main callback and commands."""

    settings: NodeQuizSettings
    _catalogue: SchemaCatalogue | None = None
    _library: QuizLibrary | None = None

    @property
    def catalogue(self) -> SchemaCatalogue:
        if self._catalogue is None:
            try:
                self._catalogue = self.settings.load_catalogue()
            except (FileNotFoundError, CatalogueError) as e:
                typer.echo(f"Error: {e}", err=True)
                raise typer.Exit(1) from None
        return self._catalogue

    @property
    def library(self) -> QuizLibrary:
        if self._library is None:
            self._library = QuizLibrary(self.settings.quizzes_dir)
        return self._library


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"nodequiz version {__version__}")
        raise typer.Exit()


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _state(ctx: typer.Context) -> _State:
    state: _State = ctx.obj
    return state


def _get_quiz(state: _State, quiz_id: str) -> Quiz:
    try:
        return state.library.get(quiz_id)
    except QuizNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_NOT_FOUND) from None


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """NodeQuiz: rebuild the hidden connections of a node workflow."""
    from nodequiz.core.logging import bind_invocation_context, configure_logging

    settings_path = settings.expanduser() if settings is not None else None
    try:
        config = load_settings(settings_path)
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None

    log_level = "DEBUG" if verbose else config.log_level
    configure_logging(json_output=json_logs or config.json_logs, level=log_level)
    bind_invocation_context(command=ctx.invoked_subcommand)

    ctx.obj = _State(settings=config)


@app.command()
def quizzes(ctx: typer.Context) -> None:
    """List available quizzes, easiest first."""
    _echo_json([summary.to_dict() for summary in _state(ctx).library.list_quizzes()])


@app.command()
def show(
    ctx: typer.Context,
    quiz_id: str = typer.Argument(..., help="Quiz identifier."),
) -> None:
    """Show a quiz as the player sees it, with hidden edges and nodes removed."""
    state = _state(ctx)
    try:
        view = state.library.player_view(quiz_id, state.catalogue)
    except QuizNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_NOT_FOUND) from None
    _echo_json(view.to_dict())


@app.command("check-edge")
def check_edge(
    ctx: typer.Context,
    quiz_id: str = typer.Argument(..., help="Quiz identifier."),
    source: str = typer.Argument(..., help="Source node id."),
    source_handle: str = typer.Argument(..., help="Output port on the source node."),
    target: str = typer.Argument(..., help="Target node id."),
    target_handle: str = typer.Argument(..., help="Input port on the target node."),
) -> None:
    """Check whether a single connection is legal.

    Exits 0 when the connection is valid and 1 when it is not.
    """
    state = _state(ctx)
    quiz = _get_quiz(state, quiz_id)
    proposal = EdgeProposal(
        source_node=source,
        source_handle=source_handle,
        target_node=target,
        target_handle=target_handle,
    )
    result = validate_edge(quiz.workflow, state.catalogue, proposal)
    _echo_json(result.to_dict())
    if not result.valid:
        raise typer.Exit(1)


@app.command()
def validate(
    ctx: typer.Context,
    quiz_id: str = typer.Argument(..., help="Quiz identifier."),
    submission_file: Path = typer.Argument(..., help="JSON file with proposedEdges and playerNodeMappings."),
) -> None:
    """Score a full submission.

    Exits 0 when the quiz is completed and 1 otherwise.
    """
    state = _state(ctx)
    quiz = _get_quiz(state, quiz_id)

    try:
        submission = Submission.model_validate_json(submission_file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        typer.echo(f"Error: Submission file not found: {submission_file}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo(f"Invalid submission: {e}", err=True)
        raise typer.Exit(1) from None

    report = score_submission(quiz, state.catalogue, submission.proposed_edges, submission.player_node_mappings)
    _echo_json(report.to_dict())
    if not report.completed:
        raise typer.Exit(1)


@app.command()
def hint(
    ctx: typer.Context,
    quiz_id: str = typer.Argument(..., help="Quiz identifier."),
    connected: list[str] | None = typer.Option(
        None,
        "--connected",
        "-c",
        help="Id of a hidden edge the player already connected (repeatable).",
    ),
) -> None:
    """Describe the next hidden connection the player has not made yet.

    Prints null when every hidden connection is already made.
    """
    quiz = _get_quiz(_state(ctx), quiz_id)
    info = next_hint(quiz, connected or [])
    _echo_json(info.to_dict() if info is not None else None)


@app.command()
def schemas(
    ctx: typer.Context,
    node_type: str | None = typer.Argument(None, help="Only show this node type."),
) -> None:
    """Dump the node schema catalogue, or a single schema."""
    catalogue = _state(ctx).catalogue
    if node_type is None:
        _echo_json(catalogue.to_dict())
        return

    match catalogue.lookup(node_type):
        case SchemaFound(schema=schema):
            _echo_json(schema.model_dump(by_alias=True, mode="json", exclude_none=True))
        case SchemaUnknown():
            typer.echo(f"Error: Unknown node type: {node_type}", err=True)
            raise typer.Exit(EXIT_NOT_FOUND)


if __name__ == "__main__":
    app()
