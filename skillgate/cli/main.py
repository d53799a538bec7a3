"""
skillgate: command line over the assessment engine.

Reads collaborator records (question banks, attempts, submissions,
attendance) from JSON files and keeps the learner's session state in the
session directory.

Commands:
- skillgate assess       - Record a self-assessment
- skillgate quizzes      - List quizzes available for the stored assessment
- skillgate select       - Draw the adaptive question subset for one quiz
- skillgate classify     - Classify proficiency from ratings or attempt history
- skillgate coding-tier  - Resolve the coding-challenge tier
- skillgate evaluate     - Run the eligibility gates
- skillgate reset        - Clear the stored assessment
"""
from __future__ import annotations

import json
import random
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from skillgate.adaptive.coding_difficulty import select_challenges
from skillgate.core.levels import Level, Topic
from skillgate.core.models import AttendanceRecord, CodingSubmission, Quiz, QuizAttempt
from skillgate.engine import AssessmentEngine
from skillgate.eligibility.gate import EligibilityResult
from skillgate.quiz.attempt_stats import summarize_attempts
from skillgate.session.session_store import SessionStore


# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="skillgate",
    help="skillgate: adaptive assessment and eligibility engine",
    no_args_is_help=True,
)
console = Console()

LEVEL_STYLES = {
    Level.BEGINNER: "green",
    Level.INTERMEDIATE: "yellow",
    Level.ADVANCED: "red",
}

SessionDirOption = typer.Option(
    None,
    "--session-dir",
    "-s",
    help="Directory holding session state (default from SKILLGATE_SESSION_DIR)",
)


def style_level(level: Optional[Level]) -> str:
    if level is None:
        return "[dim]-[/dim]"
    color = LEVEL_STYLES[level]
    return f"[{color}]{level.value}[/{color}]"


def configure_logging(verbose: bool = False) -> None:
    """Route loguru to stderr (and the optional log file) at the configured level."""
    from config import get_settings

    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="1 MB")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine decisions"),
) -> None:
    configure_logging(verbose)


# =============================================================================
# Input Helpers
# =============================================================================


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(1)


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        _fail(f"File not found: {path}")
    except json.JSONDecodeError as e:
        _fail(f"{path} is not valid JSON: {e}")


def _records(data: Any) -> list:
    """Accept a bare list or an API envelope such as {"data": [...]}."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ("data", "quizzes", "attempts", "submissions", "items"):
            if isinstance(data.get(key), list):
                return data[key]
        return [data]
    return []


def _load_many(path: Optional[Path], model: Any) -> list:
    if path is None:
        return []
    try:
        return [model.model_validate(item) for item in _records(_read_json(path))]
    except ValidationError as e:
        _fail(f"Invalid {model.__name__} record in {path}:\n{e}")
    return []


def _load_one(path: Optional[Path], model: Any) -> Any:
    if path is None:
        return None
    data = _read_json(path)
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        data = data["data"]
    try:
        return model.model_validate(data)
    except ValidationError as e:
        _fail(f"Invalid {model.__name__} record in {path}:\n{e}")


def _parse_ratings(pairs: list[str]) -> dict[str, int]:
    ratings: dict[str, int] = {}
    for pair in pairs:
        topic, sep, value = pair.partition("=")
        if not sep or not topic.strip():
            raise typer.BadParameter(f"Expected TOPIC=RATING, got {pair!r}")
        try:
            ratings[topic.strip()] = int(value)
        except ValueError:
            raise typer.BadParameter(f"Rating for {topic.strip()} must be an integer, got {value!r}")
    return ratings


def _engine(seed: Optional[int] = None) -> AssessmentEngine:
    rng = random.Random(seed) if seed is not None else None
    return AssessmentEngine.from_settings(rng=rng)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def assess(
    rating: Optional[list[str]] = typer.Option(
        None,
        "--rating",
        "-r",
        help="Topic rating as TOPIC=0..5 (repeatable)",
    ),
    session_dir: Optional[Path] = SessionDirOption,
) -> None:
    """Record a self-assessment and store it in the session."""
    ratings = _parse_ratings(rating or [])
    engine = _engine()
    store = SessionStore(session_dir)

    snapshot = engine.record_assessment(store.load(), ratings)
    assessment = snapshot.skill_assessment
    if assessment is None or not assessment.has_ratings:
        _fail("Rate at least one topic to continue")

    store.save(snapshot)

    table = Table(title="Skill Assessment")
    table.add_column("Topic")
    table.add_column("Rating", justify="right")
    table.add_column("Difficulty")
    for topic in Topic:
        value = assessment.ratings.get(topic.value, 0)
        difficulty = assessment.topic_difficulty_map.get(topic.value)
        table.add_row(
            topic.value,
            str(value) if value else "[dim]-[/dim]",
            difficulty.value if difficulty else "[dim]not assessed[/dim]",
        )
    console.print(table)
    console.print(
        f"\nLevel: {style_level(assessment.level)}  |  Average rating: {assessment.avg_rating:.1f}"
    )


@app.command()
def quizzes(
    quizzes_file: Path = typer.Argument(..., help="JSON file with the quiz catalogue"),
    level: Optional[str] = typer.Option(
        None,
        "--level",
        "-l",
        help="Overall learner level for locking (default: the assessment's)",
    ),
    session_dir: Optional[Path] = SessionDirOption,
) -> None:
    """List quizzes available for the stored self-assessment."""
    catalogue = _load_many(quizzes_file, Quiz)
    snapshot = SessionStore(session_dir).load()
    assessment = snapshot.skill_assessment
    if assessment is None:
        console.print("[yellow]No skill assessment stored. Run 'skillgate assess' first.[/yellow]")
        raise typer.Exit(0)

    student_level = Level.parse(level) if level else assessment.level
    if level and student_level is None:
        raise typer.BadParameter(f"Unknown level {level!r}")

    engine = _engine()
    visible = engine.filter_quizzes(catalogue, assessment, student_level)

    table = Table(title="Available Quizzes")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Topic")
    table.add_column("Expected")
    table.add_column("Matching", justify="right")
    table.add_column("Questions", justify="right")
    table.add_column("Status")
    for item in visible:
        table.add_row(
            item.quiz.id,
            item.quiz.title,
            item.topic.value,
            item.expected_difficulty.value if item.expected_difficulty else "-",
            str(item.matching_count),
            str(item.display_count),
            "[green]ready[/green]" if item.ready_to_start else f"[dim]needs {item.shortfall} more[/dim]",
        )
    console.print(table)

    previews = engine.preview_quizzes(catalogue, student_level)
    if previews:
        console.print("\n[bold]Preview (read-only)[/bold]")
        for quiz in previews:
            console.print(f"  {quiz.id}  {quiz.title}  {style_level(quiz.level)}")


@app.command()
def select(
    quizzes_file: Path = typer.Argument(..., help="JSON file with one quiz or a catalogue"),
    quiz_id: Optional[str] = typer.Option(None, "--quiz", "-q", help="Quiz ID within the catalogue"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed the sampler"),
    session_dir: Optional[Path] = SessionDirOption,
) -> None:
    """Draw the adaptive question subset for one quiz."""
    catalogue = _load_many(quizzes_file, Quiz)
    if quiz_id is not None:
        matches = [q for q in catalogue if q.id == quiz_id]
        if not matches:
            _fail(f"Quiz {quiz_id} not found in {quizzes_file}")
        quiz = matches[0]
    elif len(catalogue) == 1:
        quiz = catalogue[0]
    else:
        _fail("Several quizzes in file; pick one with --quiz")

    store = SessionStore(session_dir)
    snapshot = store.load()
    engine = _engine(seed)
    subset = engine.select_questions(quiz.questions, snapshot.skill_assessment)
    store.save(engine.start_quiz(snapshot, quiz.id))

    level = snapshot.skill_assessment.level if snapshot.skill_assessment else Level.BEGINNER
    console.print(
        f"\n[bold]{quiz.title or quiz.id}[/bold]: {len(subset)} of {len(quiz.questions)} "
        f"questions for {style_level(level)}\n"
    )

    table = Table()
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Kind")
    table.add_column("Difficulty")
    table.add_column("Prompt")
    for index, question in enumerate(subset, start=1):
        table.add_row(
            str(index),
            question.id,
            question.kind.value,
            question.resolved_difficulty.value,
            question.prompt[:60],
        )
    console.print(table)


@app.command()
def classify(
    history: Optional[Path] = typer.Option(
        None,
        "--history",
        help="JSON file with the learner's quiz attempts",
    ),
    session_dir: Optional[Path] = SessionDirOption,
) -> None:
    """Classify proficiency from attempt history, or the stored self-assessment."""
    engine = _engine()

    if history is None:
        assessment = SessionStore(session_dir).load().skill_assessment
        level = engine.classify_proficiency(assessment)
        console.print(f"Self-assessment level: {style_level(level)}")
        return

    attempts = _load_many(history, QuizAttempt)
    decision = engine.classifier.decide(attempts)
    stats = summarize_attempts(attempts)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="bold")
    table.add_row("Attempts", str(stats.total_attempts))
    table.add_row("Passed / failed", f"{stats.passed} / {stats.failed}")
    table.add_row("Average score", f"{stats.average_score:.1f}%")
    table.add_row("Improvement", f"{stats.improvement:+.1f}")
    table.add_row("History level", style_level(engine.classify_proficiency(attempts)))
    table.add_row("Recent level", f"{style_level(decision.level)} [dim]({decision.rule})[/dim]")
    console.print(table)


@app.command("coding-tier")
def coding_tier(
    dsa: Optional[int] = typer.Option(None, "--dsa", "-d", help="DSA self-rating 1-5"),
    quiz_score: float = typer.Option(0.0, "--quiz-score", "-q", help="Quiz percentage 0-100"),
    session_dir: Optional[Path] = SessionDirOption,
) -> None:
    """Resolve the coding-challenge tier and list its challenges."""
    if dsa is None:
        assessment = SessionStore(session_dir).load().skill_assessment
        dsa = assessment.ratings.get(Topic.DSA.value) if assessment else None

    tier = _engine().resolve_coding_tier(dsa, quiz_score)
    console.print(f"Coding tier: {style_level(tier)}\n")

    table = Table()
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Tests", justify="right")
    for challenge in select_challenges(dsa, quiz_score):
        table.add_row(challenge.id, challenge.title, str(len(challenge.all_tests)))
    console.print(table)


@app.command()
def evaluate(
    quiz_attempt: Optional[Path] = typer.Option(
        None, "--quiz-attempt", "-a", help="JSON file with the assessment quiz attempt"
    ),
    submissions: Optional[Path] = typer.Option(
        None, "--submissions", "-c", help="JSON file with coding submissions"
    ),
    attendance: Optional[Path] = typer.Option(
        None, "--attendance", help="JSON file with the attendance record"
    ),
    quizzes_file: Optional[Path] = typer.Option(
        None, "--quizzes", help="Quiz catalogue, for the required-quiz gate"
    ),
    attempts_file: Optional[Path] = typer.Option(
        None, "--attempts", help="Attempt history, for the required-quiz gate"
    ),
    session_dir: Optional[Path] = SessionDirOption,
) -> None:
    """Run the eligibility gates and store the leave-eligibility record."""
    engine = _engine()
    attempt = _load_one(quiz_attempt, QuizAttempt)
    coding = _load_many(submissions, CodingSubmission)
    record = _load_one(attendance, AttendanceRecord)

    status = None
    required = None
    if quizzes_file is not None:
        catalogue = _load_many(quizzes_file, Quiz)
        history = _load_many(attempts_file, QuizAttempt)
        status = engine.gate.required_quiz_status(catalogue, history)
        required = engine.gate.evaluate_required(status)

    result = engine.evaluate_eligibility(attempt, coding, status, record)
    _display_result(result)
    if required is not None:
        _display_result(required)

    store = SessionStore(session_dir)
    store.save(engine.record_eligibility(store.load(), result))


def _display_result(result: EligibilityResult) -> None:
    def mark(ok: Optional[bool]) -> str:
        return "[green]✓[/green]" if ok else "[red]✗[/red]"

    table = Table(show_header=False, box=None)
    table.add_column("Criterion", style="dim")
    table.add_column("Value")
    table.add_column("")

    if result.gate == "coding":
        table.add_row("Quiz score", f"{result.quiz_score:.0f}%", mark(result.quiz_passed))
        table.add_row("Coding average", f"{result.avg_coding_score:.0f}%", mark(result.coding_passed))
        table.add_row(
            "Challenges passed",
            f"{result.passed_challenges}/{result.total_challenges}",
            mark(result.challenges_passed),
        )
        if result.attendance_passed is not None:
            table.add_row("Attendance", "", mark(result.attendance_passed))
        table.add_row("Final score", str(result.final_score), "")
    else:
        table.add_row(
            "Required quizzes",
            f"{result.required_completed}/{result.required_total}",
            mark(result.required_completed == result.required_total and bool(result.required_total)),
        )
        table.add_row("Required average", f"{result.required_average:.1f}%", "")

    style = "green" if result.is_eligible else "yellow"
    body = result.message
    if result.suggestions:
        body += "\n\n" + "\n".join(f"- {s}" for s in result.suggestions)

    console.print(table)
    console.print(Panel(body, title=result.gate.replace("_", " ").title(), border_style=style))


@app.command()
def reset(
    confirm: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation",
    ),
    session_dir: Optional[Path] = SessionDirOption,
) -> None:
    """Clear the stored self-assessment and current-quiz marker."""
    if not confirm and not Confirm.ask("Clear the stored skill assessment?", default=False):
        raise typer.Exit(0)

    SessionStore(session_dir).clear_assessment()
    console.print("[green]Skill assessment cleared.[/green]")


# =============================================================================
# Entry Point
# =============================================================================


def run() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    run()
