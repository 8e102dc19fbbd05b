"""Colorized terminal summary of a finished run."""

from pathlib import Path

import typer

from memorybench.metrics.domain.report import Report

# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_BLUE = "\033[34m"
_WHITE = "\033[97m"

# Failures listed before the "... and N more" line.
MAX_LISTED_FAILURES = 20


def _accuracy_color(accuracy: float) -> str:
    if accuracy >= 80.0:
        return _GREEN
    if accuracy >= 50.0:
        return _YELLOW
    return _RED


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _bar(accuracy: float, width: int = 20) -> str:
    filled = round(accuracy / 100 * width)
    color = _accuracy_color(accuracy)
    return f"{color}{'█' * filled}{_DIM}{'░' * (width - filled)}{_RESET}"


def format_elapsed(elapsed_seconds: float) -> str:
    """Format elapsed seconds as '1m 23.4s' or '5.2s'."""
    minutes, seconds = divmod(elapsed_seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def print_run_header(run_id: str, benchmark: str, provider: str, elapsed_seconds: float) -> None:
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  memorybench  ·  Run Complete{_RESET}")
    _rule(color=_CYAN)
    typer.echo("")
    rows = [
        ("Run ID", run_id),
        ("Benchmark", benchmark),
        ("Provider", provider),
        ("Elapsed", format_elapsed(elapsed_seconds)),
    ]
    label_w = max(len(label) for label, _ in rows)
    for label, value in rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")


def print_report(report: Report, path: Path) -> None:
    """Print accuracy, per-category and per-context-length tables for one model pair."""
    meta = report.metadata
    summary = report.summary

    typer.echo("")
    _rule(color=_BLUE)
    typer.echo(
        f"{_BLUE}{_BOLD}  answer: {meta.answering_model}  ·  judge: {meta.judge_model}{_RESET}"
    )
    _rule(color=_BLUE)

    color = _accuracy_color(summary.accuracy)
    typer.echo(
        f"  {_WHITE}Accuracy{_RESET}        {color}{summary.accuracy:>6.2f}%{_RESET}"
        f"  {_DIM}({summary.correct}/{summary.total}){_RESET}"
    )
    if summary.macro_accuracy is not None:
        typer.echo(f"  {_WHITE}Macro accuracy{_RESET}  {summary.macro_accuracy:>6.2f}%")
    typer.echo(f"  {_WHITE}Average F1{_RESET}      {summary.average_f1:>6.4f}")
    if summary.retrieval is not None:
        retrieval = summary.retrieval
        typer.echo(
            f"  {_WHITE}Evidence recall{_RESET} {retrieval.recall:>6.4f}"
            f"  {_DIM}(precision {retrieval.precision:.4f}, n={retrieval.count}){_RESET}"
        )
        at_k = f"@{retrieval.k}"
        typer.echo(
            f"  {_WHITE}{'nDCG' + at_k:<16}{_RESET}{retrieval.ndcg_at_k:>6.4f}"
            f"  {_DIM}(recall{at_k} {retrieval.recall_at_k:.4f}, MAP"
            f" {retrieval.mean_average_precision:.4f}){_RESET}"
        )
    if summary.base_score is not None:
        typer.echo(f"  {_WHITE}Base score{_RESET}      {summary.base_score:>6.2f}%")
        effective = (
            str(summary.effective_length) if summary.effective_length is not None else "none"
        )
        typer.echo(f"  {_WHITE}Effective length{_RESET} {effective}")

    if report.by_category:
        category_w = max(len(row.category) for row in report.by_category)
        typer.echo("")
        typer.echo(
            f"  {_DIM}{'Category':<{category_w}}  {'Acc':>7}  {'N':>5}  Bar{_RESET}"
        )
        typer.echo(f"  {'─' * category_w}  {'─' * 7}  {'─' * 5}  {'─' * 20}")
        for row in report.by_category:
            typer.echo(
                f"  {_WHITE}{row.category:<{category_w}}{_RESET}"
                f"  {_accuracy_color(row.accuracy)}{row.accuracy:>6.2f}%{_RESET}"
                f"  {_DIM}{row.total:>5}{_RESET}"
                f"  {_bar(row.accuracy)}"
            )

    if report.by_context_length:
        typer.echo("")
        typer.echo(f"  {_DIM}{'Context':>8}  {'Acc':>7}  {'Needle':>7}  {'N':>5}{_RESET}")
        for row in report.by_context_length:
            rate = f"{row.retrieval_rate:.2f}%" if row.retrieval_rate is not None else "-"
            typer.echo(
                f"  {_WHITE}{row.context_length:>8}{_RESET}"
                f"  {_accuracy_color(row.accuracy)}{row.accuracy:>6.2f}%{_RESET}"
                f"  {rate:>7}"
                f"  {_DIM}{row.total:>5}{_RESET}"
            )

    typer.echo("")
    typer.echo(f"  {_DIM}Report{_RESET}  {path}")


def print_failures(reports: list[Report]) -> None:
    """List failed items (id and truncated error) after the accuracy summary."""
    failures = [
        (report.metadata.answering_model, failure)
        for report in reports
        for failure in report.failures
    ]
    if not failures:
        return

    typer.echo("")
    typer.echo(f"  {_YELLOW}{_BOLD}Failed items  ({len(failures)} total){_RESET}")
    for model, failure in failures[:MAX_LISTED_FAILURES]:
        typer.echo(f"  {_DIM}[{model}]{_RESET} {failure.item_id}: {failure.error}")
    if len(failures) > MAX_LISTED_FAILURES:
        typer.echo(
            f"  {_DIM}... and {len(failures) - MAX_LISTED_FAILURES} more, see the report files{_RESET}"
        )


def print_footer() -> None:
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo("")
