"""MetricsAggregator — accuracy, per-category breakdowns and long-context degradation."""

from collections import defaultdict
from collections.abc import Sequence
from datetime import datetime

from memorybench.metrics.domain.report import (
    CategoryBreakdown,
    ContextLengthBreakdown,
    EvaluationRecord,
    FailureSummary,
    Report,
    ReportMetadata,
    ReportSummary,
)
from memorybench.metrics.domain.retrieval import summarize_retrieval

CONTEXT_LENGTH_BUCKETS: tuple[int, ...] = (1000, 4000, 8000, 16000, 32000)
BUCKET_TOLERANCE = 0.2
EFFECTIVE_LENGTH_RATIO = 0.85
UNCATEGORIZED = "uncategorized"
_ERROR_PREVIEW_CHARS = 80


def accuracy(correct: int, total: int) -> float:
    """Percentage of correct answers rounded to two decimals; 0.0 when total is 0."""
    if total == 0:
        return 0.0
    return round(100.0 * correct / total, 2)


def by_category(records: Sequence[EvaluationRecord]) -> list[CategoryBreakdown]:
    """Per-category totals in first-seen order."""
    totals: dict[str, list[int]] = {}
    for record in records:
        counts = totals.setdefault(record.category or UNCATEGORIZED, [0, 0])
        counts[0] += 1
        counts[1] += int(record.is_correct)
    return [
        CategoryBreakdown(
            category=category,
            total=total,
            correct=correct,
            accuracy=accuracy(correct, total),
        )
        for category, (total, correct) in totals.items()
    ]


def macro_accuracy(categories: Sequence[CategoryBreakdown]) -> float | None:
    """Mean of per-category accuracies; categories without items are left out.

    Returns None when no category has items.
    """
    populated = [category.accuracy for category in categories if category.total > 0]
    if not populated:
        return None
    return round(sum(populated) / len(populated), 2)


def bucket_for(
    length: int, buckets: Sequence[int] = CONTEXT_LENGTH_BUCKETS
) -> int | None:
    """Return the nominal bucket within 20% of length, or None."""
    for bucket in buckets:
        if abs(length - bucket) < bucket * BUCKET_TOLERANCE:
            return bucket
    return None


def by_context_length(
    records: Sequence[EvaluationRecord],
    buckets: Sequence[int] = CONTEXT_LENGTH_BUCKETS,
) -> list[ContextLengthBreakdown]:
    """Group records into nominal context-length buckets, smallest first.

    Records without a context length or outside every bucket's tolerance are
    not counted; empty buckets are omitted.
    """
    grouped: dict[int, list[EvaluationRecord]] = defaultdict(list)
    for record in records:
        if record.context_length is None:
            continue
        bucket = bucket_for(record.context_length, buckets)
        if bucket is not None:
            grouped[bucket].append(record)

    breakdown: list[ContextLengthBreakdown] = []
    for bucket in sorted(grouped):
        members = grouped[bucket]
        correct = sum(1 for record in members if record.is_correct)
        known = [r.retrieved_needle for r in members if r.retrieved_needle is not None]
        breakdown.append(
            ContextLengthBreakdown(
                context_length=bucket,
                total=len(members),
                correct=correct,
                accuracy=accuracy(correct, len(members)),
                retrieval_rate=accuracy(sum(known), len(known)) if known else None,
            )
        )
    return breakdown


def base_score(breakdown: Sequence[ContextLengthBreakdown]) -> float | None:
    """Accuracy of the smallest bucket."""
    if not breakdown:
        return None
    return min(breakdown, key=lambda b: b.context_length).accuracy


def effective_length(
    breakdown: Sequence[ContextLengthBreakdown],
    ratio: float = EFFECTIVE_LENGTH_RATIO,
) -> int | None:
    """Largest bucket whose accuracy is at least ratio × base score.

    Buckets are scanned from largest to smallest and the first qualifying one
    wins. None means no bucket qualifies.
    """
    base = base_score(breakdown)
    if base is None:
        return None
    threshold = base * ratio
    for bucket in sorted(breakdown, key=lambda b: b.context_length, reverse=True):
        if bucket.accuracy >= threshold:
            return bucket.context_length
    return None


def build_report(
    records: Sequence[EvaluationRecord],
    run_id: str,
    benchmark: str,
    provider_name: str,
    answering_model: str,
    judge_model: str,
    evaluated_at: datetime,
) -> Report:
    """Aggregate records into a Report.

    Context-length figures are included only when some record carries a
    context length, and retrieval figures only when some record was scored
    against its evidence documents.
    """
    total = len(records)
    correct = sum(1 for record in records if record.is_correct)
    categories = by_category(records)
    lengths = by_context_length(records)

    summary = ReportSummary(
        total=total,
        correct=correct,
        accuracy=accuracy(correct, total),
        macro_accuracy=macro_accuracy(categories),
        average_f1=round(sum(r.f1 for r in records) / total, 4) if total else 0.0,
        failed=sum(1 for record in records if record.failed),
        base_score=base_score(lengths),
        effective_length=effective_length(lengths),
        retrieval=summarize_retrieval(
            [record.retrieval for record in records if record.retrieval is not None]
        ),
    )
    failures = [
        FailureSummary(item_id=record.item_id, error=record.explanation[:_ERROR_PREVIEW_CHARS])
        for record in records
        if record.failed
    ]
    return Report(
        metadata=ReportMetadata(
            run_id=run_id,
            benchmark=benchmark,
            provider_name=provider_name,
            answering_model=answering_model,
            judge_model=judge_model,
            evaluated_at=evaluated_at,
        ),
        summary=summary,
        by_category=categories,
        by_context_length=lengths,
        evaluations=list(records),
        failures=failures,
    )
