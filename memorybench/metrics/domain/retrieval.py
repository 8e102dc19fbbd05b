"""Retrieval metrics — how well search results cover the documents holding an item's evidence.

Results are compared by source id: the id of the document each result was
extracted from, so several results from one document share an id. Precision
counts every result whose source is relevant. Recall, nDCG and average
precision credit each relevant document once, at its best rank.
"""

import math
from collections.abc import Sequence

from pydantic import BaseModel

from memorybench.core.models import CAMEL_FROZEN

DEFAULT_RANK_CUTOFF = 5


class RetrievalMetrics(BaseModel):
    model_config = CAMEL_FROZEN

    precision: float
    recall: float
    f1: float
    retrieved_count: int
    top_score: float
    average_score: float
    k: int
    recall_at_k: float
    precision_at_k: float
    ndcg_at_k: float
    average_precision: float


class RetrievalSummary(BaseModel):
    """Means of per-item RetrievalMetrics; average_precision becomes MAP."""

    model_config = CAMEL_FROZEN

    count: int
    k: int
    precision: float
    recall: float
    f1: float
    average_score: float
    recall_at_k: float
    precision_at_k: float
    ndcg_at_k: float
    mean_average_precision: float


def _first_relevant_ranks(retrieved: Sequence[str], relevant: set[str]) -> list[int]:
    """1-based ranks at which each relevant id first appears."""
    seen: set[str] = set()
    ranks: list[int] = []
    for rank, source in enumerate(retrieved, start=1):
        if source in relevant and source not in seen:
            seen.add(source)
            ranks.append(rank)
    return ranks


def precision_at_k(retrieved: Sequence[str], relevant: Sequence[str], k: int) -> float:
    top = retrieved[:k]
    if not top:
        return 0.0
    wanted = set(relevant)
    return sum(1 for source in top if source in wanted) / len(top)


def recall_at_k(retrieved: Sequence[str], relevant: Sequence[str], k: int) -> float:
    wanted = set(relevant)
    if not wanted:
        return 0.0
    return len(_first_relevant_ranks(retrieved[:k], wanted)) / len(wanted)


def ndcg_at_k(retrieved: Sequence[str], relevant: Sequence[str], k: int) -> float:
    """Binary-relevance nDCG over the top k results."""
    wanted = set(relevant)
    ideal = sum(1 / math.log2(rank + 1) for rank in range(1, min(len(wanted), k) + 1))
    if ideal == 0:
        return 0.0
    gain = sum(1 / math.log2(rank + 1) for rank in _first_relevant_ranks(retrieved[:k], wanted))
    return gain / ideal


def average_precision(retrieved: Sequence[str], relevant: Sequence[str]) -> float:
    """Sum of precision at each relevant hit, over the number of relevant documents.

    Relevant documents never retrieved contribute zero.
    """
    wanted = set(relevant)
    if not wanted:
        return 0.0
    ranks = _first_relevant_ranks(retrieved, wanted)
    return sum(hits / rank for hits, rank in enumerate(ranks, start=1)) / len(wanted)


def retrieval_metrics(
    retrieved: Sequence[str],
    scores: Sequence[float],
    relevant: Sequence[str],
    k: int = DEFAULT_RANK_CUTOFF,
) -> RetrievalMetrics:
    """Score one ranked result list against the relevant source ids.

    retrieved and scores are parallel, best result first.
    """
    precision = precision_at_k(retrieved, relevant, len(retrieved))
    recall = recall_at_k(retrieved, relevant, len(retrieved))
    f1 = 2 * precision * recall / (precision + recall) if precision + recall else 0.0
    return RetrievalMetrics(
        precision=precision,
        recall=recall,
        f1=f1,
        retrieved_count=len(retrieved),
        top_score=max(scores, default=0.0),
        average_score=sum(scores) / len(scores) if scores else 0.0,
        k=k,
        recall_at_k=recall_at_k(retrieved, relevant, k),
        precision_at_k=precision_at_k(retrieved, relevant, k),
        ndcg_at_k=ndcg_at_k(retrieved, relevant, k),
        average_precision=average_precision(retrieved, relevant),
    )


def summarize_retrieval(metrics: Sequence[RetrievalMetrics]) -> RetrievalSummary | None:
    """Mean of each metric rounded to four decimals; None when no item was scored."""
    if not metrics:
        return None

    def mean(values: list[float]) -> float:
        return round(sum(values) / len(values), 4)

    return RetrievalSummary(
        count=len(metrics),
        k=metrics[0].k,
        precision=mean([m.precision for m in metrics]),
        recall=mean([m.recall for m in metrics]),
        f1=mean([m.f1 for m in metrics]),
        average_score=mean([m.average_score for m in metrics]),
        recall_at_k=mean([m.recall_at_k for m in metrics]),
        precision_at_k=mean([m.precision_at_k for m in metrics]),
        ndcg_at_k=mean([m.ndcg_at_k for m in metrics]),
        mean_average_precision=mean([m.average_precision for m in metrics]),
    )
