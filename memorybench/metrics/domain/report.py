"""Report — the aggregate written once an evaluation pass completes."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from memorybench.core.models import CAMEL_FROZEN
from memorybench.metrics.domain.retrieval import RetrievalMetrics, RetrievalSummary


class EvaluationRecord(BaseModel):
    """One graded answer for one item under one (answering model, judge model) pair.

    failed marks items whose search, answer or judge step errored; they count
    as WRONG and their explanation holds the error.
    """

    model_config = CAMEL_FROZEN

    item_id: str
    category: str | None = None
    question: str
    ground_truth: str
    answer: str
    label: Literal["CORRECT", "WRONG"]
    explanation: str
    answering_model: str
    judge_model: str
    context_length: int | None = None
    retrieved_needle: bool | None = None
    retrieval: RetrievalMetrics | None = None
    exact_match: bool = False
    strict_exact_match: bool = False
    f1: float = 0.0
    failed: bool = False
    evaluated_at: datetime

    @property
    def is_correct(self) -> bool:
        return self.label == "CORRECT"


class ReportMetadata(BaseModel):
    model_config = CAMEL_FROZEN

    run_id: str
    benchmark: str
    provider_name: str
    answering_model: str
    judge_model: str
    evaluated_at: datetime


class ReportSummary(BaseModel):
    model_config = CAMEL_FROZEN

    total: int
    correct: int
    accuracy: float
    macro_accuracy: float | None = None
    average_f1: float = 0.0
    failed: int = 0
    base_score: float | None = None
    effective_length: int | None = None
    retrieval: RetrievalSummary | None = None


class CategoryBreakdown(BaseModel):
    model_config = CAMEL_FROZEN

    category: str
    total: int
    correct: int
    accuracy: float


class ContextLengthBreakdown(BaseModel):
    model_config = CAMEL_FROZEN

    context_length: int
    total: int
    correct: int
    accuracy: float
    retrieval_rate: float | None = None


class FailureSummary(BaseModel):
    model_config = CAMEL_FROZEN

    item_id: str
    error: str


class Report(BaseModel):
    model_config = CAMEL_FROZEN

    metadata: ReportMetadata
    summary: ReportSummary
    by_category: list[CategoryBreakdown] = Field(default_factory=list)
    by_context_length: list[ContextLengthBreakdown] = Field(default_factory=list)
    evaluations: list[EvaluationRecord] = Field(default_factory=list)
    failures: list[FailureSummary] = Field(default_factory=list)
