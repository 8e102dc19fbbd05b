"""EvaluationPhase — answers and grades every item for one (answering, judge) model pair."""

import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

from memorybench.answering.application.engine import AnsweringEngine
from memorybench.answering.domain.prompts import is_error_answer
from memorybench.checkpoint.domain.cadence import SaveCadence
from memorybench.checkpoint.domain.checkpoint import Checkpoint, should_skip
from memorybench.checkpoint.domain.store import CheckpointStore
from memorybench.context.domain.assembler import assemble_context
from memorybench.dataset.domain.item import DatasetItem
from memorybench.judge.application.engine import JudgeEngine
from memorybench.judge.domain.errors import JudgeInvocationError
from memorybench.metrics.domain.naming import evaluation_phase
from memorybench.metrics.domain.report import EvaluationRecord
from memorybench.metrics.domain.text import exact_match, f1_score, strict_exact_match
from memorybench.pipeline.application.calls import truncate_reason
from memorybench.pipeline.domain.observer import PipelineObserver
from memorybench.pipeline.domain.records import SearchRecord


@dataclass(frozen=True)
class EnginePair:
    answering: AnsweringEngine
    judge: JudgeEngine

    @property
    def phase(self) -> str:
        return evaluation_phase(self.answering.model_name, self.judge.model_name)


class EvaluationPhase:
    """Evaluates items for one model pair, resuming by item identity.

    Each pair has its own checkpoint. Items whose search, answer or judge step
    failed are returned as failed WRONG records but are not marked processed,
    so the next run with the same run id tries them again.
    """

    def __init__(
        self,
        engines: EnginePair,
        store: CheckpointStore,
        observer: PipelineObserver,
        checkpoint_every: int,
    ) -> None:
        self._engines = engines
        self._store = store
        self._observer = observer
        self._checkpoint_every = checkpoint_every

    async def run(
        self,
        run_id: str,
        provider_name: str,
        items: list[DatasetItem],
        searches: list[SearchRecord],
    ) -> list[EvaluationRecord]:
        """Return one record per item, in item order."""
        phase = self._engines.phase
        checkpoint = self._store.load(run_id, phase) or Checkpoint.start(
            run_id=run_id, provider_name=provider_name, phase=phase
        )
        pending = [
            (index, item)
            for index, item in enumerate(items)
            if not should_skip(checkpoint, item.item_id)
        ]
        self._observer.phase_started(
            run_id=run_id,
            phase=phase,
            total=len(items),
            resume_from=len(items) - len(pending),
        )
        started_at = time.monotonic()
        cadence = SaveCadence(self._checkpoint_every)
        searches_by_id = {search.item_id: search for search in searches}
        failed: dict[str, EvaluationRecord] = {}

        for done, (index, item) in enumerate(pending, len(items) - len(pending) + 1):
            record = await self._evaluate_item(item, searches_by_id.get(item.item_id))
            if record.failed:
                failed[item.item_id] = record
                self._observer.item_failed(
                    run_id=run_id,
                    phase=phase,
                    item_id=item.item_id,
                    reason=truncate_reason(record.explanation),
                )
                checkpoint = checkpoint.record_failure(
                    index=index, item_id=item.item_id, error=record.explanation
                )
            else:
                checkpoint = checkpoint.mark_processed(
                    index=index,
                    item_id=item.item_id,
                    result=record.model_dump(mode="json", by_alias=True),
                )
            if cadence.record():
                self._store.save(checkpoint)
            self._observer.phase_progress(
                run_id=run_id, phase=phase, completed=done, total=len(items)
            )

        self._store.save(checkpoint)
        cadence.flushed()
        self._observer.phase_completed(
            run_id=run_id,
            phase=phase,
            processed=len(pending) - len(failed),
            failed=len(failed),
            elapsed_seconds=time.monotonic() - started_at,
        )

        evaluated = {
            record.item_id: record
            for record in (
                EvaluationRecord.model_validate(raw)
                for raw in checkpoint.accumulated_results
            )
        }
        evaluated.update(failed)
        return [evaluated[item.item_id] for item in items if item.item_id in evaluated]

    async def _evaluate_item(
        self, item: DatasetItem, search: SearchRecord | None
    ) -> EvaluationRecord:
        if search is None:
            return self._failed(item, None, "", "Failed to evaluate: no search record")
        if search.error is not None:
            return self._failed(item, search, "", search.error)

        answer = await self._engines.answering.answer(
            question=item.question,
            context=assemble_context(search.results),
            question_date=item.question_date,
            item_id=item.item_id,
        )
        if is_error_answer(answer):
            return self._failed(item, search, answer, answer)

        try:
            verdict = await self._engines.judge.judge(
                question=item.question,
                ground_truth=item.answer,
                answer=answer,
                category=item.category,
                item_id=item.item_id,
            )
        except JudgeInvocationError as exc:
            return self._failed(item, search, answer, str(exc))

        return self._record(
            item=item,
            search=search,
            answer=answer,
            label=verdict.label,
            explanation=verdict.explanation,
            failed=False,
        )

    def _failed(
        self,
        item: DatasetItem,
        search: SearchRecord | None,
        answer: str,
        error: str,
    ) -> EvaluationRecord:
        return self._record(
            item=item,
            search=search,
            answer=answer,
            label="WRONG",
            explanation=error,
            failed=True,
        )

    def _record(
        self,
        item: DatasetItem,
        search: SearchRecord | None,
        answer: str,
        label: Literal["CORRECT", "WRONG"],
        explanation: str,
        failed: bool,
    ) -> EvaluationRecord:
        return EvaluationRecord(
            item_id=item.item_id,
            category=item.category,
            question=item.question,
            ground_truth=item.answer,
            answer=answer,
            label=label,
            explanation=explanation,
            answering_model=self._engines.answering.model_name,
            judge_model=self._engines.judge.model_name,
            context_length=item.context_length,
            retrieved_needle=search.retrieved_needle if search else None,
            retrieval=search.retrieval if search else None,
            exact_match=exact_match(answer, item.answer) if answer else False,
            strict_exact_match=strict_exact_match(answer, item.answer) if answer else False,
            f1=f1_score(answer, item.answer) if answer else 0.0,
            failed=failed,
            evaluated_at=datetime.now(UTC),
        )
