"""PhaseOrchestrator — runs ingest → search → evaluate → report for one run id."""

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from memorybench.checkpoint.domain.store import CheckpointStore
from memorybench.config.domain.phases import PhasesConfig
from memorybench.core.errors import MemoryBenchError
from memorybench.dataset.domain.item import DatasetItem
from memorybench.metrics.application.aggregator import build_report
from memorybench.metrics.domain.report import EvaluationRecord, Report
from memorybench.metrics.domain.writer import ReportWriter
from memorybench.pipeline.application.calls import PacedCaller
from memorybench.pipeline.application.evaluate import EnginePair, EvaluationPhase
from memorybench.pipeline.application.ingest import IngestPhase
from memorybench.pipeline.application.search import SearchPhase, search_records
from memorybench.pipeline.domain.container import group_ingest_units
from memorybench.pipeline.domain.errors import PrerequisitePhaseIncompleteError
from memorybench.pipeline.domain.observer import PipelineObserver
from memorybench.pipeline.domain.records import SearchRecord
from memorybench.pipeline.domain.state import Phase, PipelineState, PipelineStateMachine
from memorybench.provider.domain.provider import MemoryProvider, SearchOptions


@dataclass(frozen=True)
class RunResult:
    run_id: str
    state: PipelineState
    reports: list[Report] = field(default_factory=list)
    report_paths: list[Path] = field(default_factory=list)


class PhaseOrchestrator:
    """Sequences the phases of one run and enforces their prerequisites.

    Every phase resumes from its own checkpoint. A phase whose inputs are
    missing (search before a complete ingest, evaluation before a complete
    search) raises PrerequisitePhaseIncompleteError rather than re-running
    the earlier phase. Skipping evaluation also skips the report. A provider
    that is not persistent can only be searched after ingesting every
    container in the same process.

    The provider is initialized only when ingest or search runs, and is
    always closed before run() returns.
    """

    def __init__(
        self,
        run_id: str,
        benchmark: str,
        provider: MemoryProvider,
        store: CheckpointStore,
        report_writer: ReportWriter,
        engines: list[EnginePair],
        caller: PacedCaller,
        observer: PipelineObserver,
        search_options: SearchOptions,
        phases: PhasesConfig,
        checkpoint_every: int = 10,
    ) -> None:
        self._run_id = run_id
        self._benchmark = benchmark
        self._provider = provider
        self._store = store
        self._report_writer = report_writer
        self._engines = engines
        self._caller = caller
        self._observer = observer
        self._search_options = search_options
        self._phases = phases
        self._checkpoint_every = checkpoint_every
        self._state = PipelineStateMachine()

    @property
    def state(self) -> PipelineState:
        return self._state.state

    async def run(self, items: list[DatasetItem]) -> RunResult:
        """Run every phase that is not skipped and return the written reports.

        Raises:
            PrerequisitePhaseIncompleteError: if a phase's inputs are missing.
            IngestAbortedError: if a container cannot be ingested.
            CheckpointWriteError: if a checkpoint cannot be saved.
        """
        self._observer.run_started(
            run_id=self._run_id,
            benchmark=self._benchmark,
            provider=self._provider.name,
            total_items=len(items),
        )
        started_at = time.monotonic()
        needs_provider = not (self._phases.skip_ingest and self._phases.skip_search)
        try:
            self._check_documents_survive(items)
            if needs_provider:
                await self._provider.initialize()
            await self._ingest(items)
            searches = await self._search(items)
            evaluations = await self._evaluate(items, searches)
            result = self._report(evaluations)
        except MemoryBenchError as exc:
            self._observer.run_failed(run_id=self._run_id, reason=str(exc))
            raise
        finally:
            if needs_provider:
                await self._provider.close()

        self._observer.run_completed(
            run_id=self._run_id,
            reports=len(result.reports),
            elapsed_seconds=time.monotonic() - started_at,
        )
        return result

    async def _ingest(self, items: list[DatasetItem]) -> None:
        if self._phases.skip_ingest:
            self._skip(Phase.INGEST)
            return
        self._state.start(Phase.INGEST)
        phase = IngestPhase(
            provider=self._provider,
            store=self._store,
            caller=self._caller,
            observer=self._observer,
            checkpoint_every=self._checkpoint_every,
        )
        await phase.run(self._run_id, group_ingest_units(items, self._run_id))
        self._state.complete(Phase.INGEST)

    async def _search(self, items: list[DatasetItem]) -> list[SearchRecord] | None:
        if self._phases.skip_search:
            self._skip(Phase.SEARCH)
            return None

        units = group_ingest_units(items, self._run_id)
        ingest = self._store.load(self._run_id, Phase.INGEST)
        if ingest is None or not ingest.is_complete(len(units)):
            done = 0 if ingest is None else ingest.next_index
            raise PrerequisitePhaseIncompleteError(
                phase=Phase.SEARCH,
                prerequisite=Phase.INGEST,
                detail=f"{done}/{len(units)} containers ingested",
            )

        self._state.start(Phase.SEARCH)
        phase = SearchPhase(
            provider=self._provider,
            store=self._store,
            caller=self._caller,
            observer=self._observer,
            options=self._search_options,
            checkpoint_every=self._checkpoint_every,
        )
        searches = await phase.run(self._run_id, items)
        self._state.complete(Phase.SEARCH)
        return searches

    async def _evaluate(
        self, items: list[DatasetItem], searches: list[SearchRecord] | None
    ) -> list[list[EvaluationRecord]] | None:
        if self._phases.skip_evaluate:
            self._skip(Phase.EVALUATE)
            return None

        if searches is None:
            searches = self._completed_searches(items)

        self._state.start(Phase.EVALUATE)
        evaluations: list[list[EvaluationRecord]] = []
        for engines in self._engines:
            phase = EvaluationPhase(
                engines=engines,
                store=self._store,
                observer=self._observer,
                checkpoint_every=self._checkpoint_every,
            )
            evaluations.append(
                await phase.run(
                    run_id=self._run_id,
                    provider_name=self._provider.name,
                    items=items,
                    searches=searches,
                )
            )
        self._state.complete(Phase.EVALUATE)
        return evaluations

    def _report(self, evaluations: list[list[EvaluationRecord]] | None) -> RunResult:
        if evaluations is None:
            self._skip(Phase.REPORT)
            return RunResult(run_id=self._run_id, state=self._state.state)

        self._state.start(Phase.REPORT)
        reports: list[Report] = []
        paths: list[Path] = []
        for engines, records in zip(self._engines, evaluations, strict=True):
            if not records:
                raise PrerequisitePhaseIncompleteError(
                    phase=Phase.REPORT,
                    prerequisite=Phase.EVALUATE,
                    detail=f"no evaluation records for {engines.phase}",
                )
            report = build_report(
                records=records,
                run_id=self._run_id,
                benchmark=self._benchmark,
                provider_name=self._provider.name,
                answering_model=engines.answering.model_name,
                judge_model=engines.judge.model_name,
                evaluated_at=datetime.now(UTC),
            )
            path = self._report_writer.write(report)
            self._observer.report_written(
                run_id=self._run_id,
                answering_model=engines.answering.model_name,
                judge_model=engines.judge.model_name,
                accuracy=report.summary.accuracy,
                path=path,
            )
            reports.append(report)
            paths.append(path)
        self._state.complete(Phase.REPORT)
        return RunResult(
            run_id=self._run_id,
            state=self._state.state,
            reports=reports,
            report_paths=paths,
        )

    def _completed_searches(self, items: list[DatasetItem]) -> list[SearchRecord]:
        checkpoint = self._store.load(self._run_id, Phase.SEARCH)
        if checkpoint is None or not checkpoint.is_complete(len(items)):
            done = 0 if checkpoint is None else checkpoint.next_index
            raise PrerequisitePhaseIncompleteError(
                phase=Phase.EVALUATE,
                prerequisite=Phase.SEARCH,
                detail=f"{done}/{len(items)} items searched",
            )
        return search_records(checkpoint)

    def _check_documents_survive(self, items: list[DatasetItem]) -> None:
        if self._provider.persistent or self._phases.skip_search:
            return
        search = self._store.load(self._run_id, Phase.SEARCH)
        if search is not None and search.is_complete(len(items)):
            return
        if not self._phases.skip_ingest:
            ingest = self._store.load(self._run_id, Phase.INGEST)
            if ingest is None or ingest.next_index == 0:
                return
        raise PrerequisitePhaseIncompleteError(
            phase=Phase.SEARCH,
            prerequisite=Phase.INGEST,
            detail=(
                f"{self._provider.name} keeps documents only in memory, so ingest must"
                " run from the first container in this process; use a new run id"
            ),
        )

    def _skip(self, phase: Phase) -> None:
        self._state.skip(phase)
        self._observer.phase_skipped(run_id=self._run_id, phase=phase)
