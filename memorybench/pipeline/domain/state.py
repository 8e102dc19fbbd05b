"""Pipeline state machine — the fixed, forward-only sequence of phases."""

from enum import StrEnum

from memorybench.pipeline.domain.errors import InvalidPhaseTransitionError


class Phase(StrEnum):
    INGEST = "ingest"
    SEARCH = "search"
    EVALUATE = "evaluate"
    REPORT = "report"


class PipelineState(StrEnum):
    PENDING = "pending"
    INGESTING = "ingesting"
    SEARCHING = "searching"
    EVALUATING = "evaluating"
    REPORTED = "reported"


class PhaseStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    SKIPPED = "skipped"


_ORDER: list[PipelineState] = list(PipelineState)

_STATE_FOR_PHASE: dict[Phase, PipelineState] = {
    Phase.INGEST: PipelineState.INGESTING,
    Phase.SEARCH: PipelineState.SEARCHING,
    Phase.EVALUATE: PipelineState.EVALUATING,
    Phase.REPORT: PipelineState.REPORTED,
}


class PipelineStateMachine:
    """Tracks which phase a run is in and how each phase ended.

    A skipped phase still moves the machine forward, so nothing can return to
    it later in the same run.
    """

    def __init__(self) -> None:
        self._state = PipelineState.PENDING
        self._statuses: dict[Phase, PhaseStatus] = {
            phase: PhaseStatus.PENDING for phase in Phase
        }

    @property
    def state(self) -> PipelineState:
        return self._state

    def status(self, phase: Phase) -> PhaseStatus:
        return self._statuses[phase]

    def start(self, phase: Phase) -> None:
        """Enter phase.

        Raises:
            InvalidPhaseTransitionError: if phase is not ahead of the current state.
        """
        self._move_to(_STATE_FOR_PHASE[phase])
        self._statuses[phase] = PhaseStatus.RUNNING

    def complete(self, phase: Phase) -> None:
        if self._statuses[phase] is not PhaseStatus.RUNNING:
            raise InvalidPhaseTransitionError(
                current=self._state.value, target=f"{phase.value} completed"
            )
        self._statuses[phase] = PhaseStatus.COMPLETED

    def skip(self, phase: Phase) -> None:
        self._move_to(_STATE_FOR_PHASE[phase])
        self._statuses[phase] = PhaseStatus.SKIPPED

    def _move_to(self, target: PipelineState) -> None:
        if _ORDER.index(target) <= _ORDER.index(self._state):
            raise InvalidPhaseTransitionError(
                current=self._state.value, target=target.value
            )
        self._state = target
