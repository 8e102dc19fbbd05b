"""Top-level BenchConfig aggregate — the root configuration object."""

from typing import Annotated

from pydantic import BaseModel, Field

from memorybench.config.domain.benchmark import BenchmarkConfig
from memorybench.config.domain.context import ContextConfig
from memorybench.config.domain.execution import ExecutionConfig
from memorybench.config.domain.models import ModelsConfig
from memorybench.config.domain.phases import PhasesConfig
from memorybench.config.domain.provider import ProviderConfig
from memorybench.config.domain.search import SearchConfig

RunId = Annotated[str, Field(pattern=r"^[A-Za-z0-9._-]+$")]


class BenchConfig(BaseModel, frozen=True):
    """Root configuration aggregate for a memorybench run.

    run_id names the directory that owns the run's checkpoints and reports and
    is embedded in every container tag, so it is restricted to path-safe
    characters. When absent the CLI generates one.
    """

    run_id: RunId | None = None
    benchmark: BenchmarkConfig
    provider: ProviderConfig
    models: ModelsConfig
    search: SearchConfig = Field(default_factory=SearchConfig)
    context: ContextConfig = Field(default_factory=ContextConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    phases: PhasesConfig = Field(default_factory=PhasesConfig)
