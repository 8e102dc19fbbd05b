"""CLI entrypoint for memorybench — typer app with `run` and `cleanup` commands."""

import asyncio
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog
import typer

from memorybench.answering.application.engine import AnsweringEngine
from memorybench.answering.infrastructure.observer import StructlogAnsweringObserver
from memorybench.checkpoint.infrastructure.json_store import JsonCheckpointStore
from memorybench.checkpoint.infrastructure.observer import StructlogCheckpointObserver
from memorybench.cli.output.summary import (
    print_failures,
    print_footer,
    print_report,
    print_run_header,
)
from memorybench.config.domain.config import BenchConfig
from memorybench.config.infrastructure.observer import StructlogConfigObserver
from memorybench.config.infrastructure.yaml_loader import YamlConfigLoader
from memorybench.context.domain.budget import ContextBudget
from memorybench.core.errors import MemoryBenchError
from memorybench.dataset.infrastructure.observer import StructlogDatasetObserver
from memorybench.dataset.infrastructure.registry import create_dataset_loader
from memorybench.judge.application.engine import JudgeEngine
from memorybench.judge.infrastructure.observer import StructlogJudgeObserver
from memorybench.llm.infrastructure.litellm import LiteLLMLanguageModel
from memorybench.llm.infrastructure.observer import StructlogModelObserver
from memorybench.metrics.infrastructure.json_writer import JsonReportWriter
from memorybench.pacing.infrastructure.fixed_interval import FixedIntervalPacer
from memorybench.pipeline.application.calls import PacedCaller
from memorybench.pipeline.application.cleanup import ContainerCleanup
from memorybench.pipeline.application.evaluate import EnginePair
from memorybench.pipeline.application.orchestrator import PhaseOrchestrator
from memorybench.pipeline.domain.observer import PipelineObserver
from memorybench.pipeline.infrastructure.composite_observer import (
    CompositePipelineObserver,
)
from memorybench.pipeline.infrastructure.observer import StructlogPipelineObserver
from memorybench.pipeline.infrastructure.progress_observer import (
    ProgressPipelineObserver,
)
from memorybench.provider.domain.provider import SearchOptions
from memorybench.provider.infrastructure.observer import StructlogProviderObserver
from memorybench.provider.infrastructure.registry import create_provider
from memorybench.retry.domain.policy import RetryPolicy
from memorybench.retry.infrastructure.observer import StructlogRetryObserver

app = typer.Typer(add_completion=False)


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def _generate_run_id(config: BenchConfig) -> str:
    """Build a run id: {provider}-{benchmark}-{YYYYMMDD-HHMMSS}."""
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return f"{config.provider.name}-{config.benchmark.name}-{stamp}"


def _overrides(
    run_id: str | None,
    benchmark: str | None,
    provider: str | None,
    limit: int | None,
    skip_ingest: bool,
    skip_search: bool,
    skip_evaluate: bool,
    answering_models: list[str] | None,
    judge_models: list[str] | None,
) -> dict[str, Any]:
    """Map command-line flags onto the config document; unset flags stay None."""
    return {
        "run_id": run_id,
        "benchmark": {"name": benchmark, "limit": limit},
        "provider": {"name": provider},
        "models": {
            "answering": answering_models or None,
            "judge": judge_models or None,
        },
        "phases": {
            "skip_ingest": skip_ingest or None,
            "skip_search": skip_search or None,
            "skip_evaluate": skip_evaluate or None,
        },
    }


def _retry_policy(config: BenchConfig) -> RetryPolicy:
    return RetryPolicy.model_validate(config.execution.retry.model_dump())


def _build_engines(
    config: BenchConfig, retry_policy: RetryPolicy, pacer: FixedIntervalPacer
) -> list[EnginePair]:
    """Pair every answering model with every judge model."""
    model_observer = StructlogModelObserver()
    retry_observer = StructlogRetryObserver()
    budget = ContextBudget(
        max_tokens=config.context.max_context_tokens,
        chars_per_token=config.context.chars_per_token,
    )
    engines: list[EnginePair] = []
    for answering_model in config.models.answering:
        for judge_model in config.models.judge:
            answering = AnsweringEngine(
                model=LiteLLMLanguageModel(
                    model=answering_model,
                    temperature=config.models.temperature,
                    observer=model_observer,
                ),
                budget=budget,
                retry_policy=retry_policy,
                pacer=pacer,
                observer=StructlogAnsweringObserver(),
                retry_observer=retry_observer,
            )
            judge = JudgeEngine(
                model=LiteLLMLanguageModel(
                    model=judge_model,
                    temperature=config.models.temperature,
                    observer=model_observer,
                ),
                retry_policy=retry_policy,
                pacer=pacer,
                observer=StructlogJudgeObserver(),
                retry_observer=retry_observer,
            )
            engines.append(EnginePair(answering=answering, judge=judge))
    return engines


def _load_config(
    config_path: Path, overrides: dict[str, Any] | None = None
) -> tuple[BenchConfig, str]:
    """Load the config and resolve its run id, generating one when absent."""
    loader = YamlConfigLoader(observer=StructlogConfigObserver())
    config = loader.load(path=config_path, overrides=overrides)
    return config, config.run_id or _generate_run_id(config)


@app.command()
def run(
    config_path: Path = typer.Argument(..., help="Path to benchmark config YAML"),
    output_dir: Path = typer.Option(
        Path("./results"),
        "--output-dir",
        "-o",
        help="Directory for checkpoints and reports",
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
    run_id: str | None = typer.Option(
        None, "--run-id", help="Run id; reuse one to resume an interrupted run"
    ),
    benchmark: str | None = typer.Option(None, "--benchmark", help="Benchmark name"),
    provider: str | None = typer.Option(None, "--provider", help="Provider name"),
    limit: int | None = typer.Option(None, "--limit", help="Evaluate at most N items"),
    skip_ingest: bool = typer.Option(False, "--skip-ingest", help="Skip ingestion"),
    skip_search: bool = typer.Option(False, "--skip-search", help="Skip search"),
    skip_evaluate: bool = typer.Option(
        False, "--skip-evaluate", help="Skip evaluation and reporting"
    ),
    answering_model: list[str] | None = typer.Option(
        None, "--answering-model", help="Answering model (repeatable)"
    ),
    judge_model: list[str] | None = typer.Option(
        None, "--judge-model", help="Judge model (repeatable)"
    ),
) -> None:
    """Run a memory provider benchmark from a YAML config file."""
    _configure_structlog(log_format=log_format)
    try:
        config, resolved_run_id = _load_config(
            config_path=config_path,
            overrides=_overrides(
                run_id=run_id,
                benchmark=benchmark,
                provider=provider,
                limit=limit,
                skip_ingest=skip_ingest,
                skip_search=skip_search,
                skip_evaluate=skip_evaluate,
                answering_models=answering_model,
                judge_models=judge_model,
            ),
        )
        dataset_loader = create_dataset_loader(
            benchmark=config.benchmark.name, observer=StructlogDatasetObserver()
        )
        items = dataset_loader.load(config=config.benchmark)

        retry_policy = _retry_policy(config)
        pacer = FixedIntervalPacer(
            interval_seconds=config.execution.request_interval_seconds
        )
        memory_provider = create_provider(
            config=config.provider, observer=StructlogProviderObserver()
        )
        observers: list[PipelineObserver] = [StructlogPipelineObserver()]
        if log_format != "json":
            observers.append(ProgressPipelineObserver())

        orchestrator = PhaseOrchestrator(
            run_id=resolved_run_id,
            benchmark=config.benchmark.name,
            provider=memory_provider,
            store=JsonCheckpointStore(
                root=output_dir, observer=StructlogCheckpointObserver()
            ),
            report_writer=JsonReportWriter(root=output_dir),
            engines=_build_engines(config, retry_policy, pacer),
            caller=PacedCaller(
                pacer=pacer,
                retry_policy=retry_policy,
                retry_observer=StructlogRetryObserver(),
            ),
            observer=CompositePipelineObserver(observers=observers),
            search_options=SearchOptions(
                limit=config.search.limit, threshold=config.search.threshold
            ),
            phases=config.phases,
            checkpoint_every=config.execution.checkpoint_every,
        )

        started_at = time.monotonic()
        result = asyncio.run(orchestrator.run(items))
        elapsed_seconds = time.monotonic() - started_at

        print_run_header(
            run_id=resolved_run_id,
            benchmark=config.benchmark.name,
            provider=memory_provider.name,
            elapsed_seconds=elapsed_seconds,
        )
        for report, path in zip(result.reports, result.report_paths, strict=True):
            print_report(report=report, path=path)
        print_failures(reports=result.reports)
        print_footer()

    except KeyboardInterrupt:
        typer.echo("Run interrupted. Resume with the same --run-id.")
        sys.exit(1)
    except MemoryBenchError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)


@app.command()
def cleanup(
    config_path: Path = typer.Argument(..., help="Path to benchmark config YAML"),
    run_id: str = typer.Option(..., "--run-id", help="Run whose containers to delete"),
    output_dir: Path = typer.Option(
        Path("./results"),
        "--output-dir",
        "-o",
        help="Directory holding the run's checkpoints",
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Delete every provider container recorded in a run's ingest checkpoint."""
    _configure_structlog(log_format=log_format)
    try:
        config, _ = _load_config(config_path=config_path, overrides={"run_id": run_id})

        retry_policy = _retry_policy(config)
        cleaner = ContainerCleanup(
            provider=create_provider(
                config=config.provider, observer=StructlogProviderObserver()
            ),
            store=JsonCheckpointStore(
                root=output_dir, observer=StructlogCheckpointObserver()
            ),
            caller=PacedCaller(
                pacer=FixedIntervalPacer(
                    interval_seconds=config.execution.request_interval_seconds
                ),
                retry_policy=retry_policy,
                retry_observer=StructlogRetryObserver(),
            ),
            observer=StructlogPipelineObserver(),
        )
        deleted = asyncio.run(cleaner.run(run_id))
        typer.echo(f"Deleted {len(deleted)} container(s) for run {run_id}.")

    except KeyboardInterrupt:
        typer.echo("Cleanup interrupted.")
        sys.exit(1)
    except MemoryBenchError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)


if __name__ == "__main__":
    app()
