"""Tests for SearchPhase."""

import json
from datetime import UTC, datetime

import httpx

from memorybench.checkpoint.domain.checkpoint import Checkpoint
from memorybench.dataset.domain.item import DatasetItem
from memorybench.pipeline.application.calls import PacedCaller
from memorybench.pipeline.application.search import SearchPhase
from memorybench.pipeline.domain.records import SearchRecord
from memorybench.provider.domain.provider import MemoryProvider, SearchOptions
from memorybench.provider.infrastructure.supermemory import SupermemoryProvider
from memorybench.retry.domain.policy import RetryPolicy
from tests.checkpoint.fake_store import InMemoryCheckpointStore
from tests.pacing.fake_pacer import FakePacer
from tests.pipeline.fake_observer import FakePipelineObserver
from tests.provider.fake_observer import FakeProviderObserver
from tests.provider.fake_provider import FakeProvider
from tests.retry.fake_observer import FakeRetryObserver
from tests.retry.fake_sleep import FakeSleep

_RUN = "run-1"


def _make_item(item_id: str, question: str, needle: str | None = None) -> DatasetItem:
    return DatasetItem(
        item_id=item_id, question=question, answer="A", container_id="conv", needle=needle
    )


def _make_phase(
    provider: MemoryProvider,
    store: InMemoryCheckpointStore,
    observer: FakePipelineObserver,
) -> SearchPhase:
    caller = PacedCaller(
        pacer=FakePacer(),
        retry_policy=RetryPolicy(max_attempts=2),
        retry_observer=FakeRetryObserver(),
        sleep=FakeSleep(),
    )
    return SearchPhase(
        provider=provider,
        store=store,
        caller=caller,
        observer=observer,
        options=SearchOptions(limit=5),
        checkpoint_every=10,
    )


def _make_provider() -> FakeProvider:
    provider = FakeProvider()
    provider.containers["conv-run-1"] = ["Yuki lives next to the Semper Opera House."]
    return provider


class TestSearchPhase:
    async def test_searches_each_item_in_its_container(self) -> None:
        provider = _make_provider()
        store = InMemoryCheckpointStore()
        phase = _make_phase(provider, store, FakePipelineObserver())
        items = [_make_item("q1", "Who lives near the opera?"), _make_item("q2", "Where?")]

        records = await phase.run(_RUN, items)

        assert provider.search_calls == [
            ("Who lives near the opera?", "conv-run-1"),
            ("Where?", "conv-run-1"),
        ]
        assert [record.item_id for record in records] == ["q1", "q2"]
        assert records[0].results[0].content.startswith("Yuki")
        assert records[0].retrieved_needle is None
        assert store.checkpoints[(_RUN, "search")].is_complete(2)

    async def test_needle_retrieval_is_recorded(self) -> None:
        phase = _make_phase(_make_provider(), InMemoryCheckpointStore(), FakePipelineObserver())
        items = [
            _make_item("q1", "Q1", needle="Yuki lives next to the Semper Opera House."),
            _make_item("q2", "Q2", needle="Kai owns a red bicycle."),
        ]

        records = await phase.run(_RUN, items)

        assert [record.retrieved_needle for record in records] == [True, False]

    async def test_failed_search_is_recorded_and_phase_continues(self) -> None:
        provider = _make_provider()
        provider.fail_search["broken?"] = 400
        store = InMemoryCheckpointStore()
        observer = FakePipelineObserver()
        phase = _make_phase(provider, store, observer)

        records = await phase.run(_RUN, [_make_item("q1", "broken?"), _make_item("q2", "ok?")])

        assert records[0].error is not None
        assert records[0].results == []
        assert records[1].error is None
        assert observer.items_failed[0].item_id == "q1"
        assert observer.phases_completed[0].failed == 1
        checkpoint = store.checkpoints[(_RUN, "search")]
        assert checkpoint.is_complete(2)
        assert checkpoint.failures[0].item_id == "q1"

    async def test_resume_returns_earlier_records_without_searching_again(self) -> None:
        provider = _make_provider()
        store = InMemoryCheckpointStore()
        earlier = SearchRecord(
            item_id="q1", container_tag="conv-run-1", searched_at=datetime(2024, 1, 1, tzinfo=UTC)
        )
        store.save(
            Checkpoint.start(run_id=_RUN, provider_name="fake", phase="search").advance(
                0, "q1", result=earlier.model_dump(mode="json", by_alias=True)
            )
        )
        phase = _make_phase(provider, store, FakePipelineObserver())

        records = await phase.run(_RUN, [_make_item("q1", "first?"), _make_item("q2", "second?")])

        assert provider.search_calls == [("second?", "conv-run-1")]
        assert records[0] == earlier
        assert records[1].item_id == "q2"

    async def test_malformed_provider_response_is_recorded_and_phase_continues(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if json.loads(request.content)["containerTag"] == "a-run-1":
                chunk = {"content": "c", "position": "1.5"}
                return httpx.Response(
                    200, json={"results": [{"id": "m1", "memory": "x", "chunks": [chunk]}]}
                )
            return httpx.Response(200, json=[{"id": "m2", "memory": "Bob lives in Rome."}])

        provider = SupermemoryProvider(
            observer=FakeProviderObserver(),
            api_key="k",
            base_url="https://sm.test",
            transport=httpx.MockTransport(handler),
        )
        store = InMemoryCheckpointStore()
        observer = FakePipelineObserver()
        phase = _make_phase(provider, store, observer)
        items = [
            DatasetItem(item_id="a", question="Q?", answer="A", container_id="a"),
            DatasetItem(item_id="b", question="Q?", answer="A", container_id="b"),
        ]

        records = await phase.run(_RUN, items)

        assert records[0].error is not None
        assert "unexpected response shape" in records[0].error
        assert records[1].error is None
        assert records[1].results[0].content == "Bob lives in Rome."
        assert observer.items_failed[0].item_id == "a"
        assert store.checkpoints[(_RUN, "search")].is_complete(2)
        await provider.close()

    async def test_evidence_retrieval_is_scored_for_items_with_evidence(self) -> None:
        phase = _make_phase(_make_provider(), InMemoryCheckpointStore(), FakePipelineObserver())
        items = [
            DatasetItem(
                item_id="q1",
                question="Q1",
                answer="A",
                container_id="conv",
                evidence_ids=["conv-run-1-0"],
            ),
            _make_item("q2", "Q2"),
        ]

        records = await phase.run(_RUN, items)

        assert records[0].retrieval is not None
        assert records[0].retrieval.recall == 1.0
        assert records[0].retrieval.precision == 1.0
        assert records[1].retrieval is None
