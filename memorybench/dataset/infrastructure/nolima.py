"""NoLiMa loader — builds needle-in-a-haystack test cases at several context lengths."""

from pathlib import Path
from typing import Any

from memorybench.config.domain.benchmark import BenchmarkConfig
from memorybench.dataset.domain.item import DatasetItem, SourceDocument
from memorybench.dataset.domain.observer import DatasetObserver
from memorybench.dataset.domain.selection import select_items
from memorybench.dataset.infrastructure.errors import DatasetLoadError
from memorybench.dataset.infrastructure.files import read_json_list

BENCHMARK_NAME = "nolima"

CONTEXT_LENGTHS: tuple[int, ...] = (1000, 4000, 8000, 16000, 32000)
CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    return len(text) // CHARS_PER_TOKEN


def build_haystack(haystack: str, target_tokens: int, needle: str) -> str:
    """Truncate haystack to target_tokens worth of characters and put needle in the middle."""
    target_chars = target_tokens * CHARS_PER_TOKEN
    half = target_chars // 2
    return f"{haystack[:half]}\n\n{needle}\n\n{haystack[half:target_chars]}"


class NoLiMaLoader:
    """Loads a NoLiMa needle set and a directory of haystack .txt files.

    For every needle and test, one onehop case (and one twohop case when the
    needle defines that question) is built per context length. The needle's
    first character-set entry is the expected answer.
    """

    def __init__(self, observer: DatasetObserver) -> None:
        self._observer = observer

    def load(self, config: BenchmarkConfig) -> list[DatasetItem]:
        path = str(config.path)
        self._observer.dataset_loading_started(benchmark=BENCHMARK_NAME, path=path)
        try:
            if config.haystack_dir is None:
                raise DatasetLoadError(reason="nolima requires benchmark.haystack_dir")
            needles = read_json_list(config.path)
            haystack = _first_haystack(config.haystack_dir)
            items: list[DatasetItem] = []
            for index, needle in enumerate(needles):
                items.extend(_build_cases(needle=needle, index=index, haystack=haystack))
        except DatasetLoadError as exc:
            self._observer.dataset_loading_failed(
                benchmark=BENCHMARK_NAME, path=path, reason=str(exc)
            )
            raise

        selected = select_items(
            items=items, limit=config.limit, categories=config.categories
        )
        self._observer.dataset_loading_completed(
            benchmark=BENCHMARK_NAME, path=path, total_items=len(selected)
        )
        return selected


def _first_haystack(haystack_dir: Path) -> str:
    if not haystack_dir.is_dir():
        raise DatasetLoadError(reason=f"haystack directory not found: {haystack_dir}")
    files = sorted(haystack_dir.glob("*.txt"))
    if not files:
        raise DatasetLoadError(reason=f"no .txt haystacks in {haystack_dir}")
    return files[0].read_text(encoding="utf-8")


def _fill(template: str, args: list[str], character: str = "") -> str:
    padded = [*args, "", "", ""]
    return (
        template.replace("{CHAR}", character)
        .replace("{1}", padded[0])
        .replace("{2}", padded[1])
        .replace("{3}", padded[2])
    )


def _build_cases(needle: Any, index: int, haystack: str) -> list[DatasetItem]:
    try:
        needle_id = str(needle["id"])
        template = str(needle["needle"])
        questions: dict[str, str] = needle["questions"]
        character = str(needle["character_set"][0])
        tests: dict[str, Any] = needle["tests"]
    except (KeyError, IndexError, TypeError) as exc:
        raise DatasetLoadError(reason=f"needle {index}: malformed entry ({exc})") from exc

    cases: list[DatasetItem] = []
    for test_id, test in tests.items():
        args = [str(arg) for arg in test.get("input_args", [])]
        needle_text = _fill(template, args, character)
        hops = {"onehop": _fill(questions["onehop"], args)}
        if questions.get("twohop"):
            hops["twohop"] = _fill(questions["twohop"], args)

        for target in CONTEXT_LENGTHS:
            text = build_haystack(haystack=haystack, target_tokens=target, needle=needle_text)
            for hop, question in hops.items():
                cases.append(
                    DatasetItem(
                        item_id=f"{needle_id}_{test_id}_{hop}_{target}",
                        question=question,
                        answer=character,
                        category=hop,
                        documents=[SourceDocument(content=text)],
                        context_length=estimate_tokens(text),
                        needle=needle_text,
                    )
                )
    return cases
