"""Evidence retrieval — which source documents search results came from."""

import re

from memorybench.metrics.domain.retrieval import (
    DEFAULT_RANK_CUTOFF,
    RetrievalMetrics,
    retrieval_metrics,
)
from memorybench.provider.domain.search_result import SearchResult

SESSION_ID_KEY = "sessionId"

_SESSION_MARKER = re.compile(r"=== Session: ([^\s=]+) ===")


def source_id(result: SearchResult) -> str:
    """The sessionId the source document was ingested with.

    Falls back to a "=== Session: <id> ===" marker in the content, then to the
    result's own id.
    """
    session = result.metadata.get(SESSION_ID_KEY)
    if session is not None:
        return str(session)
    match = _SESSION_MARKER.search(result.content)
    if match:
        return match.group(1)
    return result.id


def evidence_retrieval(
    evidence_ids: list[str],
    results: list[SearchResult],
    k: int = DEFAULT_RANK_CUTOFF,
) -> RetrievalMetrics:
    return retrieval_metrics(
        retrieved=[source_id(result) for result in results],
        scores=[result.score for result in results],
        relevant=evidence_ids,
        k=k,
    )
