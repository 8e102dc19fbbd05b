"""Assembles retrieved search results into the grounding text given to the answering model."""

from memorybench.provider.domain.search_result import Chunk, SearchResult

RESULT_SEPARATOR = "\n\n---\n\n"
CHUNKS_HEADER = "\n\n=== DEDUPLICATED CHUNKS ===\n"


def deduplicate_chunks(chunks: list[Chunk]) -> list[Chunk]:
    """Keep one chunk per distinct content, then order by ascending position.

    Among duplicates the first occurrence in input order survives. Sorting is
    stable, so distinct chunks that share a position keep their input order.
    """
    kept: dict[str, Chunk] = {}
    for chunk in chunks:
        kept.setdefault(chunk.content, chunk)
    return sorted(kept.values(), key=lambda chunk: chunk.position)


def format_result(index: int, result: SearchResult) -> str:
    """Render one search result as 'Result N:' followed by its content and dates."""
    parts = [f"Result {index}:", result.content]
    temporal = result.temporal_context
    if temporal is not None:
        details: list[str] = []
        if temporal.document_date:
            details.append(f"documentDate: {temporal.document_date}")
        if temporal.event_dates:
            details.append(f"eventDate: {', '.join(temporal.event_dates)}")
        if details:
            parts.append(f"Temporal Context: {' | '.join(details)}")
    return "\n".join(parts)


def assemble_context(results: list[SearchResult]) -> str:
    """Build the context text: one section per result, then the deduplicated chunks.

    Returns the empty string when there are no results.
    """
    memories = RESULT_SEPARATOR.join(
        format_result(index, result) for index, result in enumerate(results, 1)
    )
    chunks = deduplicate_chunks([chunk for result in results for chunk in result.chunks])
    if not chunks:
        return memories
    return memories + CHUNKS_HEADER + RESULT_SEPARATOR.join(chunk.content for chunk in chunks)
