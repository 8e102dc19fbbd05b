"""Prompt templates for answering a question from retrieved memories."""

NO_RELEVANT_INFORMATION = "NO_RELEVANT_INFORMATION"
NO_CONTEXT_ANSWER = "I don't have enough information in my memory to answer this question."
UNKNOWN_ANSWER = "Unable to find the answer in the provided context."
ERROR_MARKER_PREFIX = "Error generating answer: "


def is_error_answer(answer: str) -> bool:
    return answer.startswith(ERROR_MARKER_PREFIX)


def _date_line(question_date: str | None) -> str:
    return f"Question Date: {question_date}\n" if question_date else ""


def answer_prompt(question: str, context: str, question_date: str | None) -> str:
    return f"""\
You are a question-answering system. Answer the question using only the \
retrieved memory context below.

Question: {question}
{_date_line(question_date)}
Retrieved Context:
{context}

How to read the context:
- Each "Result N" is a memory the system retrieved: a short fact or summary.
- The section after "=== DEDUPLICATED CHUNKS ===" holds the raw passages the \
memories were extracted from. Prefer chunks for specific details.
- "Temporal Context" gives documentDate (when the content was written) and \
eventDate (when the described event happened). Resolve relative expressions \
such as "yesterday" against documentDate, and reason about time from the \
question date, not today's date.

Instructions:
- Answer in at most a few dozen words.
- If the context does not contain the answer, say "I don't know" and name \
what is missing.

Answer:"""


def extraction_prompt(
    question: str, part: str, part_number: int, total_parts: int, question_date: str | None
) -> str:
    return f"""\
You are reading part {part_number} of {total_parts} of a long retrieved \
context. Extract only the information from this part that helps answer the \
question, and answer it as far as this part allows.

Question: {question}
{_date_line(question_date)}
Context (Part {part_number} of {total_parts}):
{part}

If this part contains nothing relevant to the question, reply with exactly \
{NO_RELEVANT_INFORMATION} and nothing else.

Relevant information:"""


def synthesis_prompt(question: str, extracts: list[str], question_date: str | None) -> str:
    numbered = "\n\n".join(
        f"Extract {index}:\n{extract}" for index, extract in enumerate(extracts, 1)
    )
    return f"""\
Several parts of a long context were searched separately for information \
relevant to a question. Combine the extracts below into one concise answer of \
at most a few dozen words. When extracts disagree, prefer the most recent \
information.

Question: {question}
{_date_line(question_date)}
{numbered}

Answer:"""
