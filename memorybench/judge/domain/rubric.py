"""Per-category grading rubrics and the judge prompt built from them."""

from enum import StrEnum


class Rubric(StrEnum):
    TEMPORAL = "temporal"
    KNOWLEDGE_UPDATE = "knowledge-update"
    PREFERENCE = "preference"
    DEFAULT = "default"


_CATEGORY_RUBRICS: dict[str, Rubric] = {
    "temporal-reasoning": Rubric.TEMPORAL,
    "temporal": Rubric.TEMPORAL,
    "knowledge-update": Rubric.KNOWLEDGE_UPDATE,
    "single-session-preference": Rubric.PREFERENCE,
    "preference": Rubric.PREFERENCE,
}

_BASE_INSTRUCTION = (
    "I will give you a question, a correct answer, and a response from a model. "
    "Label the response CORRECT if it contains the correct answer, otherwise WRONG. "
    "If the response is equivalent to the correct answer or contains all the "
    "intermediate steps to get the correct answer, it is also CORRECT. If the "
    "response only contains a subset of the information required by the answer, "
    "it is WRONG."
)

_INSTRUCTIONS: dict[Rubric, str] = {
    Rubric.DEFAULT: _BASE_INSTRUCTION,
    Rubric.TEMPORAL: (
        _BASE_INSTRUCTION
        + " Do not penalize off-by-one errors in counts of days, weeks, months and"
        " similar units: if the question asks for a number of days and the"
        " response says 19 where the answer is 18, the response is still CORRECT."
    ),
    Rubric.KNOWLEDGE_UPDATE: (
        "I will give you a question, a correct answer, and a response from a model. "
        "Label the response CORRECT if it contains the correct answer, otherwise "
        "WRONG. If the response mentions earlier information along with an updated "
        "answer, it is CORRECT as long as the updated answer is the required answer."
    ),
    Rubric.PREFERENCE: (
        "I will give you a question, a rubric describing the desired personalized "
        "response, and a response from a model. Label the response CORRECT if it "
        "satisfies the rubric, otherwise WRONG. The response does not need to "
        "reflect every point in the rubric; it is CORRECT as long as it recalls and "
        "uses the user's personal information correctly."
    ),
}


def rubric_for(category: str | None) -> Rubric:
    if category is None:
        return Rubric.DEFAULT
    return _CATEGORY_RUBRICS.get(category.lower(), Rubric.DEFAULT)


def judge_prompt(
    question: str, ground_truth: str, answer: str, category: str | None
) -> str:
    rubric = rubric_for(category)
    tag = "RUBRIC" if rubric is Rubric.PREFERENCE else "CORRECT ANSWER"
    return f"""\
{_INSTRUCTIONS[rubric]}

<QUESTION>
{question}
</QUESTION>

<{tag}>
{ground_truth}
</{tag}>

<RESPONSE>
{answer}
</RESPONSE>

Respond with JSON only, in this format:
{{"label": "CORRECT" or "WRONG", "reasoning": "one sentence explaining the label"}}"""
