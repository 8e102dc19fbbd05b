"""Verdict parsing — turns free-form judge output into a definite binary verdict.

Judge models wrap JSON in prose or markdown fences, drop quotes, or skip the
JSON altogether. parse_verdict never raises: it tries, in order,

1. the first {...} object in the text, parsed as JSON;
2. the literal fragments '"label": "CORRECT"' and '"label":"CORRECT"';
3. the keyword heuristic "contains CORRECT and does not contain WRONG";

and otherwise returns a negative verdict. Outside step 1 the raw text is
kept as the explanation.
"""

import json
from typing import Any, Literal

from pydantic import BaseModel

from memorybench.judge.domain.errors import JudgeParseError

type ParseMethod = Literal["json", "label_fragment", "keyword", "default"]

_LABEL_FRAGMENTS = ('"label": "CORRECT"', '"label":"CORRECT"')


class Verdict(BaseModel, frozen=True):
    correct: bool
    explanation: str
    method: ParseMethod

    @property
    def label(self) -> Literal["CORRECT", "WRONG"]:
        return "CORRECT" if self.correct else "WRONG"


def first_json_object(text: str) -> str:
    """Return the first balanced {...} substring, ignoring braces inside strings.

    Falls back to everything between the first '{' and the last '}' when the
    braces never balance.

    Raises:
        JudgeParseError: if text contains no '{' ... '}' span.
    """
    start = text.find("{")
    if start == -1:
        raise JudgeParseError("no '{' in judge output")

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]

    end = text.rfind("}")
    if end <= start:
        raise JudgeParseError("unterminated JSON object in judge output")
    return text[start : end + 1]


def _parse_json_verdict(text: str) -> Verdict:
    try:
        parsed: Any = json.loads(first_json_object(text))
    except json.JSONDecodeError as exc:
        raise JudgeParseError(str(exc)) from exc
    if not isinstance(parsed, dict):
        raise JudgeParseError("judge JSON is not an object")

    label = parsed.get("label")
    correct = label == "CORRECT" or label == 1
    explanation = parsed.get("reasoning") or parsed.get("explanation") or ""
    return Verdict(correct=correct, explanation=str(explanation), method="json")


def parse_verdict(raw: str) -> Verdict:
    try:
        return _parse_json_verdict(raw)
    except JudgeParseError:
        return _fallback_verdict(raw)


def _fallback_verdict(raw: str) -> Verdict:
    if any(fragment in raw for fragment in _LABEL_FRAGMENTS):
        return Verdict(correct=True, explanation=raw, method="label_fragment")
    if "CORRECT" in raw and "WRONG" not in raw:
        return Verdict(correct=True, explanation=raw, method="keyword")
    return Verdict(correct=False, explanation=raw, method="default")
