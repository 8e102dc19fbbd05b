"""Lexical answer metrics used alongside the judge verdict."""

import re
import string

_ARTICLES = re.compile(r"\b(a|an|the)\b")
_PUNCTUATION = str.maketrans("", "", string.punctuation)


def normalize_text(text: str) -> str:
    """Lowercase, strip punctuation and articles, collapse whitespace."""
    lowered = text.lower().translate(_PUNCTUATION)
    return " ".join(_ARTICLES.sub(" ", lowered).split())


def exact_match(prediction: str, ground_truth: str) -> bool:
    """True when the normalized ground truth appears inside the normalized prediction."""
    expected = normalize_text(ground_truth)
    return bool(expected) and expected in normalize_text(prediction)


def strict_exact_match(prediction: str, ground_truth: str) -> bool:
    return normalize_text(prediction) == normalize_text(ground_truth)


def f1_score(prediction: str, ground_truth: str) -> float:
    """Token-set F1 between normalized prediction and ground truth."""
    predicted = set(normalize_text(prediction).split())
    expected = set(normalize_text(ground_truth).split())
    if not predicted or not expected:
        return 0.0
    common = len(predicted & expected)
    if common == 0:
        return 0.0
    precision = common / len(predicted)
    recall = common / len(expected)
    return 2 * precision * recall / (precision + recall)
