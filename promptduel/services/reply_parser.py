"""
Oracle Reply Parsing

Language model replies are free-form text that may or may not contain a
JSON object. Nothing about their shape is trusted: every reply is turned
into a tagged result the caller can switch on.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..models.game import Evaluation

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_TOKEN_PUNCTUATION = "\"'`.,;:!?()[]{}*"


@dataclass(frozen=True)
class ParsedOk:
    """The reply held a JSON object naming the word."""
    word: str


@dataclass(frozen=True)
class ParsedFallback:
    """No usable JSON; the first token of the raw reply is used instead."""
    token: str


@dataclass(frozen=True)
class ParsedFailure:
    reason: str


WordReply = Union[ParsedOk, ParsedFallback, ParsedFailure]


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Locate and decode the outermost ``{...}`` span of a reply.

    Returns:
        The decoded object, or None when there is no span, it does not
        decode, or it decodes to something other than an object
    """
    if not text:
        return None

    match = _JSON_OBJECT.search(text)
    if not match:
        return None

    try:
        decoded = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None

    return decoded if isinstance(decoded, dict) else None


def parse_word_reply(text: Optional[str]) -> WordReply:
    """Turn a word-suggestion reply into a tagged result."""
    payload = extract_json_object(text)
    if payload is not None:
        selected = payload.get("selectedWord")
        if isinstance(selected, str) and selected.strip():
            return ParsedOk(selected.strip())

    tokens = (text or "").split()
    if not tokens:
        return ParsedFailure("empty reply")

    token = tokens[0].strip(_TOKEN_PUNCTUATION)
    if not token:
        return ParsedFailure(f"no word in reply token {tokens[0]!r}")
    return ParsedFallback(token)


def parse_evaluation_reply(text: Optional[str]) -> Optional[Evaluation]:
    """
    Turn an evaluation reply into an Evaluation.

    The score is coerced to an int and clamped to [1, 100]. Returns None
    when the reply has no object with a numeric score.
    """
    payload = extract_json_object(text)
    if payload is None:
        return None

    raw_score = payload.get("score")
    if isinstance(raw_score, bool):
        return None
    try:
        score = int(round(float(raw_score)))
    except (TypeError, ValueError, OverflowError):
        return None

    feedback = payload.get("feedback")
    if not isinstance(feedback, str) or not feedback.strip():
        feedback = "No feedback provided."

    return Evaluation(score=max(1, min(100, score)), feedback=feedback.strip())
