"""
Evaluation Engine

Scores a finished prompt. The oracle is asked first; the deterministic
local scorer stands in when the oracle is unreachable and is also used on
its own in offline mode.
"""

import math
import random
from typing import List, Optional

from ..config.game_settings import DEFAULT_TOPIC_CATEGORY, category_keywords
from ..models.errors import EvaluationError, OracleError
from ..models.game import Evaluation, Word
from ..utils.game_logger import game_logger
from .reply_parser import parse_evaluation_reply

UNPARSABLE_EVALUATION = Evaluation(
    score=50,
    feedback="Could not parse evaluation. The prompt appears to be of average quality."
)

CORRECTNESS_THRESHOLD = 70


def topic_category(system_prompt: Optional[str]) -> str:
    """Map a system prompt onto one of the scoring keyword categories."""
    text = (system_prompt or "").lower()
    if 'product description' in text:
        return 'product-description'
    if 'story' in text or 'narrative' in text:
        return 'story-prompt'
    if 'question' in text:
        return 'question'
    return DEFAULT_TOPIC_CATEGORY


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _length_adjusted_base(word_count: int) -> int:
    base = 70
    if word_count < 5:
        base -= 20
    elif word_count < 8:
        base -= 10
    elif word_count > 20:
        base -= 15
    elif word_count > 15:
        base -= 5
    else:
        base += 10
    return base


def score_prompt_offline(prompt: str, system_prompt: Optional[str] = None) -> Evaluation:
    """
    Deterministic local scoring.

    Score is ``clamp(base + coherence + relevance, 50, 98)`` where the base
    depends on word count, coherence is the rounded share of unique words
    scaled to 20 and relevance is the rounded share of topic words scaled
    to 20. Rounding is half-up.
    """
    words = prompt.split()
    word_count = len(words)
    category = topic_category(system_prompt)
    keywords = [keyword.lower() for keyword in category_keywords(category)]

    base = _length_adjusted_base(word_count)
    if word_count:
        coherence = _round_half_up(20 * len(set(words)) / word_count)
        relevant = sum(1 for word in words if any(keyword in word.lower() for keyword in keywords))
        relevance = _round_half_up(20 * relevant / word_count)
    else:
        coherence = relevance = 0

    score = min(max(base + coherence + relevance, 50), 98)
    label = category.replace('-', ' ', 1)

    feedback = f"Your prompt contains {word_count} words and has "
    if score >= 90:
        feedback += (f"excellent coherence and relevance to the topic. It's concise, clear, "
                     f"and effectively addresses the {label}.")
    elif score >= 80:
        focus = 'word variety' if coherence < 15 else 'topic focus'
        feedback += (f"good coherence and relevance. It addresses the {label} well, "
                     f"with room for minor improvements in {focus}.")
    elif score >= 70:
        if word_count < 8:
            advice = 'more detail'
        elif word_count > 15:
            advice = 'more conciseness'
        else:
            advice = 'better word choice'
        feedback += f"decent coherence and relevance. It's a satisfactory {label}, but could be improved with {advice}."
    else:
        advice = 'more topic-specific language' if relevance < 10 else 'better structure'
        feedback += (f"room for improvement in both coherence and topic relevance. "
                     f"Consider revising to better address the {label} with {advice}.")

    return Evaluation(score=score, feedback=feedback)


def mark_word_correctness(words: List[Word], score: int,
                          rng: Optional[random.Random] = None) -> List[Word]:
    """
    Mark each committed word correct or not from its side's score.

    Above the threshold every word is correct; otherwise each word is
    correct with probability score/100, sampled independently.
    """
    rng = rng or random.Random()
    marked = []
    for word in words:
        if score > CORRECTNESS_THRESHOLD:
            is_correct = True
        else:
            is_correct = rng.random() < score / 100
        marked.append(Word(text=word.text, side=word.side, is_correct=is_correct))
    return marked


def build_evaluation_prompt(prompt: str) -> str:
    return f"""
You are an expert prompt engineer evaluating the quality of a collaboratively built prompt.
The prompt was built word-by-word, with players taking turns to add one word at a time.

Evaluate the following prompt on a scale of 1-100 based on these criteria:
1. Relevance to the topic (0-25 points)
2. Coherence and grammatical correctness (0-25 points)
3. Clarity and specificity (0-25 points)
4. Effectiveness for the intended purpose (0-25 points)

Prompt to evaluate: "{prompt}"

Provide your evaluation in JSON format:
{{
  "score": [1-100],
  "feedback": "Your specific, constructive feedback here explaining the strengths and weaknesses"
}}
""".strip()


class EvaluationEngine:
    """Scores prompts through the oracle with a local fallback."""

    def __init__(self, oracle, fallback_on_error: bool = True):
        self.oracle = oracle
        self.fallback_on_error = fallback_on_error

    def evaluate(self, prompt: str, model: str, system_prompt: str) -> Evaluation:
        """
        Score one prompt.

        Returns:
            The oracle's evaluation; the neutral evaluation when the reply
            cannot be parsed; the local score when the oracle fails and
            fallback is enabled

        Raises:
            EvaluationError: If the oracle fails and fallback is disabled
        """
        try:
            reply = self.oracle.evaluate_prompt(prompt, model, system_prompt)
        except OracleError as e:
            if not self.fallback_on_error:
                raise EvaluationError(f"Oracle evaluation failed: {e}") from e
            game_logger.logger.warning(f"Oracle evaluation failed, scoring locally: {e}")
            return score_prompt_offline(prompt, system_prompt)

        evaluation = parse_evaluation_reply(reply)
        if evaluation is None:
            game_logger.logger.warning(f"Unparsable evaluation reply: {reply!r:.200}")
            return UNPARSABLE_EVALUATION
        return evaluation
