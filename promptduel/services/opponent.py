"""
Opponent Word-Selection Engine

Chooses the automated opponent's next word: asks the oracle, repairs
whatever it answers into a word that is actually available, and attaches a
tier-flavoured rationale.
"""

import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..models.errors import NoWordsAvailableError
from ..models.game import AIThought, GameState
from ..utils.game_logger import game_logger
from .rationale import generate_ai_thought
from .reply_parser import ParsedFallback, ParsedOk, parse_word_reply


@dataclass(frozen=True)
class OpponentMove:
    """A resolved opponent choice."""
    word: str
    bank_index: int
    thought: AIThought
    substituted: bool = False  # True when the oracle's answer was replaced


def build_selection_prompt(state: GameState, available: List[str]) -> str:
    """Instruction asking the oracle for one available word as JSON."""
    return f"""
Topic: {state.topic}

You are building a prompt about "{state.topic}".
Your current prompt so far: "{state.ai_prompt}"

Available words to choose from: {', '.join(available)}

Select ONE word from the available words that would best extend your prompt.
Also provide a brief explanation (1-2 sentences) of why you chose this word.

Respond in JSON format:
{{
  "selectedWord": "word",
  "explanation": "Your explanation here"
}}
""".strip()


class OpponentEngine:
    """
    Automated opponent.

    select_word returns None when the opponent is already at the word cap
    (the turn is skipped without calling the oracle). Oracle failures are
    not handled here; they propagate to the orchestrator.
    """

    def __init__(self, oracle, rng: Optional[random.Random] = None,
                 thinking_delay: Tuple[float, float] = (2.0, 5.0),
                 sleep: Callable[[float], None] = time.sleep):
        self.oracle = oracle
        self.rng = rng or random.Random()
        self.thinking_delay = thinking_delay
        self.sleep = sleep

    def _think(self) -> None:
        low, high = self.thinking_delay
        if high <= 0:
            return
        self.sleep(self.rng.uniform(max(low, 0.0), high))

    def _resolve(self, candidate: Optional[str], available: List[str]) -> Optional[str]:
        if not candidate:
            return None
        if candidate in available:
            return candidate
        lowered = candidate.lower()
        for word in available:
            if word.lower() == lowered:
                return word
        return None

    def select_word(self, state: GameState) -> Optional[OpponentMove]:
        """
        Pick the opponent's next word.

        Raises:
            NoWordsAvailableError: If every bank entry is used
            OracleError: If the oracle call fails
        """
        if len(state.ai_words) >= state.max_words_per_side:
            return None

        available = state.available_words()
        if not available:
            raise NoWordsAvailableError("No more words available in the word bank.")

        prompt = build_selection_prompt(state, available)
        self._think()
        reply = self.oracle.suggest_word(prompt, state.selected_model, state.system_prompt)

        parsed = parse_word_reply(reply)
        if isinstance(parsed, ParsedOk):
            candidate = parsed.word
        elif isinstance(parsed, ParsedFallback):
            candidate = parsed.token
        else:
            candidate = None

        word = self._resolve(candidate, available)
        substituted = word is None
        if substituted:
            word = self.rng.choice(available)
            game_logger.logger.info(
                f"Oracle answer {candidate!r} is not an available word; substituted '{word}'"
            )

        bank_index = next(
            index for index, entry in enumerate(state.word_bank)
            if entry.text == word and not entry.is_used
        )

        return OpponentMove(
            word=word,
            bank_index=bank_index,
            thought=generate_ai_thought(word, state, self.rng),
            substituted=substituted,
        )
