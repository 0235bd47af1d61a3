"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Side(str, Enum):
    """Which side committed a word."""
    PLAYER = "player"
    AI = "ai"


class DifficultyTier(str, Enum):
    """Difficulty level controlling the word cap and rationale style."""
    EASY = "easy"
    STANDARD = "standard"
    EXPERT = "expert"


class GamePhase(str, Enum):
    """Turn state derived from the game state flags."""
    PLAYER_TURN = "player_turn"
    OPPONENT_TURN_PENDING = "opponent_turn_pending"
    GAME_OVER = "game_over"


@dataclass
class WordBankEntry:
    """A candidate word either side may claim exactly once."""
    text: str
    is_used: bool = False
    used_by: Optional[Side] = None


@dataclass(frozen=True)
class Word:
    """A committed move."""
    text: str
    side: Side
    is_correct: Optional[bool] = None  # Only set after evaluation


@dataclass(frozen=True)
class AIThought:
    """Rationale attached to the most recent opponent move."""
    word: str
    explanation: str


@dataclass(frozen=True)
class Evaluation:
    """Score and feedback for one side's finished prompt."""
    score: int
    feedback: str


@dataclass
class GameState:
    """Authoritative state of a single game."""
    word_bank: List[WordBankEntry]
    difficulty: DifficultyTier
    selected_model: str
    topic: str
    system_prompt: str
    max_words_per_side: int
    selected_prompt_id: Optional[str] = None
    player_words: List[Word] = field(default_factory=list)
    ai_words: List[Word] = field(default_factory=list)
    player_prompt: str = ""
    ai_prompt: str = ""
    is_player_turn: bool = True  # Player starts first
    is_game_over: bool = False
    is_loading: bool = False
    player_evaluation: Optional[Evaluation] = None
    ai_evaluation: Optional[Evaluation] = None
    error: Optional[str] = None
    start_time: Optional[float] = None
    ai_thought: Optional[AIThought] = None

    @property
    def phase(self) -> GamePhase:
        if self.is_game_over:
            return GamePhase.GAME_OVER
        if not self.is_player_turn:
            return GamePhase.OPPONENT_TURN_PENDING
        return GamePhase.PLAYER_TURN

    def words_for(self, side: Side) -> List[Word]:
        return self.player_words if side == Side.PLAYER else self.ai_words

    def available_words(self) -> List[str]:
        """Texts of the unused bank entries, in bank order."""
        return [entry.text for entry in self.word_bank if not entry.is_used]

    def recompute_prompts(self) -> None:
        self.player_prompt = " ".join(word.text for word in self.player_words)
        self.ai_prompt = " ".join(word.text for word in self.ai_words)

    def both_sides_at_cap(self) -> bool:
        return (len(self.player_words) >= self.max_words_per_side and
                len(self.ai_words) >= self.max_words_per_side)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (enums flattened to their values)."""
        data = asdict(self)
        data['difficulty'] = self.difficulty.value
        data['phase'] = self.phase.value
        for entry in data['word_bank']:
            if entry['used_by'] is not None:
                entry['used_by'] = Side(entry['used_by']).value
        for key in ('player_words', 'ai_words'):
            for word in data[key]:
                word['side'] = Side(word['side']).value
        return data
