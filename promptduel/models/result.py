"""
Game Result Data Models

Contains the summary record stored for a completed game.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass
class GameResultRecord:
    """Completed-game summary for the leaderboard."""
    user_id: str
    prompt_text: str
    score: int
    difficulty: str
    model_id: str
    word_count: int
    created_at: datetime

    def to_document(self) -> Dict[str, Any]:
        return {
            'user_id': self.user_id,
            'prompt': self.prompt_text,
            'score': self.score,
            'game_mode': self.difficulty,
            'model': self.model_id,
            'word_count': self.word_count,
            'created_at': self.created_at,
        }
