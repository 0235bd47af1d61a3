"""
Analytics Hooks

Game lifecycle notifications written as structured game events. A failing
hook only logs a warning; it never raises back into the game.
"""

from typing import Any, Dict, Optional

from ..utils.game_logger import GameLogger, game_logger


class AnalyticsTracker:
    """Observability hooks for one game."""

    def __init__(self, logger: Optional[GameLogger] = None, game_id: Optional[str] = None,
                 user_id: Optional[str] = None):
        self.logger = logger or game_logger
        self.game_id = game_id
        self.user_id = user_id

    def _emit(self, event: str, **properties: Any) -> None:
        try:
            self.logger.log_game_event(self.game_id, event, self.user_id, **properties)
        except Exception as e:
            self.logger.logger.warning(f"Failed to track event '{event}': {e}")

    def notify_game_start(self, difficulty: str, model: str) -> None:
        self._emit('game_start', game_mode=difficulty, model=model)

    def notify_word_added(self, word: str, is_player: bool, prompt_length: int) -> None:
        self._emit('word_added', word=word, is_player=is_player, prompt_length=prompt_length)

    def notify_game_end(self, difficulty: str, model: str, score: int, word_count: int,
                        duration_seconds: int) -> None:
        self._emit('game_end', game_mode=difficulty, model=model, score=score,
                   word_count=word_count, duration_seconds=duration_seconds)

    def notify_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        try:
            self.logger.log_error(None, error, (context or {}).get('context', 'game'),
                                  self.game_id, error_context=context or {})
        except Exception as e:
            self.logger.logger.warning(f"Failed to track error: {e}")
