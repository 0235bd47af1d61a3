"""
Game Service

Registry of active games. Each game is a GameOrchestrator wired to the
shared oracle and results repository.
"""

import random
import uuid
from typing import Dict, Optional

from ..models.game import DifficultyTier
from ..utils.game_logger import game_logger
from .analytics import AnalyticsTracker
from .evaluation import EvaluationEngine
from .game_orchestrator import DEFAULT_MODEL, GameOrchestrator
from .identity import StaticIdentity
from .opponent import OpponentEngine
from .oracle_client import build_oracle
from .results_repository import build_results_repository


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - Wiring each game to the oracle, evaluator and results repository
    - Cleanup of finished sessions
    """

    def __init__(self, oracle, results, thinking_delay=(2.0, 5.0),
                 evaluation_fallback_on_error: bool = True,
                 rng: Optional[random.Random] = None,
                 default_model: str = DEFAULT_MODEL):
        self.games: Dict[str, GameOrchestrator] = {}  # Store active games by game_id
        self.oracle = oracle
        self.results = results
        self.thinking_delay = thinking_delay
        self.evaluation_fallback_on_error = evaluation_fallback_on_error
        self.rng = rng
        self.default_model = default_model

    def _build_orchestrator(self, game_id: str, difficulty: DifficultyTier, model: str,
                            user_id: Optional[str]) -> GameOrchestrator:
        rng = random.Random(self.rng.random()) if self.rng else random.Random()
        return GameOrchestrator(
            opponent=OpponentEngine(self.oracle, rng=rng, thinking_delay=self.thinking_delay),
            evaluator=EvaluationEngine(self.oracle, fallback_on_error=self.evaluation_fallback_on_error),
            identity=StaticIdentity(user_id),
            results=self.results,
            analytics=AnalyticsTracker(game_id=game_id, user_id=user_id),
            rng=rng,
            difficulty=difficulty,
            model=model,
            game_id=game_id,
        )

    def create_new_game(self, difficulty: str = DifficultyTier.STANDARD.value,
                        model: Optional[str] = None, prompt_id: Optional[str] = None,
                        user_id: Optional[str] = None) -> str:
        """
        Creates a new game session.

        Args:
            difficulty: Tier value ("easy", "standard", "expert")
            model: Opponent model id; defaults to the standard model
            prompt_id: Optional catalog entry to play instead of the tier default
            user_id: Signed-in user the result is saved for, if any

        Returns:
            str: Unique game ID for this session

        Raises:
            ValueError: If the difficulty is not a known tier
        """
        game_id = str(uuid.uuid4())
        orchestrator = self._build_orchestrator(game_id, DifficultyTier(difficulty),
                                                model or self.default_model, user_id)
        orchestrator.reset()
        if prompt_id:
            orchestrator.select_prompt(prompt_id)

        self.games[game_id] = orchestrator
        game_logger.log_game_event(game_id, 'game_created', user_id,
                                   game_mode=orchestrator.state.difficulty.value,
                                   prompt_id=orchestrator.state.selected_prompt_id)
        return game_id

    def get_game(self, game_id: str) -> Optional[GameOrchestrator]:
        return self.games.get(game_id)

    def get_game_state(self, game_id: str) -> Optional[Dict]:
        """
        Returns the current game state for a session.

        Args:
            game_id: Unique game identifier

        Returns:
            State dictionary or None if game not found
        """
        orchestrator = self.games.get(game_id)
        if orchestrator is None:
            return None
        return orchestrator.snapshot()

    def active_games_count(self) -> int:
        return len(self.games)

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Args:
            game_id: Unique game identifier

        Returns:
            bool: True if game was deleted, False if not found
        """
        if game_id in self.games:
            del self.games[game_id]
            return True
        return False


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(config) -> GameService:
    """Initialize the global game service instance from a config object."""
    global _game_service
    _game_service = GameService(
        oracle=build_oracle(config),
        results=build_results_repository(config),
        thinking_delay=(config.THINKING_DELAY_MIN_SECONDS, config.THINKING_DELAY_MAX_SECONDS),
        evaluation_fallback_on_error=config.EVALUATION_FALLBACK_ON_ERROR,
        default_model=config.DEFAULT_MODEL,
    )
    return _game_service
