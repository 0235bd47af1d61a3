"""
Game Orchestrator

Owns the authoritative state of one game and sequences its turns:

    PlayerTurn --claim_word--> OpponentTurnPending --opponent move--> PlayerTurn
    PlayerTurn --end_game (or both sides at the cap)--> GameOver
    any state --reset--> PlayerTurn (fresh game)

Every public operation runs under one re-entrant lock, so concurrent
requests for the same game are applied one at a time and at most one
opponent turn is ever in flight. Player mistakes, oracle failures and
evaluation failures never raise out of this class; they end up in
``state.error`` with ``is_loading`` cleared.
"""

import random
import threading
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from ..config.game_settings import AVAILABLE_MODELS, MAX_WORDS_PER_SIDE
from ..config.prompt_catalog import GamePrompt, find_prompt, get_prompt_by_id
from ..models.errors import (
    GameOverError, InvalidWordIndexError, NoWordsAvailableError, UserInputError,
    WordAlreadyUsedError, WordCapExceededError
)
from ..models.game import DifficultyTier, GamePhase, GameState, Side, Word
from ..models.result import GameResultRecord
from ..utils.game_logger import game_logger
from .analytics import AnalyticsTracker
from .evaluation import mark_word_correctness
from .word_bank import generate_word_bank

DEFAULT_MODEL = AVAILABLE_MODELS['GPT35_TURBO']

GAME_OVER = "The game is over. Start a new game to keep playing."
OPPONENT_TURN_FAILED = "Opponent turn failed. Please try again."
EVALUATION_FAILED = "Failed to evaluate prompts. Please try again."


class GameOrchestrator:
    """
    Turn state machine for a single game.

    Collaborators are injected: the opponent engine, the evaluation engine,
    an identity with ``get_current_user_id()``, a results repository with
    ``save_game_result(record)`` and analytics hooks. ``rng`` drives word
    bank shuffles and word-correctness sampling; ``clock`` returns epoch
    seconds.
    """

    def __init__(self, opponent, evaluator, identity=None, results=None,
                 analytics: Optional[AnalyticsTracker] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.time,
                 difficulty: DifficultyTier = DifficultyTier.STANDARD,
                 model: str = DEFAULT_MODEL,
                 game_id: Optional[str] = None):
        self.opponent = opponent
        self.evaluator = evaluator
        self.identity = identity
        self.results = results
        self.analytics = analytics or AnalyticsTracker(game_id=game_id)
        self.rng = rng or random.Random()
        self.clock = clock
        self.game_id = game_id
        self._lock = threading.RLock()
        self.state = self._new_state(DifficultyTier(difficulty), model)

    def _new_state(self, difficulty: DifficultyTier, model: str) -> GameState:
        prompt = find_prompt(difficulty.value)
        return GameState(
            word_bank=generate_word_bank(prompt.title, self.rng),
            difficulty=difficulty,
            selected_model=model,
            topic=prompt.title,
            system_prompt=prompt.system_prompt,
            max_words_per_side=MAX_WORDS_PER_SIDE[difficulty.value],
            selected_prompt_id=prompt.id,
        )

    def _apply_prompt(self, prompt: GamePrompt) -> None:
        """Switch topic and tier; the bank is regenerated so both word lists start empty."""
        state = self.state
        difficulty = DifficultyTier(prompt.difficulty)
        state.difficulty = difficulty
        state.selected_prompt_id = prompt.id
        state.topic = prompt.title
        state.system_prompt = prompt.system_prompt
        state.max_words_per_side = MAX_WORDS_PER_SIDE[difficulty.value]
        state.word_bank = generate_word_bank(prompt.title, self.rng)
        state.player_words = []
        state.ai_words = []
        state.recompute_prompts()
        state.ai_thought = None
        state.error = None

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return self.state.to_dict()

    def set_difficulty(self, difficulty: DifficultyTier) -> GameState:
        """
        Re-derive topic, instructions, word bank and cap for a tier.

        Word lists are emptied. Protecting an in-progress game is up to the
        caller; a finished game is left alone until reset.
        """
        with self._lock:
            if self.state.is_game_over:
                self.state.error = GAME_OVER
                return self.state
            self._apply_prompt(find_prompt(DifficultyTier(difficulty).value))
            return self.state

    def set_model(self, model: str) -> GameState:
        with self._lock:
            if model not in AVAILABLE_MODELS.values():
                self.state.error = f"Unknown model '{model}'."
                return self.state
            self.state.selected_model = model
            self.state.error = None
            return self.state

    def select_prompt(self, prompt_id: str) -> GameState:
        """Switch to a catalog entry; unknown ids and finished games leave the state untouched."""
        with self._lock:
            if self.state.is_game_over:
                self.state.error = GAME_OVER
                return self.state
            prompt = get_prompt_by_id(prompt_id)
            if prompt is not None:
                self._apply_prompt(prompt)
            return self.state

    def reset(self) -> GameState:
        """Start a fresh game at the current tier and model."""
        with self._lock:
            difficulty = self.state.difficulty
            model = self.state.selected_model
            self.state = self._new_state(difficulty, model)
            self.state.start_time = self.clock()
            self.analytics.notify_game_start(difficulty.value, model)
            return self.state

    def validate_claim(self, index: Any) -> None:
        """
        Check a player claim on a word bank entry.

        Raises:
            GameOverError: If the game has ended
            UserInputError: If the opponent is still moving
            InvalidWordIndexError: If the index is not a bank position
            WordAlreadyUsedError: If either side already claimed the entry
            WordCapExceededError: If the player is at the word cap
        """
        state = self.state

        if state.is_game_over:
            raise GameOverError(GAME_OVER)

        if state.is_loading or not state.is_player_turn:
            raise UserInputError("Wait for the opponent to finish its turn.")

        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(state.word_bank):
            raise InvalidWordIndexError("Invalid word index.")

        if state.word_bank[index].is_used:
            raise WordAlreadyUsedError("This word has already been used.")

        if len(state.player_words) >= state.max_words_per_side:
            raise WordCapExceededError(f"You can only use {state.max_words_per_side} words.")

    def is_valid_claim(self, index: Any) -> Tuple[bool, str]:
        """
        Validates a player claim on a word bank entry.

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            self.validate_claim(index)
        except UserInputError as e:
            return False, str(e)
        return True, ""

    def _commit_word(self, index: int, side: Side) -> Word:
        state = self.state
        entry = state.word_bank[index]
        entry.is_used = True
        entry.used_by = side

        word = Word(text=entry.text, side=side)
        words = state.words_for(side)
        words.append(word)
        state.recompute_prompts()

        self.analytics.notify_word_added(word.text, side == Side.PLAYER, len(words))
        return word

    def claim_word(self, index: int) -> GameState:
        """
        Player move: claim a bank entry, then let the opponent answer.

        A rejected claim only sets ``state.error``. By the time this returns
        the opponent has either moved or failed back to the player.
        """
        with self._lock:
            is_valid, error = self.is_valid_claim(index)
            if not is_valid:
                self.state.error = error
                return self.state

            self._commit_word(index, Side.PLAYER)
            self.state.is_player_turn = False
            self.state.is_loading = True
            self.state.error = None

            return self.run_opponent_turn()

    def _recover_opponent_turn(self, message: str, error: Exception) -> None:
        game_logger.log_error(None, error, 'opponent_turn', self.game_id)
        self.analytics.notify_error(error, {'context': 'opponent_turn'})
        self.state.is_loading = False
        self.state.is_player_turn = True
        self.state.error = message

    def run_opponent_turn(self) -> GameState:
        """
        Let the opponent pick a word.

        Called by claim_word; callers may also use it to retry after a
        failed opponent turn. The opponent only moves while it is behind the
        player.
        """
        with self._lock:
            state = self.state
            if state.is_game_over or len(state.ai_words) >= len(state.player_words):
                state.is_loading = False
                state.is_player_turn = True
                return state

            state.is_player_turn = False
            state.is_loading = True

            try:
                move = self.opponent.select_word(state)
            except NoWordsAvailableError as e:
                self._recover_opponent_turn(str(e), e)
                return state
            except Exception as e:
                self._recover_opponent_turn(OPPONENT_TURN_FAILED, e)
                return state

            if move is not None:
                self._commit_word(move.bank_index, Side.AI)
                state.ai_thought = move.thought

            state.is_player_turn = True
            state.is_loading = False

            if state.both_sides_at_cap():
                self.end_game()
            return self.state

    def end_game(self) -> GameState:
        """
        Finish the game and score both prompts.

        The game is marked over before scoring starts and stays over even
        when scoring fails. Once both evaluations exist further calls are
        no-ops.
        """
        with self._lock:
            state = self.state
            if state.player_evaluation is not None and state.ai_evaluation is not None:
                return state

            state.is_loading = True
            state.is_game_over = True
            state.error = None

            try:
                player_evaluation = self.evaluator.evaluate(
                    state.player_prompt, state.selected_model, state.system_prompt)
                ai_evaluation = self.evaluator.evaluate(
                    state.ai_prompt, state.selected_model, state.system_prompt)
            except Exception as e:
                game_logger.log_error(None, e, 'end_game', self.game_id)
                self.analytics.notify_error(e, {'context': 'end_game'})
                state.is_loading = False
                state.error = EVALUATION_FAILED
                return state

            state.player_words = mark_word_correctness(state.player_words, player_evaluation.score, self.rng)
            state.ai_words = mark_word_correctness(state.ai_words, ai_evaluation.score, self.rng)
            state.player_evaluation = player_evaluation
            state.ai_evaluation = ai_evaluation
            state.is_loading = False

            duration = int(self.clock() - state.start_time) if state.start_time else 0
            self.analytics.notify_game_end(
                state.difficulty.value, state.selected_model, player_evaluation.score,
                len(state.player_words), duration)

            self._persist_result()
            return state

    def _persist_result(self) -> None:
        """Store the player's result for signed-in users; failures are only logged."""
        if self.results is None or self.identity is None:
            return

        state = self.state
        try:
            user_id = self.identity.get_current_user_id()
            if not user_id:
                return
            record = GameResultRecord(
                user_id=user_id,
                prompt_text=state.player_prompt,
                score=state.player_evaluation.score,
                difficulty=state.difficulty.value,
                model_id=state.selected_model,
                word_count=len(state.player_words),
                created_at=datetime.now(timezone.utc),
            )
            self.results.save_game_result(record)
            game_logger.log_game_event(self.game_id, 'game_result_saved', user_id,
                                       score=record.score, game_mode=record.difficulty)
        except Exception as e:
            game_logger.log_error(None, e, 'persist_game_result', self.game_id)
