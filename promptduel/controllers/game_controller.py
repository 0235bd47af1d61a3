"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from dataclasses import asdict
from flask import Blueprint, request, jsonify

from ..config.game_settings import AVAILABLE_MODELS
from ..config.prompt_catalog import list_prompts
from ..models.errors import PersistenceError
from ..models.game import DifficultyTier
from ..services.game_service import get_game_service
from ..utils.decorators import optional_auth, require_auth
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)

_VALID_DIFFICULTIES = [tier.value for tier in DifficultyTier]


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _error(action, message, status, game_id=None, **kwargs):
    error_response = {
        'success': False,
        'error': message
    }
    game_logger.log_server_response(request, action, False, error_response, game_id, **kwargs)
    return jsonify(error_response), status


def _game_action(game_id, action, operation, **log_details):
    """
    Run one orchestrator operation for a game and reply with its state.

    ``operation`` receives the orchestrator. Player-facing problems (used
    word, oracle failure) come back inside ``state.error`` with a 200.
    """
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, action, game_id, **log_details)

        orchestrator = game_service.get_game(game_id)
        if orchestrator is None:
            return _error(action, 'Game not found', 404, game_id)

        was_scored = orchestrator.state.player_evaluation is not None
        operation(orchestrator)
        state = orchestrator.snapshot()

        response_data = {
            'success': True,
            'state': state
        }
        game_logger.log_server_response(
            request, action, True, response_data, game_id,
            phase=state['phase'], state_error=state['error']
        )

        if not was_scored and state['player_evaluation'] is not None:
            game_logger.log_game_event(
                game_id, 'game_over', getattr(request, 'user_id', None),
                player_score=state['player_evaluation']['score'],
                ai_score=state['ai_evaluation']['score']
            )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, action, game_id)
        return _error(action, str(e), 500, game_id)


@game_bp.route('/new_game', methods=['POST'])
@optional_auth
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        difficulty = data.get('difficulty', DifficultyTier.STANDARD.value)
        model = data.get('model')
        prompt_id = data.get('prompt_id')

        if difficulty not in _VALID_DIFFICULTIES:
            return _error('new_game', f"Invalid difficulty. Must be one of: {', '.join(_VALID_DIFFICULTIES)}", 400)

        if model and model not in AVAILABLE_MODELS.values():
            return _error('new_game', f"Unknown model '{model}'", 400)

        game_logger.log_user_action(request, 'new_game', difficulty=difficulty, model=model, prompt_id=prompt_id)

        game_id = game_service.create_new_game(difficulty, model, prompt_id, request.user_id)
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': state
        }
        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            max_words_per_side=state['max_words_per_side']
        )
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        return _error('new_game', str(e), 400)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
def get_state(game_id):
    """Get current game state."""
    return _game_action(game_id, 'get_state', lambda orchestrator: None)


@game_bp.route('/game/<game_id>/claim', methods=['POST'])
def claim_word(game_id):
    """Claim a word bank entry for the player; the opponent answers before the reply."""
    data = request.get_json(silent=True) or {}
    if 'index' not in data:
        return _error('claim_word', 'Word index is required', 400, game_id)

    index = data['index']
    return _game_action(game_id, 'claim_word', lambda orchestrator: orchestrator.claim_word(index),
                        index=index)


@game_bp.route('/game/<game_id>/opponent_turn', methods=['POST'])
def opponent_turn(game_id):
    """Retry the opponent's turn after a failure."""
    return _game_action(game_id, 'opponent_turn', lambda orchestrator: orchestrator.run_opponent_turn())


@game_bp.route('/game/<game_id>/end', methods=['POST'])
def end_game(game_id):
    """End the game and score both prompts."""
    return _game_action(game_id, 'end_game', lambda orchestrator: orchestrator.end_game())


@game_bp.route('/game/<game_id>/reset', methods=['POST'])
def reset_game(game_id):
    """Start over with a fresh word bank at the current difficulty."""
    return _game_action(game_id, 'reset_game', lambda orchestrator: orchestrator.reset())


@game_bp.route('/game/<game_id>/difficulty', methods=['POST'])
def set_difficulty(game_id):
    """Switch difficulty tier (clears both prompts)."""
    data = request.get_json(silent=True) or {}
    difficulty = data.get('difficulty')
    if difficulty not in _VALID_DIFFICULTIES:
        return _error('set_difficulty', f"Invalid difficulty. Must be one of: {', '.join(_VALID_DIFFICULTIES)}",
                      400, game_id)

    return _game_action(game_id, 'set_difficulty',
                        lambda orchestrator: orchestrator.set_difficulty(DifficultyTier(difficulty)),
                        difficulty=difficulty)


@game_bp.route('/game/<game_id>/prompt', methods=['POST'])
def select_prompt(game_id):
    """Switch to a catalog topic; unknown ids leave the game unchanged."""
    data = request.get_json(silent=True) or {}
    prompt_id = data.get('prompt_id')
    if not prompt_id:
        return _error('select_prompt', 'Prompt id is required', 400, game_id)

    return _game_action(game_id, 'select_prompt', lambda orchestrator: orchestrator.select_prompt(prompt_id),
                        prompt_id=prompt_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)
        response_data = {
            'success': success
        }
        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted')

        return jsonify(response_data), 200 if success else 404

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        return _error('delete_game', str(e), 500, game_id)


@game_bp.route('/prompts', methods=['GET'])
def get_prompts():
    """List catalog topics, optionally for one difficulty."""
    difficulty = request.args.get('difficulty')
    if difficulty and difficulty not in _VALID_DIFFICULTIES:
        return _error('get_prompts', f"Invalid difficulty. Must be one of: {', '.join(_VALID_DIFFICULTIES)}", 400)

    return jsonify({
        'success': True,
        'prompts': [asdict(prompt) for prompt in list_prompts(difficulty)]
    })


@game_bp.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    """Top saved results, optionally for one difficulty and model."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        difficulty = request.args.get('difficulty')
        model = request.args.get('model')
        limit = min(max(request.args.get('limit', 10, type=int), 1), 100)

        game_logger.log_user_action(request, 'get_leaderboard', difficulty=difficulty, model=model, limit=limit)

        entries = game_service.results.get_leaderboard(difficulty, limit, model)
        response_data = {
            'success': True,
            'leaderboard': entries
        }
        game_logger.log_server_response(request, 'get_leaderboard', True, response_data, entries=len(entries))
        return jsonify(response_data)

    except PersistenceError as e:
        game_logger.log_error(request, e, 'get_leaderboard')
        return _error('get_leaderboard', 'Leaderboard unavailable', 503)

    except Exception as e:
        game_logger.log_error(request, e, 'get_leaderboard')
        return _error('get_leaderboard', str(e), 500)


@game_bp.route('/games', methods=['GET'])
@require_auth
def get_user_games():
    """Saved results of the signed-in player, newest first."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        limit = request.args.get('limit', 10, type=int)
        if not 1 <= limit <= 100:
            return _error('get_user_games', 'Limit must be between 1 and 100', 400)

        game_logger.log_user_action(request, 'get_user_games', limit=limit)

        games = game_service.results.get_user_games(request.user_id, limit)
        response_data = {
            'success': True,
            'games': games
        }
        game_logger.log_server_response(request, 'get_user_games', True, response_data, entries=len(games))
        return jsonify(response_data)

    except PersistenceError as e:
        game_logger.log_error(request, e, 'get_user_games')
        return _error('get_user_games', 'Saved games unavailable', 503)

    except Exception as e:
        game_logger.log_error(request, e, 'get_user_games')
        return _error('get_user_games', str(e), 500)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': game_service.active_games_count() if game_service else 0,
            'oracle': type(game_service.oracle).__name__ if game_service else None,
            'results_store': type(game_service.results).__name__ if game_service else None,
            'log_stats': game_logger.get_log_stats()
        }
        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
