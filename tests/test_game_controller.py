from promptduel.config import TestingConfig
from promptduel.services.game_service import get_game_service
from promptduel.services.identity import issue_session_token
from promptduel.utils.game_logger import game_logger


def _new_game(client, headers=None, **body):
    response = client.post('/api/new_game', json=body, headers=headers or {})
    assert response.status_code == 200
    data = response.get_json()
    return data['game_id'], data['state']


def _free_index(state):
    return next(index for index, entry in enumerate(state['word_bank']) if not entry['is_used'])


def test_new_game_defaults(client):
    game_id, state = _new_game(client)
    assert game_id
    assert state['difficulty'] == 'standard'
    assert state['max_words_per_side'] == 10
    assert state['phase'] == 'player_turn'
    assert len(state['word_bank']) == 30


def test_new_game_with_prompt(client):
    _, state = _new_game(client, difficulty='easy', prompt_id='story-expert')
    assert state['selected_prompt_id'] == 'story-expert'
    assert state['difficulty'] == 'expert'


def test_new_game_rejects_bad_input(client):
    assert client.post('/api/new_game', json={'difficulty': 'insane'}).status_code == 400
    assert client.post('/api/new_game', json={'model': 'acme/unknown'}).status_code == 400


def test_claim_runs_opponent_turn(client):
    game_id, state = _new_game(client)
    index = _free_index(state)

    response = client.post(f'/api/game/{game_id}/claim', json={'index': index})

    state = response.get_json()['state']
    assert response.status_code == 200
    assert state['word_bank'][index]['used_by'] == 'player'
    assert len(state['player_words']) == 1
    assert len(state['ai_words']) == 1
    assert state['ai_thought']['word'] == state['ai_words'][0]['text']
    assert state['phase'] == 'player_turn'


def test_rejected_claim_is_reported_in_state(client):
    game_id, _ = _new_game(client)
    response = client.post(f'/api/game/{game_id}/claim', json={'index': 99})
    assert response.status_code == 200
    assert response.get_json()['state']['error'] == 'Invalid word index.'


def test_claim_requires_index(client):
    game_id, _ = _new_game(client)
    assert client.post(f'/api/game/{game_id}/claim', json={}).status_code == 400


def test_unknown_game(client):
    assert client.get('/api/game/missing/state').status_code == 404
    assert client.delete('/api/game/missing').status_code == 404


def test_end_game_scores_both_sides(client):
    game_id, state = _new_game(client)
    client.post(f'/api/game/{game_id}/claim', json={'index': _free_index(state)})

    state = client.post(f'/api/game/{game_id}/end').get_json()['state']

    assert state['is_game_over']
    assert state['phase'] == 'game_over'
    assert 50 <= state['player_evaluation']['score'] <= 98
    assert 50 <= state['ai_evaluation']['score'] <= 98


def test_full_game_lands_on_leaderboard(client):
    token = issue_session_token('user-1', TestingConfig.JWT_SECRET)
    game_id, state = _new_game(client, headers={'Authorization': f'Bearer {token}'}, difficulty='easy')

    for _ in range(7):
        state = client.post(f'/api/game/{game_id}/claim', json={'index': _free_index(state)}).get_json()['state']

    assert state['is_game_over']
    leaderboard = client.get('/api/leaderboard?difficulty=easy').get_json()['leaderboard']
    assert len(leaderboard) == 1
    assert leaderboard[0]['user_id'] == 'user-1'
    assert leaderboard[0]['word_count'] == 7


def test_anonymous_game_is_not_saved(client):
    game_id, state = _new_game(client, difficulty='easy')
    for _ in range(7):
        state = client.post(f'/api/game/{game_id}/claim', json={'index': _free_index(state)}).get_json()['state']

    assert state['is_game_over']
    assert client.get('/api/leaderboard').get_json()['leaderboard'] == []


def test_difficulty_and_prompt_switches(client):
    game_id, _ = _new_game(client)

    state = client.post(f'/api/game/{game_id}/difficulty', json={'difficulty': 'expert'}).get_json()['state']
    assert state['max_words_per_side'] == 15

    state = client.post(f'/api/game/{game_id}/prompt', json={'prompt_id': 'code-easy'}).get_json()['state']
    assert state['topic'] == 'Code Generation (Easy)'

    assert client.post(f'/api/game/{game_id}/difficulty', json={'difficulty': 'x'}).status_code == 400


def test_reset_and_delete(client):
    game_id, state = _new_game(client)
    client.post(f'/api/game/{game_id}/claim', json={'index': _free_index(state)})

    state = client.post(f'/api/game/{game_id}/reset').get_json()['state']
    assert state['player_words'] == []

    assert client.delete(f'/api/game/{game_id}').get_json() == {'success': True}
    assert client.get(f'/api/game/{game_id}/state').status_code == 404


def test_prompt_listing(client):
    prompts = client.get('/api/prompts?difficulty=easy').get_json()['prompts']
    assert len(prompts) == 4
    assert all(prompt['difficulty'] == 'easy' for prompt in prompts)
    assert client.get('/api/prompts?difficulty=x').status_code == 400


def test_health(client):
    _new_game(client)
    data = client.get('/api/health').get_json()
    assert data['status'] == 'healthy'
    assert data['active_games'] == 1
    assert data['oracle'] == 'OfflineOracle'
    assert data['results_store'] == 'InMemoryGameResultRepository'


def _play_easy_game(client, headers=None):
    game_id, state = _new_game(client, headers=headers, difficulty='easy')
    for _ in range(7):
        state = client.post(f'/api/game/{game_id}/claim', json={'index': _free_index(state)}).get_json()['state']
    return game_id, state


def _auth_headers(user_id='user-1'):
    return {'Authorization': f'Bearer {issue_session_token(user_id, TestingConfig.JWT_SECRET)}'}


def test_user_games_require_sign_in(client):
    assert client.get('/api/games').status_code == 401
    assert client.get('/api/games', headers={'Authorization': 'Bearer not-a-token'}).status_code == 401


def test_user_games_lists_own_results(client):
    _play_easy_game(client, headers=_auth_headers('user-1'))
    _play_easy_game(client, headers=_auth_headers('user-2'))

    response = client.get('/api/games', headers=_auth_headers('user-1'))

    assert response.status_code == 200
    games = response.get_json()['games']
    assert len(games) == 1
    assert games[0]['user_id'] == 'user-1'
    assert games[0]['game_mode'] == 'easy'


def test_user_games_limit_is_bounded(client):
    assert client.get('/api/games?limit=0', headers=_auth_headers()).status_code == 400
    assert client.get('/api/games?limit=101', headers=_auth_headers()).status_code == 400


def test_leaderboard_filters_by_model(client):
    _play_easy_game(client, headers=_auth_headers())

    default_model = client.get('/api/leaderboard?model=openai/gpt-3.5-turbo').get_json()['leaderboard']
    other_model = client.get('/api/leaderboard?model=meta-llama/llama-3-8b-instruct').get_json()['leaderboard']

    assert len(default_model) == 1
    assert other_model == []


def test_leaderboard_failure_uses_error_envelope(client, monkeypatch):
    def broken_leaderboard(*args, **kwargs):
        raise RuntimeError('index corrupted')

    monkeypatch.setattr(get_game_service().results, 'get_leaderboard', broken_leaderboard)

    response = client.get('/api/leaderboard')

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'error': 'index corrupted'}


def test_game_over_event_is_logged_once(client, monkeypatch):
    events = []
    log_game_event = game_logger.log_game_event

    def recording_log_game_event(game_id, event, user_id=None, **kwargs):
        events.append(event)
        log_game_event(game_id, event, user_id, **kwargs)

    monkeypatch.setattr(game_logger, 'log_game_event', recording_log_game_event)

    game_id, state = _play_easy_game(client)
    assert state['is_game_over']
    client.post(f'/api/game/{game_id}/claim', json={'index': _free_index(state)})
    client.post(f'/api/game/{game_id}/end')

    assert events.count('game_over') == 1
