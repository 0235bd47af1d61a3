import random

import pytest

from conftest import ScriptedOracle
from promptduel.services.game_service import GameService
from promptduel.services.results_repository import InMemoryGameResultRepository


@pytest.fixture()
def service():
    return GameService(ScriptedOracle(), InMemoryGameResultRepository(), thinking_delay=(0.0, 0.0),
                       rng=random.Random(1))


def test_create_and_fetch_game(service):
    game_id = service.create_new_game('expert')
    state = service.get_game_state(game_id)
    assert state['difficulty'] == 'expert'
    assert state['selected_model'] == 'openai/gpt-3.5-turbo'
    assert service.active_games_count() == 1


def test_games_are_independent(service):
    first = service.create_new_game()
    second = service.create_new_game()
    service.get_game(first).claim_word(0)

    assert len(service.get_game(first).state.player_words) == 1
    assert service.get_game(second).state.player_words == []


def test_model_and_prompt_are_applied(service):
    game_id = service.create_new_game('standard', 'mistralai/mixtral-8x7b-instruct', 'marketing-standard')
    state = service.get_game_state(game_id)
    assert state['selected_model'] == 'mistralai/mixtral-8x7b-instruct'
    assert state['topic'] == 'Marketing Copy (Standard)'


def test_unknown_difficulty_is_rejected(service):
    with pytest.raises(ValueError):
        service.create_new_game('impossible')


def test_delete_game(service):
    game_id = service.create_new_game()
    assert service.delete_game(game_id)
    assert not service.delete_game(game_id)
    assert service.get_game_state(game_id) is None
