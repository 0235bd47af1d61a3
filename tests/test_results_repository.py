from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from pymongo.errors import PyMongoError

from promptduel.models import GameResultRecord, PersistenceError
from promptduel.services.results_repository import (
    InMemoryGameResultRepository, MongoGameResultRepository, validate_game_result
)

CREATED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _record(**overrides):
    fields = dict(
        user_id='user-1',
        prompt_text='innovative tool enhances',
        score=88,
        difficulty='standard',
        model_id='openai/gpt-3.5-turbo',
        word_count=3,
        created_at=CREATED_AT,
    )
    fields.update(overrides)
    return GameResultRecord(**fields)


def test_valid_record_has_no_errors():
    assert validate_game_result(_record()) == []


@pytest.mark.parametrize('overrides, field', [
    ({'user_id': ''}, 'user_id'),
    ({'prompt_text': 'ab'}, 'prompt'),
    ({'prompt_text': 'x' * 1001}, 'prompt'),
    ({'score': 101}, 'score'),
    ({'difficulty': 'insane'}, 'game_mode'),
    ({'model_id': 'acme/unknown'}, 'model'),
    ({'word_count': 0}, 'word_count'),
])
def test_invalid_records(overrides, field):
    errors = validate_game_result(_record(**overrides))
    assert [error.field for error in errors] == [field]


def test_in_memory_leaderboard_orders_by_score():
    repository = InMemoryGameResultRepository()
    repository.save_game_result(_record(score=60))
    repository.save_game_result(_record(score=95, difficulty='expert'))
    repository.save_game_result(_record(score=80))

    assert [entry['score'] for entry in repository.get_leaderboard()] == [95, 80, 60]
    assert [entry['score'] for entry in repository.get_leaderboard('standard', limit=1)] == [80]

    entry = repository.get_leaderboard()[0]
    assert entry['id'] == 'game-2'
    assert entry['created_at'] == CREATED_AT.isoformat()
    assert '_id' not in entry


def test_in_memory_user_games_newest_first():
    repository = InMemoryGameResultRepository()
    repository.save_game_result(_record(score=50))
    repository.save_game_result(_record(score=70, created_at=CREATED_AT + timedelta(days=1)))
    repository.save_game_result(_record(user_id='user-2'))

    assert [entry['score'] for entry in repository.get_user_games('user-1')] == [70, 50]


def test_invalid_record_is_not_stored():
    repository = InMemoryGameResultRepository()
    with pytest.raises(PersistenceError, match='score'):
        repository.save_game_result(_record(score=-1))
    assert repository.documents == []


def test_mongo_insert():
    collection = MagicMock()
    collection.insert_one.return_value.inserted_id = 'abc123'

    document_id = MongoGameResultRepository(collection).save_game_result(_record())

    assert document_id == 'abc123'
    document = collection.insert_one.call_args[0][0]
    assert document['prompt'] == 'innovative tool enhances'
    assert document['game_mode'] == 'standard'
    assert document['model'] == 'openai/gpt-3.5-turbo'


def test_mongo_insert_failure():
    collection = MagicMock()
    collection.insert_one.side_effect = PyMongoError('boom')
    with pytest.raises(PersistenceError):
        MongoGameResultRepository(collection).save_game_result(_record())


def test_mongo_leaderboard_query():
    collection = MagicMock()
    cursor = collection.find.return_value.sort.return_value.limit.return_value
    cursor.__iter__.return_value = iter([{'_id': 'x1', 'score': 91, 'created_at': CREATED_AT}])

    entries = MongoGameResultRepository(collection).get_leaderboard('expert', 5)

    collection.find.assert_called_once_with({'game_mode': 'expert'})
    collection.find.return_value.sort.return_value.limit.assert_called_once_with(5)
    assert entries == [{'score': 91, 'created_at': CREATED_AT.isoformat(), 'id': 'x1'}]


def test_in_memory_leaderboard_filters_by_model():
    repository = InMemoryGameResultRepository()
    repository.save_game_result(_record(score=90))
    repository.save_game_result(_record(score=70, model_id='meta-llama/llama-3-8b-instruct'))
    repository.save_game_result(_record(score=85, model_id='meta-llama/llama-3-8b-instruct', difficulty='easy'))

    llama = repository.get_leaderboard(model='meta-llama/llama-3-8b-instruct')
    assert [entry['score'] for entry in llama] == [85, 70]

    llama_standard = repository.get_leaderboard('standard', model='meta-llama/llama-3-8b-instruct')
    assert [entry['score'] for entry in llama_standard] == [70]


def test_mongo_leaderboard_model_query():
    collection = MagicMock()
    cursor = collection.find.return_value.sort.return_value.limit.return_value
    cursor.__iter__.return_value = iter([])

    MongoGameResultRepository(collection).get_leaderboard('easy', 10, 'intel/neural-chat-7b')

    collection.find.assert_called_once_with({'game_mode': 'easy', 'model': 'intel/neural-chat-7b'})
