"""
Game Results Repository

Stores completed-game summaries and serves the leaderboard. The MongoDB
repository is used when MONGO_URI is configured; the in-memory repository
backs offline play and tests.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING
from pymongo.errors import PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..config.game_settings import AVAILABLE_MODELS
from ..models.errors import PersistenceError
from ..models.game import DifficultyTier
from ..models.result import GameResultRecord
from ..utils.game_logger import game_logger


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


def validate_game_result(record: GameResultRecord) -> List[ValidationError]:
    """
    Check a result before it is stored.

    Returns:
        List of validation errors, empty when the record is valid
    """
    errors = []

    if not record.user_id:
        errors.append(ValidationError('user_id', 'User ID is required'))

    if not record.prompt_text:
        errors.append(ValidationError('prompt', 'Prompt is required'))
    elif len(record.prompt_text) < 3:
        errors.append(ValidationError('prompt', 'Prompt must be at least 3 characters long'))
    elif len(record.prompt_text) > 1000:
        errors.append(ValidationError('prompt', 'Prompt must be less than 1000 characters'))

    if record.score is None:
        errors.append(ValidationError('score', 'Score is required'))
    elif record.score < 0 or record.score > 100:
        errors.append(ValidationError('score', 'Score must be between 0 and 100'))

    valid_modes = [tier.value for tier in DifficultyTier]
    if not record.difficulty:
        errors.append(ValidationError('game_mode', 'Game mode is required'))
    elif record.difficulty not in valid_modes:
        errors.append(ValidationError('game_mode', f"Game mode must be one of: {', '.join(valid_modes)}"))

    valid_models = list(AVAILABLE_MODELS.values())
    if not record.model_id:
        errors.append(ValidationError('model', 'Model is required'))
    elif record.model_id not in valid_models:
        names = ', '.join(model.split('/')[-1] for model in valid_models)
        errors.append(ValidationError('model', f"Model must be one of: {names}"))

    if record.word_count is None:
        errors.append(ValidationError('word_count', 'Word count is required'))
    elif record.word_count < 1:
        errors.append(ValidationError('word_count', 'Word count must be at least 1'))

    return errors


def _ensure_valid(record: GameResultRecord) -> None:
    errors = validate_game_result(record)
    if errors:
        summary = '; '.join(f"{error.field}: {error.message}" for error in errors)
        raise PersistenceError(f"Invalid game result: {summary}")


def _public_entry(document: Dict[str, Any]) -> Dict[str, Any]:
    entry = {key: value for key, value in document.items() if key != '_id'}
    if '_id' in document:
        entry['id'] = str(document['_id'])
    created_at = entry.get('created_at')
    if hasattr(created_at, 'isoformat'):
        entry['created_at'] = created_at.isoformat()
    return entry


class MongoGameResultRepository:
    """Game results stored in a MongoDB collection."""

    def __init__(self, collection):
        self.collection = collection

    @classmethod
    def from_uri(cls, mongo_uri: str, db_name: str = 'prompt_duel') -> 'MongoGameResultRepository':
        """
        Connect to MongoDB and return a repository over ``<db>.game_results``.

        Raises:
            PersistenceError: If the server cannot be reached
        """
        client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        try:
            client.admin.command('ping')
        except PyMongoError as e:
            raise PersistenceError(f"MongoDB connection error: {e}") from e

        game_logger.logger.info("Connected to MongoDB for game results")
        repository = cls(client[db_name].game_results)
        repository.ensure_indexes()
        return repository

    def ensure_indexes(self) -> None:
        self.collection.create_index([('score', DESCENDING)])
        self.collection.create_index('user_id')
        self.collection.create_index([('game_mode', 1), ('score', DESCENDING)])
        self.collection.create_index([('model', 1), ('score', DESCENDING)])

    def save_game_result(self, record: GameResultRecord) -> str:
        """
        Insert one result.

        Returns:
            The inserted document id

        Raises:
            PersistenceError: If the record is invalid or the insert fails
        """
        _ensure_valid(record)
        try:
            result = self.collection.insert_one(record.to_document())
        except PyMongoError as e:
            raise PersistenceError(f"Failed to save game result: {e}") from e
        return str(result.inserted_id)

    def get_leaderboard(self, difficulty: Optional[str] = None, limit: int = 10,
                        model: Optional[str] = None) -> List[Dict[str, Any]]:
        query = {}
        if difficulty:
            query['game_mode'] = difficulty
        if model:
            query['model'] = model
        try:
            cursor = self.collection.find(query).sort('score', DESCENDING).limit(limit)
            return [_public_entry(document) for document in cursor]
        except PyMongoError as e:
            raise PersistenceError(f"Failed to load leaderboard: {e}") from e

    def get_user_games(self, user_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        try:
            cursor = self.collection.find({'user_id': user_id}).sort('created_at', DESCENDING).limit(limit)
            return [_public_entry(document) for document in cursor]
        except PyMongoError as e:
            raise PersistenceError(f"Failed to load games for user {user_id}: {e}") from e


class InMemoryGameResultRepository:
    """Game results kept in process memory."""

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []

    def save_game_result(self, record: GameResultRecord) -> str:
        _ensure_valid(record)
        document_id = f"game-{len(self.documents) + 1}"
        self.documents.append({'_id': document_id, **record.to_document()})
        return document_id

    def get_leaderboard(self, difficulty: Optional[str] = None, limit: int = 10,
                        model: Optional[str] = None) -> List[Dict[str, Any]]:
        documents = [
            doc for doc in self.documents
            if (not difficulty or doc['game_mode'] == difficulty) and (not model or doc['model'] == model)
        ]
        documents.sort(key=lambda doc: doc['score'], reverse=True)
        return [_public_entry(doc) for doc in documents[:limit]]

    def get_user_games(self, user_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        documents = [doc for doc in self.documents if doc['user_id'] == user_id]
        documents.sort(key=lambda doc: doc['created_at'], reverse=True)
        return [_public_entry(doc) for doc in documents[:limit]]


def build_results_repository(config):
    """MongoDB repository when MONGO_URI is set, in-memory otherwise."""
    mongo_uri = getattr(config, 'MONGO_URI', None)
    if mongo_uri:
        return MongoGameResultRepository.from_uri(mongo_uri, config.MONGO_DB_NAME)

    game_logger.logger.warning("MONGO_URI not configured; game results are kept in memory")
    return InMemoryGameResultRepository()
