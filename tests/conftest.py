import os
import sys
import json
import random
import pytest

# Ensure the project root (containing the `promptduel` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from promptduel import create_app
from promptduel.config import TestingConfig
from promptduel.models import OracleError, WordBankEntry
from promptduel.services import game_service as game_service_module
from promptduel.services.evaluation import EvaluationEngine
from promptduel.services.game_orchestrator import GameOrchestrator
from promptduel.services.game_service import initialize_game_service
from promptduel.services.identity import StaticIdentity
from promptduel.services.opponent import OpponentEngine
from promptduel.services.results_repository import InMemoryGameResultRepository


class ScriptedOracle:
    """Oracle double that replays canned replies and records every call."""

    def __init__(self, word_replies=None, evaluation_replies=None, on_suggest=None):
        self.word_replies = list(word_replies or [])
        self.evaluation_replies = list(evaluation_replies or [])
        self.on_suggest = on_suggest
        self.suggest_calls = []
        self.evaluate_calls = []

    def suggest_word(self, prompt, model, system_prompt):
        self.suggest_calls.append(prompt)
        if self.on_suggest:
            self.on_suggest()
        if self.word_replies:
            return self.word_replies.pop(0)
        # Pick the first available word
        line = next(line for line in prompt.splitlines() if line.startswith('Available words'))
        first = line.split(':', 1)[1].split(',')[0].strip()
        return json.dumps({'selectedWord': first, 'explanation': 'first available'})

    def evaluate_prompt(self, prompt, model, system_prompt):
        self.evaluate_calls.append(prompt)
        if self.evaluation_replies:
            return self.evaluation_replies.pop(0)
        return json.dumps({'score': 75, 'feedback': 'Solid prompt.'})


class FailingOracle:
    """Oracle double whose every call fails."""

    def __init__(self, message='Request timed out'):
        self.message = message
        self.calls = 0

    def suggest_word(self, prompt, model, system_prompt):
        self.calls += 1
        raise OracleError(self.message)

    def evaluate_prompt(self, prompt, model, system_prompt):
        self.calls += 1
        raise OracleError(self.message)


def make_bank(*texts):
    return [WordBankEntry(text=text) for text in texts]


def make_orchestrator(oracle, seed=7, results=None, user_id=None, evaluator=None, **kwargs):
    rng = random.Random(seed)
    return GameOrchestrator(
        opponent=OpponentEngine(oracle, rng=rng, thinking_delay=(0.0, 0.0)),
        evaluator=evaluator or EvaluationEngine(oracle),
        identity=StaticIdentity(user_id),
        results=results,
        rng=rng,
        clock=lambda: 1000.0,
        **kwargs
    )


@pytest.fixture()
def rng():
    return random.Random(42)


@pytest.fixture()
def oracle():
    return ScriptedOracle()


@pytest.fixture()
def results():
    return InMemoryGameResultRepository()


@pytest.fixture()
def orchestrator(oracle):
    game = make_orchestrator(oracle)
    game.reset()
    return game


@pytest.fixture()
def flask_app():
    initialize_game_service(TestingConfig)
    application = create_app(TestingConfig)
    yield application
    game_service_module._game_service = None


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
