import random

import pytest

from conftest import make_bank
from promptduel.models import DifficultyTier, GameState, Side, Word
from promptduel.services.rationale import generate_ai_thought, generate_rationale


def _state(tier=DifficultyTier.STANDARD, ai_words=(), max_words=10):
    return GameState(
        word_bank=make_bank('the', 'tool'),
        difficulty=tier,
        selected_model='openai/gpt-3.5-turbo',
        topic='Marketing Copy (Standard)',
        system_prompt='instructions',
        max_words_per_side=max_words,
        ai_words=[Word(text, Side.AI) for text in ai_words],
    )


@pytest.mark.parametrize('tier', list(DifficultyTier))
@pytest.mark.parametrize('ai_words', [(), ('the',), ('a', 'b', 'c', 'd'), ('a', 'b', 'c', 'd', 'e', 'f', 'g', 'h')])
def test_rationale_quotes_word_and_names_topic(tier, ai_words):
    state = _state(tier, ai_words)
    text = generate_rationale('seamless', state, ' '.join(ai_words), '', tier, random.Random(3))
    assert '"seamless"' in text
    assert 'Marketing Copy (Standard)' in text


def test_first_word_uses_opening_template():
    text = generate_rationale('the', _state(), '', '', DifficultyTier.STANDARD, random.Random(0))
    assert text.startswith('I\'m starting with "the"')


def test_closing_words_use_closing_template():
    state = _state(ai_words=('a', 'b', 'c', 'd', 'e', 'f', 'g', 'h'))
    text = generate_rationale('tool', state, 'a b c d e f g h', '', DifficultyTier.STANDARD, random.Random(0))
    assert text.startswith('I\'m concluding my prompt with "tool"')


def test_same_seed_gives_same_rationale():
    state = _state(DifficultyTier.EASY, ('a', 'b', 'c', 'd'))
    first = generate_rationale('tool', state, 'a b c d', '', DifficultyTier.EASY, random.Random(11))
    second = generate_rationale('tool', state, 'a b c d', '', DifficultyTier.EASY, random.Random(11))
    assert first == second


def test_ai_thought_uses_state_tier():
    state = _state(DifficultyTier.EXPERT)
    thought = generate_ai_thought('robust', state, random.Random(1))
    assert thought.word == 'robust'
    assert 'semantic' in thought.explanation
