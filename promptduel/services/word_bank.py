"""
Word Bank Generator

Builds the shared pool of candidate words for a topic.
"""

import random
from typing import List, Optional

from ..config.game_settings import (
    ADJECTIVE_WORDS, DEFAULT_TOPIC, FUNCTION_WORDS, NOUN_WORDS, TOPIC_KEYWORDS,
    VERB_WORDS, WORD_BANK_SIZE
)
from ..models.game import WordBankEntry


def topic_words_for(topic: str) -> List[str]:
    """Topic-specific keywords picked by the first substring that matches the label."""
    label = topic.lower()
    for needle, words in TOPIC_KEYWORDS:
        if needle in label:
            return list(words)
    return []


def generate_word_bank(topic: str, rng: Optional[random.Random] = None) -> List[WordBankEntry]:
    """
    Generate a fresh word bank for a topic.

    Args:
        topic: Topic label, e.g. "Marketing Copy (Easy)"; empty falls back to a generic label
        rng: Random source for the shuffle; unseeded when omitted

    Returns:
        List of WORD_BANK_SIZE unused entries in shuffled order
    """
    rng = rng or random.Random()
    topic = topic or DEFAULT_TOPIC

    all_words = FUNCTION_WORDS + ADJECTIVE_WORDS + NOUN_WORDS + VERB_WORDS + topic_words_for(topic)
    rng.shuffle(all_words)

    return [WordBankEntry(text=text) for text in all_words[:WORD_BANK_SIZE]]
