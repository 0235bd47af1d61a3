"""
Game Configuration Constants Module

This module defines all game configuration constants: the word lists the
shared word bank is drawn from, per-tier word caps, the keyword tables used
by offline scoring, and the models players may pick for the opponent.
All game parameters are centralized here to enable easy modification.
"""

from typing import Dict, Final, List, Tuple

WORD_BANK_SIZE: Final[int] = 30
"""
Number of candidate words in a freshly generated word bank.
Type: Final[int] - Immutable to prevent accidental modification
"""

DEFAULT_TOPIC: Final[str] = "Product Description"

# Per-side word caps keyed by difficulty tier value
MAX_WORDS_PER_SIDE: Final[Dict[str, int]] = {
    "easy": 7,
    "standard": 10,
    "expert": 15,
}

FUNCTION_WORDS: Final[List[str]] = [
    'the', 'a', 'an', 'and', 'or', 'but', 'with', 'for', 'in', 'on',
    'to', 'from', 'by', 'at', 'of', 'about', 'that', 'which', 'who', 'when',
]

ADJECTIVE_WORDS: Final[List[str]] = [
    'innovative', 'powerful', 'efficient', 'intuitive', 'seamless', 'advanced',
    'user-friendly', 'reliable', 'modern', 'smart', 'effective', 'premium',
    'affordable', 'sustainable', 'cutting-edge', 'revolutionary', 'elegant', 'robust',
]

NOUN_WORDS: Final[List[str]] = [
    'product', 'solution', 'tool', 'device', 'application', 'software', 'system',
    'platform', 'service', 'technology', 'experience', 'design', 'feature', 'benefit',
    'quality', 'performance', 'value', 'innovation', 'customer', 'user',
]

VERB_WORDS: Final[List[str]] = [
    'transforms', 'enhances', 'streamlines', 'simplifies', 'accelerates', 'optimizes',
    'revolutionizes', 'improves', 'delivers', 'provides', 'offers', 'enables',
    'empowers', 'helps', 'supports', 'creates', 'builds', 'develops',
]

# Topic keyword sets, matched in order by substring of the lowercased topic label
TOPIC_KEYWORDS: Final[List[Tuple[str, List[str]]]] = [
    ('product', ['features', 'benefits', 'design', 'usability', 'functionality', 'interface']),
    ('marketing', ['campaign', 'audience', 'strategy', 'engagement', 'conversion', 'brand']),
    ('content', ['article', 'blog', 'story', 'narrative', 'message', 'information']),
]

# Word classes per evaluation topic category (offline scoring + offline oracle)
TOPIC_CATEGORY_WORDS: Final[Dict[str, Dict[str, List[str]]]] = {
    'product-description': {
        'nouns': ['product', 'solution', 'tool', 'device', 'application', 'software', 'system', 'platform', 'service'],
        'adjectives': ['innovative', 'powerful', 'efficient', 'intuitive', 'seamless', 'advanced', 'user-friendly', 'reliable'],
        'verbs': ['transforms', 'enhances', 'streamlines', 'simplifies', 'accelerates', 'optimizes', 'revolutionizes'],
        'connectors': ['that', 'which', 'and', 'while', 'by', 'through', 'using', 'with', 'for'],
    },
    'story-prompt': {
        'nouns': ['adventure', 'journey', 'character', 'world', 'mystery', 'conflict', 'hero', 'villain', 'setting'],
        'adjectives': ['mysterious', 'ancient', 'magical', 'futuristic', 'dystopian', 'enchanted', 'forgotten', 'hidden'],
        'verbs': ['discovers', 'encounters', 'reveals', 'transforms', 'battles', 'navigates', 'explores', 'overcomes'],
        'connectors': ['who', 'where', 'when', 'while', 'despite', 'through', 'beyond', 'within', 'against'],
    },
    'question': {
        'nouns': ['concept', 'theory', 'event', 'phenomenon', 'relationship', 'factor', 'principle', 'mechanism'],
        'adjectives': ['significant', 'historical', 'scientific', 'philosophical', 'cultural', 'ethical', 'political'],
        'verbs': ['influenced', 'affected', 'changed', 'developed', 'evolved', 'contributed', 'impacted'],
        'connectors': ['how', 'why', 'what', 'when', 'where', 'which', 'whose', 'whom', 'that'],
    },
}

DEFAULT_TOPIC_CATEGORY: Final[str] = 'product-description'

AVAILABLE_MODELS: Final[Dict[str, str]] = {
    'GPT35_TURBO': 'openai/gpt-3.5-turbo',
    'LLAMA3': 'meta-llama/llama-3-8b-instruct',
    'MIXTRAL': 'mistralai/mixtral-8x7b-instruct',
    'NEURAL_CHAT': 'intel/neural-chat-7b',
}


def category_keywords(category: str) -> List[str]:
    """Keywords that make a word relevant to a topic category (connectors excluded)."""
    words = TOPIC_CATEGORY_WORDS.get(category, TOPIC_CATEGORY_WORDS[DEFAULT_TOPIC_CATEGORY])
    return words['nouns'] + words['adjectives'] + words['verbs']


def validate_game_settings() -> bool:
    """
    Validates the integrity and consistency of the game constants.

    This function performs validation to ensure:
    1. Word lists are non-empty and free of duplicates
    2. Every tier cap is positive
    3. Both sides together fit inside one word bank at every tier

    Returns:
        bool: True if settings pass all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    word_lists = {
        'FUNCTION_WORDS': FUNCTION_WORDS,
        'ADJECTIVE_WORDS': ADJECTIVE_WORDS,
        'NOUN_WORDS': NOUN_WORDS,
        'VERB_WORDS': VERB_WORDS,
    }
    for name, words in word_lists.items():
        if not words:
            raise ValueError(f"{name} cannot be empty")
        if len(words) != len(set(words)):
            duplicates = sorted({word for word in words if words.count(word) > 1})
            raise ValueError(f"Duplicate words found in {name}: {duplicates}")

    for tier, cap in MAX_WORDS_PER_SIDE.items():
        if cap <= 0:
            raise ValueError(f"Word cap for tier '{tier}' must be positive")
        if cap * 2 > WORD_BANK_SIZE:
            raise ValueError(f"Word cap for tier '{tier}' does not fit a bank of {WORD_BANK_SIZE} words")

    base_total = sum(len(words) for words in word_lists.values())
    if base_total < WORD_BANK_SIZE:
        raise ValueError(f"Base word lists hold {base_total} words, fewer than the bank size {WORD_BANK_SIZE}")

    return True


if __name__ == "__main__":

    try:
        validate_game_settings()
        print(" Game settings validation passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
