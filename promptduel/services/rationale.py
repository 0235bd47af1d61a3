"""
Opponent rationale text.

Each tier has its own voice: easy is playful, standard is plain, expert is
dense and technical. Every rationale is one sentence that quotes the chosen
word and names the topic.
"""

import random
from typing import Dict, List, Optional

from ..models.game import AIThought, DifficultyTier, GameState

_EASY_EMOJIS = ['\U0001F60A', '✨', '\U0001F31F', '\U0001F389', '\U0001F44D', '❤️']

_POSITION_TEMPLATES: Dict[DifficultyTier, Dict[str, str]] = {
    DifficultyTier.EASY: {
        'first': 'I\'m starting with "{word}" because it\'s a super fun word for talking about {topic}!',
        'early': 'I added "{word}" because it goes really well with "{ai_prompt}" in my {topic} prompt, they\'re best friends!',
        'closing': 'I\'m finishing my {topic} prompt with "{word}" because it makes everything sound amazing!',
    },
    DifficultyTier.STANDARD: {
        'first': 'I\'m starting with "{word}" as a foundation for my prompt about {topic}.',
        'early': 'I added "{word}" to build upon "{ai_prompt}" for a stronger opening on {topic}.',
        'closing': 'I\'m concluding my prompt with "{word}" to finalize my instructions about {topic}.',
    },
    DifficultyTier.EXPERT: {
        'first': ('I\'ve initiated the prompt construction with "{word}" because it establishes an optimal '
                  'semantic foundation for {topic}, chosen after weighing alternatives for conceptual '
                  'alignment and information value.'),
        'early': ('Building on the semantic framework of "{ai_prompt}", I\'ve incorporated "{word}" to add a '
                  'conceptual dimension that sharpens the prompt\'s specificity regarding {topic} while keeping '
                  'the syntax tight.'),
        'closing': ('Approaching the end of the construction, I\'ve selected "{word}" to provide semantic closure '
                    'and comprehensive coverage of {topic}, complementing the existing structure with the '
                    'necessary conceptual resolution.'),
    },
}

_TEMPLATE_BANKS: Dict[DifficultyTier, List[str]] = {
    DifficultyTier.EASY: [
        'I picked "{word}" because it sounds fun and makes my {topic} prompt super cool!',
        '"{word}" is a really nice word that makes my prompt about {topic} more colorful!',
        'I like "{word}" a lot, it makes my {topic} prompt happy and exciting!',
        '"{word}" is perfect here, it\'s like adding sprinkles to my {topic} ice cream!',
        'I chose "{word}" because it\'s my favorite word for {topic} right now!',
    ],
    DifficultyTier.STANDARD: [
        'I chose "{word}" to enhance the clarity of my prompt about {topic}.',
        'Adding "{word}" helps create a more specific instruction for {topic}.',
        '"{word}" complements my previous words and adds necessary context for {topic}.',
        'I selected "{word}" to differentiate my approach to {topic} from the player\'s prompt "{player_prompt}".',
        '"{word}" is a strategic choice that addresses a key aspect of {topic}.',
    ],
    DifficultyTier.EXPERT: [
        ('I\'ve selected "{word}" for its semantic compatibility with the existing prompt structure and its '
         'capacity to enrich the conceptual framework of {topic}, optimizing information density.'),
        ('"{word}" introduces a critical semantic dimension that establishes a more nuanced relationship with '
         '{topic}, with its syntactic placement chosen to maximize processing efficiency.'),
        ('After analyzing the lexical alternatives, I determined that "{word}" offers optimal semantic value '
         'through its contextual relevance to {topic} while maintaining syntactic coherence.'),
        ('Including "{word}" is a calculated decision to raise the pragmatic effectiveness of the prompt, since '
         'its semantic field intersects precisely with the core requirements of {topic}.'),
        ('"{word}" shows superior semantic alignment with both the existing prompt elements and the target '
         'domain of {topic}, and its information-to-token ratio is exceptionally favorable.'),
    ],
}


def _position(opponent_word_count: int, max_words_per_side: int) -> Optional[str]:
    if opponent_word_count == 0:
        return 'first'
    if opponent_word_count < 3:
        return 'early'
    if opponent_word_count >= max_words_per_side - 2:
        return 'closing'
    return None


def generate_rationale(word: str, state: GameState, ai_prompt_so_far: str,
                       player_prompt_so_far: str, tier: DifficultyTier,
                       rng: Optional[random.Random] = None) -> str:
    """
    Explain an opponent move in the voice of the given tier.

    Position is judged from the opponent's word count before this move:
    first word, early words, the last couple before the cap, otherwise a
    random template from the tier's bank.
    """
    rng = rng or random.Random()
    tier = DifficultyTier(tier)

    position = _position(len(state.ai_words), state.max_words_per_side)
    if position is not None:
        template = _POSITION_TEMPLATES[tier][position]
    else:
        template = rng.choice(_TEMPLATE_BANKS[tier])

    reasoning = template.format(
        word=word,
        topic=state.topic,
        ai_prompt=ai_prompt_so_far,
        player_prompt=player_prompt_so_far,
    )

    if tier == DifficultyTier.EASY and rng.random() > 0.5:
        reasoning += f" {rng.choice(_EASY_EMOJIS)}"

    return reasoning


def generate_ai_thought(word: str, state: GameState, rng: Optional[random.Random] = None) -> AIThought:
    """Rationale for the current state, wrapped as the opponent's thought."""
    explanation = generate_rationale(
        word,
        state,
        " ".join(w.text for w in state.ai_words),
        " ".join(w.text for w in state.player_words),
        state.difficulty,
        rng,
    )
    return AIThought(word=word, explanation=explanation)
