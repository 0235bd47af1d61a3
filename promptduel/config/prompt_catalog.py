"""
Prompt Catalog

Static table of game topics. Each entry pairs a topic and difficulty tier
with the system instructions handed to the oracle for that game.
"""

from dataclasses import dataclass
from typing import Dict, Final, List, Optional, Tuple

DEFAULT_CATEGORY: Final[str] = 'product-description'


@dataclass(frozen=True)
class GamePrompt:
    """A catalog entry."""
    id: str
    difficulty: str
    title: str
    description: str
    system_prompt: str


_EASY_INSTRUCTIONS = (
    "You are playing a game to build an optimal prompt for {goal}. On your turn, choose one word "
    "that you think will help create a clear and relevant prompt. Please send only one word along "
    "with a brief explanation (one sentence) of why it fits."
)

_STANDARD_INSTRUCTIONS = (
    "You are participating in a game where you and your opponent take turns building a prompt for "
    "{goal}. Now, analyze the current state of the prompt (all the words chosen so far) and select "
    "the next word that logically complements it and brings it closer to the goal. Please provide "
    "your word along with an explanation (1-2 sentences) of how it improves the prompt."
)

_EXPERT_INSTRUCTIONS = (
    "You are an expert AI playing a game to create highly optimized prompts for {goal}. Analyze the "
    "entire context: consider all previously chosen words, potential moves from your opponent, and "
    "the final objective of the prompt. Choose the next word that strategically influences the future "
    "development of the prompt and helps form the most relevant final prompt. Please send your word "
    "along with a detailed explanation (2-3 sentences) of why it is the optimal choice, including its "
    "potential benefits and any risks."
)

# (id prefix, title, goal phrase, easy/standard/expert descriptions)
_TOPICS: Final[List[Tuple[str, str, str, Tuple[str, str, str]]]] = [
    ('product-description', 'Product Description', 'generating a product description', (
        'Build a prompt to generate a compelling product description',
        'Create a strategic prompt for an effective product description',
        'Craft an advanced prompt for a sophisticated product description',
    )),
    ('story', 'Short Story', 'creating a short story', (
        'Build a prompt to generate an engaging short story',
        'Create a strategic prompt for an effective short story',
        'Craft an advanced prompt for a sophisticated short story',
    )),
    ('code', 'Code Generation', 'generating code', (
        'Build a prompt to generate useful code',
        'Create a strategic prompt for effective code generation',
        'Craft an advanced prompt for sophisticated code generation',
    )),
    ('marketing', 'Marketing Copy', 'creating marketing copy', (
        'Build a prompt to generate effective marketing copy',
        'Create a strategic prompt for compelling marketing copy',
        'Craft an advanced prompt for sophisticated marketing copy',
    )),
]

_TIER_INSTRUCTIONS: Final[List[Tuple[str, str, str]]] = [
    ('easy', 'Easy', _EASY_INSTRUCTIONS),
    ('standard', 'Standard', _STANDARD_INSTRUCTIONS),
    ('expert', 'Expert', _EXPERT_INSTRUCTIONS),
]


def _build_catalog() -> List[GamePrompt]:
    prompts = []
    for prefix, title, goal, descriptions in _TOPICS:
        for (tier, label, instructions), description in zip(_TIER_INSTRUCTIONS, descriptions):
            prompts.append(GamePrompt(
                id=f"{prefix}-{tier}",
                difficulty=tier,
                title=f"{title} ({label})",
                description=description,
                system_prompt=instructions.format(goal=goal),
            ))
    return prompts


GAME_PROMPTS: Final[List[GamePrompt]] = _build_catalog()

_PROMPTS_BY_ID: Final[Dict[str, GamePrompt]] = {prompt.id: prompt for prompt in GAME_PROMPTS}


def find_prompt(difficulty: str, category: Optional[str] = None) -> GamePrompt:
    """
    Default catalog entry for a tier.

    Args:
        difficulty: Tier value ("easy", "standard", "expert")
        category: Topic id prefix; defaults to the product description topic

    Returns:
        The matching entry, or the first catalog entry when nothing matches
    """
    wanted = category or DEFAULT_CATEGORY
    for prompt in GAME_PROMPTS:
        if prompt.difficulty == difficulty and prompt.id.startswith(wanted):
            return prompt
    return GAME_PROMPTS[0]


def get_prompt_by_id(prompt_id: str) -> Optional[GamePrompt]:
    """Look up a catalog entry by id."""
    return _PROMPTS_BY_ID.get(prompt_id)


def list_prompts(difficulty: Optional[str] = None) -> List[GamePrompt]:
    """All catalog entries, optionally restricted to one tier."""
    if difficulty is None:
        return list(GAME_PROMPTS)
    return [prompt for prompt in GAME_PROMPTS if prompt.difficulty == difficulty]
