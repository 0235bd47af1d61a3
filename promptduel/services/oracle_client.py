"""
Oracle Client

The language model the game consults for opponent word suggestions and
prompt evaluation. ``OpenRouterClient`` talks to the OpenRouter
chat-completions API; ``OfflineOracle`` answers locally so the game can run
without network access or an API key.
"""

import json
import random
import re
from typing import List, Optional

import requests

from ..config.game_settings import DEFAULT_TOPIC_CATEGORY, TOPIC_CATEGORY_WORDS
from ..models.errors import OracleError
from ..utils.game_logger import game_logger
from .evaluation import build_evaluation_prompt, score_prompt_offline, topic_category


class OpenRouterClient:
    """
    Synchronous client for the OpenRouter chat-completions endpoint.

    Every failure mode (missing key, transport error, timeout, non-2xx
    status, empty reply) is raised as OracleError so callers only handle one
    exception type.
    """

    def __init__(self, api_key: Optional[str], base_url: str = "https://openrouter.ai/api/v1",
                 app_url: str = "http://localhost:5173", timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.app_url = app_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def call_llm(self, prompt: str, model: str, system_prompt: Optional[str] = None,
                 temperature: float = 0.7, max_tokens: int = 100) -> str:
        """
        Send one chat completion request and return the reply text.

        Raises:
            OracleError: On any failure to obtain a non-empty reply
        """
        if not self.api_key:
            raise OracleError("OpenRouter API key is missing")

        messages = []
        if system_prompt:
            messages.append({'role': 'system', 'content': system_prompt})
        messages.append({'role': 'user', 'content': prompt})

        game_logger.logger.info(f"Calling OpenRouter with model {model}")
        try:
            response = self.session.post(
                f"{self.base_url}/chat/completions",
                headers={
                    'Authorization': f"Bearer {self.api_key}",
                    'HTTP-Referer': self.app_url,
                    'X-Title': 'Prompt Duel',
                },
                json={
                    'model': model,
                    'messages': messages,
                    'temperature': temperature,
                    'max_tokens': max_tokens,
                },
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise OracleError(f"OpenRouter request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise OracleError(f"OpenRouter request failed: {e}") from e

        if not response.ok:
            raise OracleError(f"OpenRouter API error: {response.status_code} - {response.text[:200]}")

        try:
            data = response.json()
            content = data['choices'][0]['message']['content']
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise OracleError("Malformed response from OpenRouter") from e

        if not content or not str(content).strip():
            raise OracleError("Empty response from OpenRouter")
        return str(content)

    def suggest_word(self, prompt: str, model: str, system_prompt: str) -> str:
        return self.call_llm(prompt, model, system_prompt, temperature=0.7, max_tokens=150)

    def evaluate_prompt(self, prompt: str, model: str, system_prompt: str) -> str:
        return self.call_llm(build_evaluation_prompt(prompt), model, system_prompt,
                             temperature=0.3, max_tokens=300)


_AVAILABLE_LINE = re.compile(r"Available words to choose from:\s*(.*)")
_CURRENT_PROMPT_LINE = re.compile(r'Your current prompt so far:\s*"(.*)"')

_DETERMINERS = {'a', 'an', 'the', 'this', 'that', 'these', 'those', 'my', 'your', 'our', 'their'}
_LINKING_VERBS = {'is', 'are', 'was', 'were', 'be', 'been', 'being', 'seem', 'appear', 'become', 'feels'}
_DEGREE_ADVERBS = {'very', 'quite', 'extremely', 'somewhat', 'rather', 'fairly', 'too', 'so', 'really'}
_CONJUNCTIONS = {'and', 'or', 'but', 'yet', 'so', 'for', 'nor'}
_PREPOSITIONS = {'in', 'on', 'at', 'by', 'with', 'from', 'to', 'for', 'about', 'through', 'over', 'under', 'between'}
_MODALS = {'can', 'could', 'will', 'would', 'shall', 'should', 'may', 'might', 'must'}
_PRONOUNS = {'he', 'she', 'it', 'they', 'we', 'you', 'i'}


class OfflineOracle:
    """
    Local stand-in for the language model.

    Word suggestions follow simple grammar cues from the last word of the
    partial prompt; evaluations use the deterministic local scorer.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def next_word_class(self, current_prompt: str) -> str:
        words = current_prompt.split()
        last_word = words[-1].lower() if words else ''

        if last_word in _DETERMINERS or last_word in _LINKING_VERBS or last_word in _DEGREE_ADVERBS:
            return 'adjectives'
        if last_word in _CONJUNCTIONS:
            return 'nouns' if self.rng.random() > 0.5 else 'adjectives'
        if last_word in _PREPOSITIONS:
            return 'nouns'
        if last_word in _MODALS:
            return 'verbs'
        if len(words) > 3 and len(words) % 3 == 0:
            return 'connectors'
        if last_word.endswith('ly') or last_word in _PRONOUNS:
            return 'verbs'

        roll = self.rng.random()
        if roll < 0.3:
            return 'nouns'
        if roll < 0.6:
            return 'adjectives'
        if roll < 0.8:
            return 'verbs'
        return 'connectors'

    def _pick_word(self, current_prompt: str, category: str, available: List[str]) -> str:
        word_class = self.next_word_class(current_prompt)
        vocabulary = TOPIC_CATEGORY_WORDS.get(category, TOPIC_CATEGORY_WORDS[DEFAULT_TOPIC_CATEGORY])
        preferred = vocabulary.get(word_class, vocabulary['nouns'])

        if available:
            matching = [word for word in available if word in preferred]
            return self.rng.choice(matching or available)
        return self.rng.choice(preferred)

    def suggest_word(self, prompt: str, model: str, system_prompt: str) -> str:
        available_match = _AVAILABLE_LINE.search(prompt)
        available = []
        if available_match:
            available = [word.strip() for word in available_match.group(1).split(',') if word.strip()]

        prompt_match = _CURRENT_PROMPT_LINE.search(prompt)
        current_prompt = prompt_match.group(1) if prompt_match else ''

        word = self._pick_word(current_prompt, topic_category(system_prompt), available)
        return json.dumps({
            'selectedWord': word,
            'explanation': f"'{word}' fits the grammar of the prompt so far.",
        })

    def evaluate_prompt(self, prompt: str, model: str, system_prompt: str) -> str:
        evaluation = score_prompt_offline(prompt, system_prompt)
        return json.dumps({'score': evaluation.score, 'feedback': evaluation.feedback})


def build_oracle(config, rng: Optional[random.Random] = None):
    """Pick the OpenRouter client when an API key is configured, else the offline oracle."""
    api_key = getattr(config, 'OPENROUTER_API_KEY', None)
    if api_key:
        return OpenRouterClient(
            api_key=api_key,
            base_url=config.OPENROUTER_BASE_URL,
            app_url=config.APP_URL,
            timeout=config.ORACLE_TIMEOUT_SECONDS,
        )

    game_logger.logger.warning("OPENROUTER_API_KEY not configured; using the offline oracle")
    return OfflineOracle(rng)
