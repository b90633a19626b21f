"""Summary translator.

Only the analyzer's summary is translated, never the full document or the
risk factors. English is the canonical language and short-circuits without
a backend call.
"""

from __future__ import annotations

import hashlib
import logging
from collections import OrderedDict

from consentlab.core.exceptions import BackendError, TranslationError
from consentlab.inference.client import GenerationClient
from consentlab.languages import ENGLISH, resolve_language
from consentlab.prompts.registry import get_prompt

log = logging.getLogger(__name__)


class Translator:
    """Translates summaries into a supported language on demand.

    When ``cache_enabled`` is True, results are memoized per
    ``(sha256(summary), language)`` in a bounded LRU.
    """

    def __init__(
        self,
        client: GenerationClient,
        *,
        cache_enabled: bool = False,
        cache_max_size: int = 256,
    ) -> None:
        self._client = client
        self._cache_enabled = cache_enabled
        self._cache_max_size = cache_max_size
        self._cache: OrderedDict[tuple[str, str], str] = OrderedDict()

    async def translate(self, summary: str, target_language: str) -> str:
        """Translate ``summary`` into ``target_language`` (name or code).

        Raises:
            TranslationError: ``unsupported-language`` or ``backend-failure``.
        """
        try:
            language = resolve_language(target_language)
        except KeyError as e:
            raise TranslationError(
                "unsupported-language", f"Translation to {target_language!r} is not supported."
            ) from e

        if language is ENGLISH or not summary.strip():
            return summary

        key = (hashlib.sha256(summary.encode("utf-8")).hexdigest(), language.name)
        if self._cache_enabled and key in self._cache:
            self._cache.move_to_end(key)
            log.debug("Translation cache hit", extra={"language": language.name})
            return self._cache[key]

        prompt = get_prompt("translation", "TRANSLATION_PROMPT").format(
            language=language.name, text=summary
        )
        try:
            translated = await self._client.generate(prompt, operation="translation")
        except BackendError as e:
            log.error("Translation to %s failed: %s", language.name, e)
            raise TranslationError("backend-failure") from e

        translated = translated.strip()
        if not translated:
            raise TranslationError("backend-failure", "The translation came back empty. Please try again.")

        if self._cache_enabled:
            self._cache[key] = translated
            if len(self._cache) > self._cache_max_size:
                self._cache.popitem(last=False)
        return translated

    def clear_cache(self) -> None:
        self._cache.clear()
