"""Machine translation through the DeepL API."""

import requests

from mediautils.config.settings import (
    DEEPL_API_KEY, DEEPL_API_URL, DEEPL_MAX_CHARS, REQUEST_TIMEOUT
)
from mediautils.utils.chunking import split_text_into_paragraphs
from mediautils.utils.errors import ConfigurationError, TranslationError
from mediautils.utils.retry import retry_with_backoff


class DeepLTranslator:
    """Class for translating text with DeepL."""

    def __init__(self, api_key=None, api_url=DEEPL_API_URL):
        """Initialize the translator.

        Args:
            api_key: DeepL authorization key, defaults to DEEPL_API_KEY
            api_url: Translate endpoint (free and pro plans use different hosts)
        """
        self.api_key = api_key or DEEPL_API_KEY
        self.api_url = api_url

    def _headers(self):
        if not self.api_key:
            raise ConfigurationError("DEEPL_API_KEY is not set. Set it in the environment or pass api_key.")
        return {
            'Content-Type': 'application/json',
            'Authorization': f'DeepL-Auth-Key {self.api_key}',
        }

    @retry_with_backoff
    def translate(self, text, target_lang):
        """Translate text into the target language.

        Args:
            text: The text to be translated
            target_lang: Target language code (e.g. "DE", "FR")

        Returns:
            The translated text

        Raises:
            TranslationError: If the API answers with an error or no translation
        """
        try:
            response = requests.post(
                self.api_url,
                headers=self._headers(),
                json={'text': [text], 'target_lang': target_lang},
                timeout=REQUEST_TIMEOUT
            )

            if not response.ok:
                raise TranslationError(
                    f"HTTP error! status: {response.status_code}",
                    status_code=response.status_code,
                    retry_after=response.headers.get('Retry-After')
                )

            data = response.json()
            translations = data.get('translations') or []
            if not translations:
                raise TranslationError("No translation received from the API.")

            return translations[0]['text']

        except Exception as e:
            print(f"[ERROR] Error translating text: {e}")
            raise

    def translate_long_text(self, text, target_lang, max_chars=DEEPL_MAX_CHARS):
        """Translate text that may exceed the per-request character limit.

        The text is split into paragraphs of at most ``max_chars`` characters,
        each translated separately. Empty text is returned without a request.

        Args:
            text: The text to be translated
            target_lang: Target language code
            max_chars: Maximum characters per request

        Returns:
            Translated paragraphs joined with newlines
        """
        if not text:
            return ""

        paragraphs = split_text_into_paragraphs(text, max_chars)
        print(f"[INFO] Translating {len(paragraphs)} paragraph(s) into {target_lang}")

        translated = [self.translate(paragraph, target_lang) for paragraph in paragraphs]
        return "\n".join(translated)


def translate_text_via_deepl(text, target_lang, api_key):
    """Translate text with a one-off DeepL translator.

    Args:
        text: The text to be translated
        target_lang: Target language code (e.g. "DE", "FR")
        api_key: DeepL authorization key

    Returns:
        The translated text
    """
    return DeepLTranslator(api_key=api_key).translate(text, target_lang)
