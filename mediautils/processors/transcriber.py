"""Speech-to-text transcription through the OpenAI Whisper API."""

from pathlib import Path

from openai import OpenAI

from mediautils.config.settings import (
    OPENAI_API_KEY, WHISPER_MODEL, OPENAI_TIMEOUT, OPENAI_MAX_RETRIES
)
from mediautils.utils.errors import ConfigurationError, InvalidArgumentError

RESPONSE_FORMATS = ("json", "text", "srt", "verbose_json", "vtt")


class WhisperTranscriber:
    """Class for transcribing audio files with Whisper."""

    def __init__(self, api_key=None, model=WHISPER_MODEL):
        """Initialize the transcriber.

        Args:
            api_key: OpenAI API key, defaults to OPENAI_API_KEY
            model: Transcription model name
        """
        self.api_key = api_key or OPENAI_API_KEY
        self.model = model
        self._client = None

    @property
    def client(self):
        """OpenAI client, created on first use."""
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError("OPENAI_API_KEY is not set. Set it in the environment or pass api_key.")
            self._client = OpenAI(
                api_key=self.api_key,
                timeout=OPENAI_TIMEOUT,
                max_retries=OPENAI_MAX_RETRIES
            )
        return self._client

    def transcribe(self, path, response_format="json"):
        """Transcribe an audio file.

        Args:
            path: Path to the audio file
            response_format: One of json, text, srt, verbose_json or vtt

        Returns:
            The transcript text for ``json``, otherwise the API result as returned
        """
        if response_format not in RESPONSE_FORMATS:
            raise InvalidArgumentError(f"Unsupported response format: {response_format}")

        path = Path(path)
        print(f"[INFO] Transcribing {path.name} with {self.model} ({response_format})")

        with path.open('rb') as audio_file:
            transcription = self.client.audio.transcriptions.create(
                file=audio_file,
                model=self.model,
                response_format=response_format
            )

        if response_format == "json":
            return transcription.text
        return transcription


def transcribe_via_whisper(path, api_key, response_format="json"):
    """Transcribe an audio file with a one-off transcriber.

    Args:
        path: Path to the audio file
        api_key: OpenAI API key
        response_format: Desired output format

    Returns:
        Transcript as returned by WhisperTranscriber.transcribe
    """
    return WhisperTranscriber(api_key=api_key).transcribe(path, response_format)
