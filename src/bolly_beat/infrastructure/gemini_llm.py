"""Gemini LLM service implementation."""

from google import genai

from bolly_beat.domain.models import SongIdentification
from bolly_beat.exceptions import LLMServiceError
from bolly_beat.logging import setup_logging

from .interfaces import LLMService

logger = setup_logging()


class GeminiLLMService(LLMService):
    """LLM service implementation using Google Gemini."""

    def __init__(self, client: genai.Client, model_name: str, system_prompt: str):
        self._client = client
        self._model_name = model_name
        self._system_prompt = system_prompt

    def identify_song(self, request: str) -> SongIdentification:
        """
        Asks Gemini to identify an Indian film song and describe its hookstep.

        Args:
            request: The user's song name or description of what was heard.

        Returns:
            SongIdentification parsed from the JSON response.

        Raises:
            LLMServiceError: If the Gemini API call fails.
        """
        try:
            response = self._client.models.generate_content(
                model=self._model_name,
                contents=request,
                config={
                    "response_mime_type": "application/json",
                    "response_schema": SongIdentification,
                    "system_instruction": self._system_prompt,
                    "temperature": 0.3,
                },
            )
            if not response.text:
                raise LLMServiceError("Gemini returned empty response")
            identification = SongIdentification.model_validate_json(response.text)
            logger.info(
                "LLM identification completed",
                extra={
                    "identified": identification.identified,
                    "song_title": identification.song_title,
                },
            )
            return identification
        except Exception as e:
            logger.exception("Gemini API call failed")
            raise LLMServiceError(f"Gemini identification failed: {e}", cause=e) from e
