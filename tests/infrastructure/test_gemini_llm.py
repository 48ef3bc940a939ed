from types import SimpleNamespace

import pytest

from bolly_beat.domain.models import SongIdentification
from bolly_beat.exceptions import LLMServiceError
from bolly_beat.infrastructure.gemini_llm import GeminiLLMService


class FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def _service(models: FakeModels) -> GeminiLLMService:
    return GeminiLLMService(SimpleNamespace(models=models), "gemini-2.5-flash", "system prompt")


def test_parses_structured_response(identified_song):
    models = FakeModels(text=identified_song.model_dump_json())

    result = _service(models).identify_song('The user is looking for the song: "Mera Joota"')

    assert result == identified_song
    call = models.calls[0]
    assert call["model"] == "gemini-2.5-flash"
    assert call["config"]["response_schema"] is SongIdentification
    assert call["config"]["system_instruction"] == "system prompt"


def test_empty_response_raises():
    with pytest.raises(LLMServiceError):
        _service(FakeModels(text="")).identify_song("anything")


def test_api_failure_is_wrapped():
    error = RuntimeError("quota exceeded")

    with pytest.raises(LLMServiceError) as exc_info:
        _service(FakeModels(error=error)).identify_song("anything")

    assert exc_info.value.cause is error
