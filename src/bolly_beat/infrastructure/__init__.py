"""Infrastructure layer: adapters for microphone, speech, recognition, search and LLM services."""
