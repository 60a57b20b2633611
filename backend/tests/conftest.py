import os

import pytest

# backend.main refuses to import without a Gemini key.
os.environ.setdefault("GEMINI_API_KEY", "test-key")


class FakeGateway:
    def __init__(self, text: str = "[]", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[tuple[str, float]] = []

    def generate(self, prompt: str, temperature: float) -> str:
        self.calls.append((prompt, temperature))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def make_gateway():
    return FakeGateway
