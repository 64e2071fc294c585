import pytest
import httpx

from app.main import app
from app.services.provider_router import ProviderRouter


class FakeOpenAIClient:
    provider = "openai"

    def __init__(self):
        self.image_response: dict = {"data": [{"url": "https://images.test/panel.png"}]}
        self.text_response: str | None = '{"suggestions": [], "overall_confidence": 0.8}'
        self.image_calls: list[dict] = []
        self.text_calls: list[dict] = []

    def generate_image(self, prompt, *, model, size, quality, style=None):
        self.image_calls.append(
            {"prompt": prompt, "model": model, "size": size, "quality": quality, "style": style}
        )
        return self.image_response

    def complete_json(self, system_prompt, user_prompt, *, model, temperature):
        self.text_calls.append(
            {"system_prompt": system_prompt, "user_prompt": user_prompt, "model": model, "temperature": temperature}
        )
        return self.text_response


class FakeGeminiClient:
    provider = "gemini"

    def __init__(self):
        self.text_response = '{"suggestions": [], "overall_confidence": 0.9}'
        self.calls: list[dict] = []

    def generate_text(self, prompt, model=None):
        self.calls.append({"prompt": prompt, "model": model})
        return self.text_response


@pytest.fixture()
def fake_openai():
    return FakeOpenAIClient()


@pytest.fixture()
def fake_gemini():
    return FakeGeminiClient()


@pytest.fixture()
def providers(fake_openai, fake_gemini):
    return ProviderRouter(openai=fake_openai, gemini=fake_gemini)


@pytest.fixture()
async def client(providers):
    async with app.router.lifespan_context(app):
        app.state.provider_router = providers
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
