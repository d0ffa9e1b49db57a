import json

import httpx
import pytest

from orgscribe.client import openai_client


class FakeOpenAI:
    """In-process stand-in for the transcription and chat completion endpoints."""

    def __init__(self):
        self.requests = []
        self.transcription = httpx.Response(200, json={"text": "hello world"})
        self.completion = httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": "#+title: Test"}}]}
        )

    def handler(self, request):
        request.read()
        self.requests.append(request)
        if request.url.path.endswith("/audio/transcriptions"):
            return self.transcription
        if request.url.path.endswith("/chat/completions"):
            return self.completion
        return httpx.Response(404, json={"error": {"message": "unknown endpoint"}})

    def transport(self):
        return httpx.MockTransport(self.handler)

    def paths(self):
        return [request.url.path for request in self.requests]

    def completion_body(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def client(fake_openai):
    with openai_client("sk-test", http_client=httpx.Client(transport=fake_openai.transport())) as api:
        yield api
