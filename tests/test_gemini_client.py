from types import SimpleNamespace

import pytest

import gemini_client
from gemini_client import GeminiClient, classify_error, UNAVAILABLE_MESSAGE
from schemas import Profile
from ai_context import build_profile_prompt, build_chat_history


class FakeModel:
    def __init__(self, name, system_instruction=None, error=None):
        self.name = name
        self.system_instruction = system_instruction
        self.error = error
        self.prompts = []
        self.history = None

    def generate_content(self, prompt):
        if self.error:
            raise self.error
        self.prompts.append(prompt)
        return SimpleNamespace(text="  generated  ")

    def start_chat(self, history):
        self.history = history
        return self

    def send_message(self, message):
        return self.generate_content(message)


@pytest.fixture
def fake_genai(monkeypatch):
    state = {"models": [], "error": None, "api_key": None}

    def configure(api_key):
        state["api_key"] = api_key

    def generative_model(name, system_instruction=None):
        model = FakeModel(name, system_instruction, state["error"])
        state["models"].append(model)
        return model

    monkeypatch.setattr(
        gemini_client, "genai",
        SimpleNamespace(configure=configure, GenerativeModel=generative_model),
    )
    return state


@pytest.mark.parametrize("key,available", [
    ("", False),
    ("YOUR_GEMINI_API_KEY", False),
    ("real-key", True),
])
def test_is_available(key, available):
    assert GeminiClient(api_key=key).is_available() is available


def test_unavailable_client_does_not_call_gemini(fake_genai):
    client = GeminiClient(api_key="")

    reply = client.generate_chat_reply("hi", [])

    assert reply.text == UNAVAILABLE_MESSAGE
    assert reply.error == "API_KEY_MISSING"
    assert client.analyze_resume("cv").error == "API_KEY_MISSING"
    assert fake_genai["models"] == []


def test_chat_reply_maps_history(fake_genai):
    client = GeminiClient(api_key="real-key", model_name="gemini-test")

    reply = client.generate_chat_reply("And then?", [
        {"role": "user", "content": "Hello"},
        {"role": "assistant", "content": "Hi, how can I help?"},
    ])

    model = fake_genai["models"][0]
    assert reply.text == "generated"
    assert reply.error is None
    assert fake_genai["api_key"] == "real-key"
    assert model.name == "gemini-test"
    assert model.system_instruction.startswith("You are CareerGPT")
    assert [h["role"] for h in model.history] == ["user", "model"]
    assert model.prompts == ["And then?"]


def test_career_advice_includes_profile(fake_genai):
    client = GeminiClient(api_key="real-key")

    client.generate_career_advice("Should I switch?", Profile(skills=["Python"]))

    prompt = fake_genai["models"][0].prompts[0]
    assert "- Skills: Python" in prompt
    assert "- Interests: Not specified" in prompt
    assert prompt.endswith("Question: Should I switch?")


@pytest.mark.parametrize("message,code", [
    ("API_KEY_INVALID: bad key", "API_KEY_INVALID"),
    ("429 Quota exceeded", "RATE_LIMITED"),
    ("rate limit hit", "RATE_LIMITED"),
    ("socket closed", "UNKNOWN_ERROR"),
])
def test_classify_error(message, code):
    assert classify_error(Exception(message), "fallback").error == code


def test_chat_errors_are_returned_not_raised(fake_genai):
    fake_genai["error"] = RuntimeError("quota exhausted")

    reply = GeminiClient(api_key="real-key").generate_chat_reply("hi", [])

    assert reply.error == "RATE_LIMITED"


def test_resume_errors_are_returned_not_raised(fake_genai):
    fake_genai["error"] = RuntimeError("boom")

    reply = GeminiClient(api_key="real-key").analyze_resume("cv text")

    assert reply.error == "ANALYSIS_FAILED"


def test_build_profile_prompt_without_profile():
    assert build_profile_prompt("Just a question") == "Just a question"


def test_build_chat_history():
    assert build_chat_history([{"role": "assistant", "content": "Hi"}]) == [
        {"role": "model", "parts": ["Hi"]},
    ]
