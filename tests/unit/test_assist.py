"""Unit tests for the suggestion collaborator, using a fake chat client."""

from types import SimpleNamespace

import pytest
from openai import OpenAIError

from onepager.resume.assist import (
    EXTRA_SEPARATOR,
    SYSTEM_PROMPT,
    Assistant,
    AssistTarget,
    build_prompt,
)
from onepager.shared import CollaboratorFailureError


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content=None, error=None):
    completions = FakeCompletions(content, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


@pytest.mark.unit
def test_prompt_carries_identity_and_instruction(sample_document):
    prompt = build_prompt(sample_document, AssistTarget.SUMMARY)

    assert prompt.startswith("Candidate: Ada  Lovelace\nTarget role: Senior Backend Engineer\n")
    assert "2-3 sentence professional resume summary" in prompt
    assert EXTRA_SEPARATOR not in prompt


@pytest.mark.unit
def test_experience_prompt_includes_selected_role(sample_document):
    prompt = build_prompt(sample_document, "experience", index=1, extra="  Keep it short. ")

    assert "Role: Engineer\nCompany: Difference Co\nDates: 2018 - 2021" in prompt
    assert prompt.endswith(f"{EXTRA_SEPARATOR}Keep it short.")


@pytest.mark.unit
def test_experience_prompt_without_entry(sample_document):
    prompt = build_prompt(sample_document, AssistTarget.EXPERIENCE, index=9)
    assert "Role details not provided." in prompt


@pytest.mark.unit
def test_generate_sends_system_instruction_and_returns_text():
    client, completions = fake_client(content="  Polished summary.  ")
    assistant = Assistant(api_key="sk-test", model="m", client=client)

    assert assistant.generate("prompt") == "Polished summary."
    request = completions.requests[0]
    assert request["model"] == "m"
    assert request["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert request["messages"][1] == {"role": "user", "content": "prompt"}
    assert request["temperature"] == 0.4


@pytest.mark.unit
def test_missing_key_is_a_collaborator_failure():
    with pytest.raises(CollaboratorFailureError, match="missing API key"):
        Assistant(api_key="").generate("prompt")


@pytest.mark.unit
def test_api_error_is_a_collaborator_failure():
    client, _ = fake_client(error=OpenAIError("rate limited"))
    with pytest.raises(CollaboratorFailureError, match="rate limited"):
        Assistant(client=client).generate("prompt")


@pytest.mark.unit
def test_empty_response_is_a_collaborator_failure():
    client, _ = fake_client(content="   ")
    with pytest.raises(CollaboratorFailureError, match="empty response"):
        Assistant(client=client).generate("prompt")


@pytest.mark.unit
def test_suggest_does_not_touch_document(sample_document):
    before = sample_document.model_dump()
    client, _ = fake_client(content="Go, Rust")

    assert Assistant(client=client).suggest(sample_document, "skills") == "Go, Rust"
    assert sample_document.model_dump() == before
