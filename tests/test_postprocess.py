from pathlib import Path

import httpx

from orgscribe.postprocess import (
    CompletionError,
    EmacsOrgNotes,
    PostProcess,
    get_post_processor,
    run_post_process,
)


def test_parse_recognised_directive():
    assert PostProcess.parse("create_emacs_org_notes") is PostProcess.EMACS_ORG_NOTES


def test_parse_unknown_or_empty_directive_is_none():
    assert PostProcess.parse(None) is None
    assert PostProcess.parse("") is None
    assert PostProcess.parse("create_markdown_notes") is None


def test_prompt_wraps_transcript():
    prompt = EmacsOrgNotes.build_prompt("we agreed to ship on {friday}")
    assert "we agreed to ship on {friday}" in prompt
    assert "#+title:" in prompt
    assert '"Summary"' in prompt
    assert '"Notes"' in prompt
    assert "do not include any extra commentary" in prompt
    assert "brief overview of the key points, try\n" in prompt
    assert prompt.rstrip().endswith("Please format the response as a valid Emacs Org file.")


def test_completion_request_body(client, fake_openai):
    content = EmacsOrgNotes(client).request_completion("summarise this")

    assert content == "#+title: Test"
    request = fake_openai.requests[0]
    assert str(request.url) == "https://api.openai.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    body = fake_openai.completion_body()
    assert body["model"] == "gpt-4"
    assert body["messages"] == [{"role": "user", "content": "summarise this"}]
    assert body["max_tokens"] == 1500
    assert body["temperature"] == 0.7
    assert "stream" not in body


def test_empty_choices_is_an_error(client, fake_openai):
    fake_openai.completion = httpx.Response(200, json={"choices": []})
    try:
        EmacsOrgNotes(client).request_completion("prompt")
    except CompletionError as exc:
        assert "no choices" in str(exc)
    else:
        raise AssertionError("Expected CompletionError")


def test_error_status_is_an_error(client, fake_openai):
    fake_openai.completion = httpx.Response(429, json={"error": {"message": "Rate limit reached"}})
    try:
        EmacsOrgNotes(client).request_completion("prompt")
    except CompletionError as exc:
        assert "Error response from OpenAI API" in str(exc)
        assert "Rate limit reached" in str(exc)
    else:
        raise AssertionError("Expected CompletionError")


def test_get_post_processor_for_directive(client):
    assert isinstance(get_post_processor("create_emacs_org_notes", client), EmacsOrgNotes)
    assert get_post_processor("summarise", client) is None


def test_run_post_process_writes_notes(tmp_path, client, fake_openai):
    reference = tmp_path / "meeting.txt"
    reference.write_text("meeting notes")

    written = run_post_process("create_emacs_org_notes", "meeting notes", reference, client)

    assert written == tmp_path / "meeting_emacs_org_notes.org"
    assert written.read_text() == "#+title: Test"
    prompt = fake_openai.completion_body()["messages"][0]["content"]
    assert "meeting notes" in prompt


def test_other_directives_do_nothing(tmp_path, client, fake_openai):
    reference = tmp_path / "meeting.txt"
    for directive in (None, "", "CREATE_EMACS_ORG_NOTES", "something_else"):
        assert run_post_process(directive, "meeting notes", reference, client) is None
    assert fake_openai.requests == []
    assert list(tmp_path.iterdir()) == []


def test_failed_completion_leaves_no_notes_file(tmp_path, client, fake_openai):
    fake_openai.completion = httpx.Response(500, text="internal error")
    reference = tmp_path / "meeting.txt"
    try:
        run_post_process("create_emacs_org_notes", "text", reference, client)
    except CompletionError:
        pass
    else:
        raise AssertionError("Expected CompletionError")
    assert not Path(tmp_path / "meeting_emacs_org_notes.org").exists()
