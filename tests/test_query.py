# tests/test_query.py

import pytest

from repoask.errors import ComposeError, FileReadFailure
from repoask.query import SYSTEM_PROMPT, build_chat_payload, compose


def test_compose_without_files_keeps_the_tree():
    query = compose("why?", "a.txt\n", [])
    assert query == "why?\n\n### File Tree:\na.txt\n\n\n### File Contents:\n"
    assert "```" not in query


def test_compose_embeds_included_files_in_order(tmp_path):
    first = tmp_path / "first.py"
    second = tmp_path / "second.py"
    first.write_text("print(1)", encoding="utf-8")
    second.write_text("print(2)\n", encoding="utf-8")

    query = compose("review", "tree", [str(second), str(first)])

    contents = query.split("### File Contents:\n", 1)[1]
    assert contents == (
        f"```\n// {second}\nprint(2)\n\n```\n"
        f"```\n// {first}\nprint(1)\n```\n"
    )


def test_missing_file_aborts_compose(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileReadFailure) as excinfo:
        compose("prompt", "tree", ["x.txt"])
    assert excinfo.value.path == "x.txt"
    assert isinstance(excinfo.value, ComposeError)


def test_undecodable_file_is_a_read_failure(tmp_path):
    blob = tmp_path / "blob.bin"
    blob.write_bytes(b"\xff\xfe\x00\x80")
    with pytest.raises(FileReadFailure):
        compose("prompt", "tree", [str(blob)])


def test_chat_payload_has_system_and_user_turns():
    payload = build_chat_payload("hi, how are you doing?", "gpt-test")
    assert payload["model"] == "gpt-test"
    assert payload["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "hi, how are you doing?"},
    ]
