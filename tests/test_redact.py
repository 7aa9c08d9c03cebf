from __future__ import annotations

from chatsync._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "personOneInput": "hello",
        "ELEVENLABS_API_KEY": "sk-123",
        "Authorization": "Bearer abc",
        "nested": {"apiKey": "deadbeef"},
    }

    redacted = redact_for_log(payload)
    assert redacted["personOneInput"] == "hello"
    assert redacted["ELEVENLABS_API_KEY"] == "<redacted>"
    assert redacted["Authorization"] == "<redacted>"
    assert redacted["nested"]["apiKey"] == "<redacted>"


def test_redact_for_log_clips_long_strings() -> None:
    redacted = redact_for_log({"status": "x" * 600}, max_string=10)
    assert redacted["status"] == "x" * 10 + "…<+590 chars>"


def test_redact_for_log_clips_utterances_shorter_than_other_strings() -> None:
    speech = "the moon landing " * 10
    payload = {"personTwoInput": speech, "status": speech, "message": speech}

    redacted = redact_for_log(payload, max_utterance=20)

    assert redacted["personTwoInput"] == speech[:20] + f"…<+{len(speech) - 20} chars>"
    assert redacted["message"] == redacted["personTwoInput"]
    assert redacted["status"] == speech


def test_redact_for_log_walks_transcript_lists() -> None:
    utterance = "a" * 100
    redacted = redact_for_log([{"Speaker": "Speaker A", "Text": utterance, "token": "t"}], max_utterance=5)
    assert redacted == [{"Speaker": "Speaker A", "Text": "aaaaa…<+95 chars>", "token": "<redacted>"}]


def test_redact_for_log_leaves_scalars_and_describes_bytes() -> None:
    assert redact_for_log({"truthVerification": None, "ok": True, "latency": 1.5}) == {
        "truthVerification": None,
        "ok": True,
        "latency": 1.5,
    }
    assert redact_for_log(b"\xff\xfe") == "<bytes:2b>"
