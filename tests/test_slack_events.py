from __future__ import annotations

import json

import pytest

from app.models.slack_events import (
    EventCallback,
    EventParseError,
    MessageEvent,
    UnknownEnvelope,
    UnsupportedEvent,
    UrlVerification,
    parse_envelope,
)


def test_parse_url_verification() -> None:
    envelope = parse_envelope(b'{"token": "tok", "challenge": "abc123", "type": "url_verification"}')

    assert envelope == UrlVerification(challenge="abc123", token="tok")


def test_parse_message_callback() -> None:
    body = json.dumps(
        {
            "type": "event_callback",
            "team_id": "T1",
            "event_id": "Ev9",
            "event": {
                "type": "message",
                "text": "hi",
                "channel": "C1",
                "user": "U1",
                "subtype": "bot_message",
            },
        }
    )

    envelope = parse_envelope(body)

    assert envelope == EventCallback(
        team_id="T1",
        event=MessageEvent(text="hi", channel="C1", user="U1", subtype="bot_message"),
        event_id="Ev9",
    )


def test_parse_other_inner_event() -> None:
    envelope = parse_envelope(
        json.dumps({"type": "event_callback", "team_id": "T1", "event": {"type": "reaction_added"}})
    )

    assert isinstance(envelope, EventCallback)
    assert envelope.event == UnsupportedEvent(type="reaction_added")


def test_parse_unknown_envelope() -> None:
    assert parse_envelope('{"type": "app_rate_limited"}') == UnknownEnvelope(type="app_rate_limited")
    assert parse_envelope("{}") == UnknownEnvelope(type="")


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"not json",
        b"[1, 2]",
        b'{"type": "url_verification", "challenge": 7}',
        b'{"type": "event_callback", "event": "message"}',
    ],
)
def test_parse_rejects_malformed_bodies(body) -> None:
    with pytest.raises(EventParseError):
        parse_envelope(body)


def test_url_verification_without_challenge_has_empty_challenge() -> None:
    assert parse_envelope(b'{"type": "url_verification"}') == UrlVerification(challenge="")
