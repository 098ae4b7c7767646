# Slack Events API payload shapes and parsing

import json
from dataclasses import dataclass
from typing import Optional, Union

URL_VERIFICATION = "url_verification"
EVENT_CALLBACK = "event_callback"
MESSAGE = "message"


class EventParseError(ValueError):
    """Raised when a Slack events payload cannot be parsed."""


# --- Inner events ---

@dataclass(frozen=True)
class MessageEvent:
    text: str
    channel: str
    user: Optional[str] = None
    subtype: Optional[str] = None


@dataclass(frozen=True)
class UnsupportedEvent:
    type: str


InnerEvent = Union[MessageEvent, UnsupportedEvent]


# --- Envelopes ---

@dataclass(frozen=True)
class UrlVerification:
    """Handshake sent by Slack to prove endpoint ownership."""
    challenge: str
    token: Optional[str] = None


@dataclass(frozen=True)
class EventCallback:
    """Live event notification wrapping an inner event."""
    team_id: str
    event: InnerEvent
    event_id: Optional[str] = None


@dataclass(frozen=True)
class UnknownEnvelope:
    type: str


Envelope = Union[UrlVerification, EventCallback, UnknownEnvelope]


def _string(data: dict, key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def parse_inner_event(data: dict) -> InnerEvent:
    event_type = _string(data, "type")
    if event_type == MESSAGE:
        return MessageEvent(
            text=_string(data, "text"),
            channel=_string(data, "channel"),
            user=data.get("user"),
            subtype=data.get("subtype"),
        )
    return UnsupportedEvent(type=event_type)


def parse_envelope(body) -> Envelope:
    """Parses a raw Slack events body (bytes or str) into an envelope."""
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise EventParseError(f"Could not unmarshal JSON body {e}")

    if not isinstance(data, dict):
        raise EventParseError("Slack event body must be a JSON object")

    envelope_type = _string(data, "type")

    if envelope_type == URL_VERIFICATION:
        # An absent challenge echoes as empty text; a non-string one is malformed.
        challenge = data.get("challenge")
        if challenge is None:
            challenge = ""
        if not isinstance(challenge, str):
            raise EventParseError("url_verification challenge must be a string")
        return UrlVerification(challenge=challenge, token=data.get("token"))

    if envelope_type == EVENT_CALLBACK:
        inner = data.get("event")
        if not isinstance(inner, dict):
            raise EventParseError("event_callback payload has no inner event")
        return EventCallback(
            team_id=_string(data, "team_id"),
            event=parse_inner_event(inner),
            event_id=data.get("event_id"),
        )

    return UnknownEnvelope(type=envelope_type)
