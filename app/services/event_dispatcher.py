# Routes parsed Slack envelopes to a response and, for the trigger phrase, the button clicker

from fastapi import Response
from fastapi.responses import PlainTextResponse
import logging # Import logging

# Get a logger instance for this module
logger = logging.getLogger(__name__)

from app.models.slack_events import (
    EventCallback,
    MessageEvent,
    UnknownEnvelope,
    UnsupportedEvent,
    UrlVerification,
)


def build_page_url(prefix: str, team_id: str, channel: str) -> str:
    return prefix + team_id + "/" + channel


class EventDispatcher:
    def __init__(self, settings, clicker):
        self.settings = settings
        self.clicker = clicker

    async def dispatch(self, envelope) -> Response:
        """Produces the one response for an envelope; may run the click workflow first."""
        if isinstance(envelope, UrlVerification):
            logger.info("Received Slack URL verification challenge.")
            return PlainTextResponse(envelope.challenge, status_code=200)

        if isinstance(envelope, EventCallback):
            await self._handle_callback(envelope)
            return Response(status_code=200)

        if isinstance(envelope, UnknownEnvelope):
            logger.info(f"Unknown event {envelope.type}")
            return Response(status_code=200)

        raise TypeError(f"Unhandled envelope {envelope!r}")

    async def _handle_callback(self, envelope: EventCallback):
        event = envelope.event
        if isinstance(event, UnsupportedEvent):
            logger.debug(f"Ignoring {event.type} event")
            return
        if not isinstance(event, MessageEvent):
            raise TypeError(f"Unhandled inner event {event!r}")

        if event.text != self.settings.trigger_phrase:
            return

        page_url = build_page_url(self.settings.slack_client_url, envelope.team_id, event.channel)
        logger.info(f"Trigger phrase seen in channel {event.channel}, clicking button at {page_url}")
        outcome = await self.clicker.click(page_url)
        logger.info(f"Button click workflow for {page_url} finished: {outcome.value}")
