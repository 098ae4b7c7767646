from fastapi import APIRouter, Request, HTTPException
import logging # Import logging

# Get a logger instance for this module
logger = logging.getLogger(__name__)

# Import security helper
from app.core.security import verify_slack_request
from app.models.slack_events import EventParseError, parse_envelope

router = APIRouter()


@router.post("/slack-events")
async def slack_events_endpoint(request: Request):
    """Endpoint for Slack event subscriptions (URL verification and message callbacks)."""
    settings = request.app.state.settings
    # Verify the request signature (production mode only)
    body_bytes = await verify_slack_request(request, settings)

    logger.info(f"Got slack events body {body_bytes.decode('utf-8', errors='replace')}")

    try:
        envelope = parse_envelope(body_bytes)
    except EventParseError as e:
        logger.warning(f"Rejected Slack event body: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return await request.app.state.dispatcher.dispatch(envelope)
