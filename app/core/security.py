import re
import time

from fastapi import Request, HTTPException
from slack_sdk.signature import SignatureVerifier
import logging # Import logging

# Get a logger instance for this module
logger = logging.getLogger(__name__)

TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"
SIGNATURE_HEADER = "X-Slack-Signature"
# Slack rejects requests older than five minutes.
MAX_REQUEST_AGE_SECONDS = 60 * 5
SIGNATURE_PATTERN = re.compile(r"^v0=[0-9a-fA-F]+$")


async def read_body(request: Request) -> bytes:
    """Reads the raw request body; an unreadable body is a bad request."""
    try:
        return await request.body()
    except Exception as e:
        logger.warning(f"Could not read request body: {e}")
        raise HTTPException(status_code=400, detail="Could not read body")


async def verify_slack_request(request: Request, settings) -> bytes:
    """Verifies the authenticity of incoming Slack requests and returns the raw body.

    Verification only runs in production mode; otherwise the body is returned as-is.
    """
    body_bytes = await read_body(request)

    if not settings.production:
        return body_bytes

    timestamp = request.headers.get(TIMESTAMP_HEADER)
    req_signature = request.headers.get(SIGNATURE_HEADER)
    client_host = request.client.host if request.client else "unknown"

    if not settings.slack_signing_secret or not timestamp or not req_signature or not timestamp.isdigit():
        logger.warning(f"Bad or missing Slack signing headers from {client_host}")
        raise HTTPException(status_code=400, detail="Bad/missing signing secret")

    if abs(time.time() - int(timestamp)) > MAX_REQUEST_AGE_SECONDS or not SIGNATURE_PATTERN.match(req_signature):
        logger.warning(f"Stale or malformed Slack signing headers from {client_host}")
        raise HTTPException(status_code=400, detail="Bad/missing signing secret")

    try:
        body = body_bytes.decode('utf-8')
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=500, detail=f"Invalid body for signing secret: {e}")

    signature_verifier = SignatureVerifier(settings.slack_signing_secret)
    if not signature_verifier.is_valid(body, timestamp, req_signature):
        logger.warning(f"Invalid Slack request signature detected from {client_host}")
        raise HTTPException(status_code=401, detail="Invalid signing secret")

    logger.debug(f"Slack request signature verified from {client_host}")
    return body_bytes
