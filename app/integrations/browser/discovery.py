# Resolves the WebSocket debugger URL of the local Chrome remote-debugging endpoint

import os
import requests
import logging # Import logging

# Get a logger instance for this module
logger = logging.getLogger(__name__)

WS_URL_FIELD = "webSocketDebuggerUrl"


class BrowserDiscoveryError(RuntimeError):
    """Raised when the remote browser endpoint cannot be resolved."""


class DebugEndpointResolver:
    """Queries Chrome's /json/version endpoint for the browser WebSocket URL."""

    def __init__(self, version_url: str, timeout: float = 5):
        self.version_url = version_url
        self.timeout = timeout

    def resolve(self) -> str:
        try:
            response = requests.get(self.version_url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise BrowserDiscoveryError(f"Could not query {self.version_url}: {e}")
        except ValueError as e:
            raise BrowserDiscoveryError(f"Invalid JSON from {self.version_url}: {e}")

        ws_url = data.get(WS_URL_FIELD) if isinstance(data, dict) else None
        if not isinstance(ws_url, str) or not ws_url:
            raise BrowserDiscoveryError(f"{WS_URL_FIELD} missing from {self.version_url} response")

        logger.debug(f"Resolved browser endpoint {ws_url}")
        return ws_url


def terminate_process(error: Exception):
    """Default handler for discovery failures: the service cannot work without a browser."""
    logger.critical(f"Remote browser discovery failed, shutting down: {error}")
    for handler in logging.getLogger().handlers:
        handler.flush()
    os._exit(1)
