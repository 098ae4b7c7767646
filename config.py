import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# --- Fixed trigger settings ---
# The trigger phrase must match the message text exactly (no case folding).
TRIGGER_PHRASE = "A wild BUTTON appears!"
BUTTON_SELECTOR = '[data-qa-action-id="wild_button"]'

# --- Defaults ---
DEFAULT_DEBUG_URL = "http://localhost:9222/json/version"
DEFAULT_SLACK_CLIENT_URL = "https://app.slack.com/client/"
DEFAULT_SCREENSHOT_PATH = "failedbuttonclick.png"
PRODUCTION_MODE = "prod"


class ConfigError(ValueError):
    """Raised when the service configuration cannot be loaded."""


@dataclass(frozen=True)
class Settings:
    """Service configuration, built once at start-up and passed to the app."""

    app_mode: str = ""
    slack_signing_secret: str = ""
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    log_to_file: bool = False
    debug_endpoint_url: str = DEFAULT_DEBUG_URL
    slack_client_url: str = DEFAULT_SLACK_CLIENT_URL
    trigger_phrase: str = TRIGGER_PHRASE
    button_selector: str = BUTTON_SELECTOR
    click_timeout_seconds: float = 15
    fallback_delay_seconds: float = 5
    screenshot_path: str = DEFAULT_SCREENSHOT_PATH
    discovery_timeout_seconds: float = 5

    @property
    def production(self) -> bool:
        return self.app_mode == PRODUCTION_MODE


def _number(env, key: str, default, cast):
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}.")


def settings_from_env(env) -> Settings:
    """Builds Settings from a mapping of environment variables."""
    settings = Settings(
        app_mode=env.get("APP_MODE", ""),
        slack_signing_secret=env.get("SLACK_SIGNING_SECRET", ""),
        host=env.get("HOST", "0.0.0.0"),
        port=_number(env, "PORT", 8080, int),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        log_to_file=env.get("LOG_TO_FILE", "False").lower() == "true",
        debug_endpoint_url=env.get("CHROME_DEBUG_URL", DEFAULT_DEBUG_URL),
        slack_client_url=env.get("SLACK_CLIENT_URL", DEFAULT_SLACK_CLIENT_URL),
        click_timeout_seconds=_number(env, "CLICK_TIMEOUT_SECONDS", 15, float),
        fallback_delay_seconds=_number(env, "FALLBACK_DELAY_SECONDS", 5, float),
        screenshot_path=env.get("SCREENSHOT_PATH", DEFAULT_SCREENSHOT_PATH),
        discovery_timeout_seconds=_number(env, "DISCOVERY_TIMEOUT_SECONDS", 5, float),
    )
    validate_settings(settings)
    return settings


# --- Basic Validation ---
def validate_settings(settings: Settings):
    if settings.production and not settings.slack_signing_secret:
        raise ConfigError("SLACK_SIGNING_SECRET not set in environment variables or .env file.")
    if settings.click_timeout_seconds <= 0:
        raise ConfigError("CLICK_TIMEOUT_SECONDS must be positive.")
    if settings.fallback_delay_seconds < 0:
        raise ConfigError("FALLBACK_DELAY_SECONDS must not be negative.")


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """Loads the .env file into the environment and returns the Settings.

    A missing .env file is treated as a start-up error. Pass env_file=None to
    build the settings from the process environment alone.
    """
    if env_file is not None:
        if not os.path.isfile(env_file):
            raise ConfigError(f"Error loading {env_file} file")
        load_dotenv(dotenv_path=env_file)
    return settings_from_env(os.environ)
