import uuid
from dataclasses import dataclass

from chatgpt_share_api.infrastructure.platform_manager import get_parameters

# Constants that don't change
PARAMETER_BASE_PATH = "/apps/prod/chatgpt-share/"
FETCH_ROUTE = "/api/fetch-chatgpt"
SHARE_URL_MARKERS = ("chatgpt.com/share/", "chat.openai.com/share/")

LAUNCH_PROFILES = ("full", "serverless")
RESPONSE_MODES = ("extract", "html")
# Names accepted by both logging and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

SETTING_NAMES = [
    "host",
    "port",
    "log_level",
    "launch_profile",
    "response_mode",
    "chromium_executable_path",
    "headless",
    "user_agent",
    "navigation_timeout_ms",
    "selector_timeout_ms",
    "scroll_settle_ms",
    "final_settle_ms",
    "empty_result_is_error",
]


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return str(uuid.uuid4())


@dataclass
class ShareAPISettings:
    """Share API configuration settings loaded from the environment or parameter store."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Browser settings
    launch_profile: str = "full"
    response_mode: str = "extract"
    chromium_executable_path: str | None = None
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    # Page readiness timings
    navigation_timeout_ms: int = 90_000
    selector_timeout_ms: int = 20_000
    scroll_settle_ms: int = 1_000
    final_settle_ms: int = 5_000

    # Zero extracted messages is reported as success unless this is set
    empty_result_is_error: bool = False


def _parse_int(name: str, value: str | None, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Configuration value is invalid: {name.upper()}={value!r}") from e


def _parse_bool(name: str, value: str | None, default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Configuration value is invalid: {name.upper()}={value!r}")


class Config:
    """Singleton configuration manager for the share API."""

    _instance = None
    _settings = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_settings(self) -> ShareAPISettings:
        """Get settings, loading them if not already cached."""
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def reset(self) -> None:
        """Drop the cached settings so the next call reloads them."""
        self._settings = None

    def _load_settings(self) -> ShareAPISettings:
        """Load settings from the platform parameter source, falling back to defaults."""
        parameters = get_parameters(SETTING_NAMES, PARAMETER_BASE_PATH)
        defaults = ShareAPISettings()

        settings = ShareAPISettings(
            host=parameters.get("host") or defaults.host,
            port=_parse_int("port", parameters.get("port"), defaults.port),
            log_level=(parameters.get("log_level") or defaults.log_level).upper(),
            launch_profile=(parameters.get("launch_profile") or defaults.launch_profile).lower(),
            response_mode=(parameters.get("response_mode") or defaults.response_mode).lower(),
            chromium_executable_path=parameters.get("chromium_executable_path") or None,
            headless=_parse_bool("headless", parameters.get("headless"), defaults.headless),
            user_agent=parameters.get("user_agent") or defaults.user_agent,
            navigation_timeout_ms=_parse_int(
                "navigation_timeout_ms",
                parameters.get("navigation_timeout_ms"),
                defaults.navigation_timeout_ms,
            ),
            selector_timeout_ms=_parse_int(
                "selector_timeout_ms",
                parameters.get("selector_timeout_ms"),
                defaults.selector_timeout_ms,
            ),
            scroll_settle_ms=_parse_int(
                "scroll_settle_ms", parameters.get("scroll_settle_ms"), defaults.scroll_settle_ms
            ),
            final_settle_ms=_parse_int(
                "final_settle_ms", parameters.get("final_settle_ms"), defaults.final_settle_ms
            ),
            empty_result_is_error=_parse_bool(
                "empty_result_is_error",
                parameters.get("empty_result_is_error"),
                defaults.empty_result_is_error,
            ),
        )

        self._validate_settings(settings)

        return settings

    def _validate_settings(self, settings: ShareAPISettings) -> None:
        """Validate that all settings have usable values."""
        if not 0 < settings.port < 65536:
            raise ValueError(f"Configuration value is invalid: PORT={settings.port}")

        if settings.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Configuration value is invalid: LOG_LEVEL={settings.log_level!r} "
                f"(expected one of {', '.join(LOG_LEVELS)})"
            )

        if settings.launch_profile not in LAUNCH_PROFILES:
            raise ValueError(
                f"Configuration value is invalid: LAUNCH_PROFILE={settings.launch_profile!r} "
                f"(expected one of {', '.join(LAUNCH_PROFILES)})"
            )

        if settings.response_mode not in RESPONSE_MODES:
            raise ValueError(
                f"Configuration value is invalid: RESPONSE_MODE={settings.response_mode!r} "
                f"(expected one of {', '.join(RESPONSE_MODES)})"
            )

        for field in (
            "navigation_timeout_ms",
            "selector_timeout_ms",
            "scroll_settle_ms",
            "final_settle_ms",
        ):
            if getattr(settings, field) < 0:
                raise ValueError(f"Configuration value is invalid: {field.upper()}")


# Create singleton instance
config = Config()


# Convenience functions
def get_settings() -> ShareAPISettings:
    """Get share API settings from the singleton config."""
    return config.get_settings()
