# =============================================================================
# omi/config.py  —  Process-wide Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Builds the one OmiConfig value the server runs with.  It is read from the
#   environment ONCE at startup (after load_dotenv() has merged any .env file)
#   and then handed explicitly to the façade.  Nothing reads os.environ after
#   that point.
#
# ENVIRONMENT VARIABLES:
#   OMI_API_KEY      (or API_KEY)  : bearer token, required
#   OMI_APP_ID       (or APP_ID)   : integration app id, required
#   OMI_API_BASE_URL               : defaults to https://api.omi.me
#   OMI_HTTP_TIMEOUT               : httpx timeout in seconds, default 30
#
#   API_KEY / APP_ID are accepted as fallbacks so existing deployments keep
#   working.
#
# FAIL FAST:
#   A missing key or app id raises ConfigError here, at startup, so the
#   server never comes up half-configured.
# =============================================================================

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from omi.errors import ConfigError

DEFAULT_BASE_URL = "https://api.omi.me"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class OmiConfig:
    """Credentials and connection settings for the Omi integrations API."""

    api_key: str = field(repr=False)
    app_id: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        missing = [
            name for name in ("api_key", "app_id")
            if not getattr(self, name) or not getattr(self, name).strip()
        ]
        if missing:
            raise ConfigError(
                f"Missing required Omi configuration: {', '.join(missing)}. "
                "Set OMI_API_KEY and OMI_APP_ID (or API_KEY and APP_ID)."
            )
        if self.timeout <= 0:
            raise ConfigError(f"HTTP timeout must be positive, got {self.timeout}")
        # Normalise once so every request path joins cleanly.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "OmiConfig":
        """Build the config from environment variables.

        Args:
            environ: Mapping to read from.  Defaults to ``os.environ``.

        Raises:
            ConfigError: If the API key or app id is missing, or the timeout
                is not a positive number.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get("OMI_HTTP_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout.strip() else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ConfigError(f"OMI_HTTP_TIMEOUT must be a number, got {raw_timeout!r}") from None

        return cls(
            api_key=env.get("OMI_API_KEY") or env.get("API_KEY", ""),
            app_id=env.get("OMI_APP_ID") or env.get("APP_ID", ""),
            base_url=env.get("OMI_API_BASE_URL") or DEFAULT_BASE_URL,
            timeout=timeout,
        )
