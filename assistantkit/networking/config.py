"""Client configuration for the transport layer.

Architectural role:
    Centralizes endpoint, header and credential settings consumed by
    `assistantkit.networking.transport.Networking` and the client facade.

Configuration flow:
    - `ClientSettings.from_env()` reads the process environment (after
      `.env` loading) and resolves the API key through `load_key`.
    - Callers that already hold a key build `ClientSettings(...)` directly;
      the core never prompts for credentials.

Determinism:
    Deterministic for a fixed process environment and key file. Module-level
    defaults are resolved at import time.

Failure behavior:
    Missing key material raises `ClientConfigError` from `from_env()`.
    `load_key` itself returns `None` rather than raising.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from assistantkit.core.errors import ClientConfigError

load_dotenv()

DEFAULT_BASE_URL = "https://api.openai.com/v1/"

# Value of the beta-feature marker header sent on every call.
ASSISTANTS_BETA = "assistants=v1"

DEFAULT_TIMEOUT = 120.0

API_KEY_ENV = "OPENAI_API_KEY"
ORGANIZATION_ENV = "OPENAI_ORGANIZATION"
BASE_URL_ENV = "OPENAI_BASE_URL"
TIMEOUT_ENV = "OPENAI_TIMEOUT"
KEY_FILE_ENV = "OPENAI_KEY_FILE"

DEFAULT_KEY_FILE = "config/openai.key"


def load_key(path=None):
    """Load the API key from the environment or a key file.

    Resolution order:
        1. `OPENAI_API_KEY` environment variable.
        2. Raw file contents at `path` (default: `OPENAI_KEY_FILE`, then
           `config/openai.key`).

    Args:
        path: Optional key file path overriding the environment default.

    Returns:
        Key string or `None` when not available.

    Edge cases:
        - Missing file returns `None`.
        - Whitespace-only file returns `None`.
    """
    env_value = os.getenv(API_KEY_ENV)
    if env_value:
        return env_value.strip()

    path = path or os.getenv(KEY_FILE_ENV) or DEFAULT_KEY_FILE
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        key = f.read().strip()
    return key or None


@dataclass(frozen=True)
class ClientSettings:
    """Explicit configuration handed to `Networking` and `OpenAIClient`."""

    api_key: str
    organization_id: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    beta: str = ASSISTANTS_BETA

    def __post_init__(self):
        if not self.api_key:
            raise ClientConfigError("API key must not be empty")
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")

    def __repr__(self):
        # Keep the key out of logs and tracebacks.
        return (
            f"ClientSettings(api_key='***', organization_id={self.organization_id!r}, "
            f"base_url={self.base_url!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_env(cls, organization_id=None, key_file=None):
        """Build settings from environment variables and key files.

        Args:
            organization_id: Overrides `OPENAI_ORGANIZATION` when given.
            key_file: Key file consulted when `OPENAI_API_KEY` is unset.

        Raises:
            ClientConfigError: No key found, or `OPENAI_TIMEOUT` is not a number.
        """
        api_key = load_key(key_file)
        if not api_key:
            raise ClientConfigError(
                f"{API_KEY_ENV} is not set and no key file was found"
            )

        raw_timeout = os.getenv(TIMEOUT_ENV)
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ClientConfigError(f"{TIMEOUT_ENV} must be a number: {raw_timeout!r}") from e

        return cls(
            api_key=api_key,
            organization_id=organization_id or os.getenv(ORGANIZATION_ENV) or None,
            base_url=os.getenv(BASE_URL_ENV) or DEFAULT_BASE_URL,
            timeout=timeout,
        )
