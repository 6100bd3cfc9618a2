# =============================================================================
# lattice/config.py  —  Runtime Configuration & Client Selection
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Gathers everything the server needs to know at startup into ONE immutable
#   LatticeConfig, then turns it into a client with build_client().
#
# WHERE VALUES COME FROM (later wins):
#   1. Defaults below
#   2. Environment variables (main.py loads .env first via python-dotenv)
#        LATTICE_API_TOKEN   bearer token; its presence selects LIVE mode
#        LATTICE_API_URL     API root (default https://tide.latticehq.com)
#        LATTICE_TIMEOUT     per-request timeout, seconds (default 30)
#        LATTICE_LOG_LEVEL   logging level name (default INFO)
#   3. Command-line flags (--api-key, --base-url, --log-level)
#
# MOCK vs LIVE:
#   A non-empty token means live; anything else means mock.  The choice is
#   made once, here, and never changes for the life of the process.
# =============================================================================

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from lattice.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, LatticeClient, LiveLatticeClient
from lattice.mock_client import MockLatticeClient


@dataclass(frozen=True)
class LatticeConfig:
    """Startup configuration, built once and passed down explicitly."""

    api_token: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @property
    def use_mock(self) -> bool:
        return not (self.api_token and self.api_token.strip())

    @property
    def mode(self) -> str:
        return "mock" if self.use_mock else "live"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LatticeConfig":
        """Read configuration from environment variables.

        Raises:
            ValueError: if LATTICE_TIMEOUT is not a positive number.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get("LATTICE_TIMEOUT", "").strip()
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"LATTICE_TIMEOUT must be a number, got {raw_timeout!r}") from None
            if timeout <= 0:
                raise ValueError(f"LATTICE_TIMEOUT must be positive, got {raw_timeout!r}")

        return cls(
            api_token=env.get("LATTICE_API_TOKEN") or None,
            base_url=env.get("LATTICE_API_URL") or DEFAULT_BASE_URL,
            timeout=timeout,
            log_level=(env.get("LATTICE_LOG_LEVEL") or "INFO").upper(),
        )

    def with_overrides(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> "LatticeConfig":
        """Return a copy with command-line values applied; None leaves a field alone."""
        changes = {}
        if api_key is not None:
            changes["api_token"] = api_key
        if base_url:
            changes["base_url"] = base_url
        if log_level:
            changes["log_level"] = log_level.upper()
        return replace(self, **changes)


def build_client(config: LatticeConfig) -> LatticeClient:
    """Pick the backend for this process: live when a token is set, else mock."""
    if config.use_mock:
        return MockLatticeClient()
    return LiveLatticeClient(
        api_token=config.api_token,
        base_url=config.base_url,
        timeout=config.timeout,
    )
