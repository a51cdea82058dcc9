# =============================================================================
# core/config.py  —  Launch-time Settings
# =============================================================================
#
# Everything the entry point needs to decide HOW to serve, read once from the
# environment.  `.env` files are loaded by the entry points (python-dotenv)
# before this module is consulted, so values there behave like real
# environment variables.
#
#   MCP_TRANSPORT   "http" → streamable HTTP; anything else → stdio
#   HOST            HTTP bind address (default 127.0.0.1)
#   PORT            HTTP port (default 3030)
#   LOG_LEVEL       DEBUG, INFO, WARNING (or WARN), ERROR, CRITICAL (default INFO)
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3030
HTTP_PATH = "/mcp"

# Names both stdlib logging and uvicorn accept; aliases map onto them.
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _log_level(raw: str) -> str:
    level = raw.strip().upper() or "INFO"
    level = LOG_LEVEL_ALIASES.get(level, level)
    if level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return level


@dataclass(frozen=True)
class ServerSettings:
    """How the server process should expose itself."""

    transport: str = "stdio"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @property
    def is_http(self) -> bool:
        return self.transport == "http"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerSettings":
        env = os.environ if environ is None else environ

        mode = env.get("MCP_TRANSPORT", "").strip().lower()
        transport = "http" if mode == "http" else "stdio"

        raw_port = env.get("PORT", "").strip() or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {raw_port!r}") from None

        return cls(
            transport=transport,
            host=env.get("HOST", "").strip() or DEFAULT_HOST,
            port=port,
            log_level=_log_level(env.get("LOG_LEVEL", "")),
        )
