# =============================================================================
# core/credentials.py  —  Notion API Key Resolution
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Finds the Notion integration token the server should use.  It checks a
#   fixed, ordered list of names and returns the first non-empty value,
#   tagged with the name that supplied it.
#
# ACCEPTED NAMES (highest priority first):
#   NOTION_API_KEY, GEMINI_NOTION_API_KEY, NOTION_TOKEN, NOTION_SECRET
#
# PLATFORM SPLIT:
#   On Windows the server is usually launched by a desktop agent host that
#   does not inherit the user's shell environment.  There we read the
#   user-scoped variables straight from the registry (HKCU\Environment) by
#   shelling out to `reg query`.  Everywhere else we read os.environ.
#
#   Both lookups are "credential sources": a label plus a zero-argument
#   function returning an optional string.  The resolver only walks a list
#   of sources, so tests (or a future secrets manager) can pass their own.
# =============================================================================

import logging
import os
import re
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from core.models import Credential

logger = logging.getLogger("notion_mcp")

CREDENTIAL_NAMES: tuple[str, ...] = (
    "NOTION_API_KEY",
    "GEMINI_NOTION_API_KEY",
    "NOTION_TOKEN",
    "NOTION_SECRET",
)

_REGISTRY_KEY = r"HKCU\Environment"


@dataclass(frozen=True)
class CredentialSource:
    """A named place a token might live."""

    label: str
    fetch: Callable[[], Optional[str]]


def env_source(name: str) -> CredentialSource:
    """Read ``name`` from the process environment."""
    return CredentialSource(label=name, fetch=lambda: os.environ.get(name))


def read_registry_value(name: str) -> Optional[str]:
    """Return a user-scoped Windows environment variable, or None.

    `reg query` prints lines like::

        NOTION_API_KEY    REG_SZ    secret_abc123

    A non-zero exit (the value does not exist) or a missing `reg` binary
    both mean "not set here".
    """
    try:
        completed = subprocess.run(
            ["reg", "query", _REGISTRY_KEY, "/v", name],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None

    match = re.search(rf"{re.escape(name)}\s+REG_\w+\s+(.+)", completed.stdout)
    return match.group(1).strip() if match else None


def registry_source(name: str) -> CredentialSource:
    """Read ``name`` from HKCU\\Environment via the `reg` utility."""
    return CredentialSource(
        label=f"HKCU:{name}",
        fetch=lambda: read_registry_value(name),
    )


def default_sources(platform: Optional[str] = None) -> list[CredentialSource]:
    """The source list for the host platform, in priority order."""
    platform = platform or sys.platform
    if platform == "win32":
        return [registry_source(name) for name in CREDENTIAL_NAMES]
    return [env_source(name) for name in CREDENTIAL_NAMES]


def resolve_credential(
    sources: Optional[Sequence[CredentialSource]] = None,
) -> Optional[Credential]:
    """Return the first non-empty credential, or None if every source is empty."""
    if sources is None:
        sources = default_sources()

    for source in sources:
        value = source.fetch()
        if isinstance(value, str) and value.strip():
            return Credential(key=value.strip(), source=source.label)
    return None


def require_credential(
    sources: Optional[Sequence[CredentialSource]] = None,
) -> Credential:
    """Resolve a credential or terminate the process.

    This is the only hard failure at startup: without a token no tool can
    do anything useful, so we exit with status 1 after telling the operator
    which names we looked for.
    """
    credential = resolve_credential(sources)
    if credential is None:
        logger.error(
            "No Notion API key found. Set one of: %s.", ", ".join(CREDENTIAL_NAMES)
        )
        sys.exit(1)

    logger.info("Using Notion API key from: %s", credential.source)
    return credential
