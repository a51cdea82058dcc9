# =============================================================================
# release.py  —  Build a distributable extension directory
# =============================================================================
#
# HOW TO RUN:
#   uv run python release.py            # writes ./release/
#   uv run python release.py dist/ext   # writes ./dist/ext/
#
# WHAT ENDS UP IN THE RELEASE:
#   main.py, core/, tools/     the server itself (the agent/ harness is left out)
#   requirements.txt           runtime dependencies only
#   gemini-extension.json      manifest telling an agent host how to launch
#                              the server over stdio
#   README.md                  install notes for end users
#
# The destination is wiped first, so a release never carries stale files.
# It therefore may not be the project root, one of its parents, or a path
# inside the server sources.
# =============================================================================

import json
import logging
import shutil
import sys
from pathlib import Path
from typing import Optional

from tools.mcp_server import SERVER_VERSION

logger = logging.getLogger("notion_mcp")

EXTENSION_NAME = "notion-mcp"
SERVER_FILES = ("main.py",)
SERVER_PACKAGES = ("core", "tools")
RUNTIME_REQUIREMENTS = (
    "fastmcp>=2.11",
    "notion-client>=2.2.1,<2.5",
    "python-dotenv>=1.0",
    "uvicorn>=0.30",
)

README = """# Notion MCP Extension

Minimal distribution for end users.

## Install

- Requires Python 3.10+ and a Notion integration token.
- Install the dependencies: `pip install -r requirements.txt`
- Set your key as a user variable, e.g. on Windows (CMD):
  `setx NOTION_API_KEY "secret_xxx_from_notion"`
  (NOTION_TOKEN, NOTION_SECRET and GEMINI_NOTION_API_KEY work too.)
- Install the extension from this directory:
  `gemini extensions install <path-to-this-directory>`

## Contents

- `gemini-extension.json`: starts the MCP server over stdio
- `main.py`, `core/`, `tools/`: the server

## Use

Restart the agent CLI, check the extensions list, then ask for Notion
pages or use the notion_* tools directly.
"""


def extension_manifest() -> dict:
    """The manifest an agent host reads to launch the server."""
    return {
        "name": EXTENSION_NAME,
        "version": SERVER_VERSION,
        "mcpServers": {
            "notion": {
                "command": "python",
                "args": ["${extensionPath}/main.py"],
                "cwd": "${extensionPath}",
                "env": {"MCP_TRANSPORT": "stdio"},
            }
        },
    }


def build_release(root: Path, dest: Path) -> Path:
    """Assemble a release of the server found in ``root`` into ``dest``.

    Raises:
        FileNotFoundError: if a server file or package is missing from root.
        ValueError: if wiping ``dest`` would delete the sources themselves.
    """
    for name in SERVER_FILES + SERVER_PACKAGES:
        if not (root / name).exists():
            raise FileNotFoundError(f"Missing {root / name}; run from the project root")

    # dest is wiped below, so it must not hold (or sit inside) the sources.
    src, out = root.resolve(), dest.resolve()
    if out == src or out in src.parents:
        raise ValueError(f"Refusing to release into {dest}: it contains the project root {root}")
    for name in SERVER_FILES + SERVER_PACKAGES:
        source = src / name
        if out == source or source in out.parents:
            raise ValueError(f"Refusing to release into {dest}: it lies inside {source}")

    shutil.rmtree(dest, ignore_errors=True)
    dest.mkdir(parents=True)

    for name in SERVER_FILES:
        shutil.copy2(root / name, dest / name)
    for name in SERVER_PACKAGES:
        shutil.copytree(
            root / name,
            dest / name,
            ignore=shutil.ignore_patterns("__pycache__", "*.pyc"),
        )

    (dest / "requirements.txt").write_text("\n".join(RUNTIME_REQUIREMENTS) + "\n", encoding="utf-8")
    (dest / "gemini-extension.json").write_text(
        json.dumps(extension_manifest(), indent=2) + "\n", encoding="utf-8"
    )
    (dest / "README.md").write_text(README, encoding="utf-8")
    return dest


def main(argv: Optional[list[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)
    argv = sys.argv[1:] if argv is None else argv

    root = Path(__file__).resolve().parent
    dest = Path(argv[0]) if argv else root / "release"
    try:
        build_release(root, dest)
    except (FileNotFoundError, ValueError) as exc:
        logger.error(str(exc))
        sys.exit(1)
    logger.info(f"Release created in {dest}")


if __name__ == "__main__":
    main()
