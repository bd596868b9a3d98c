"""
CLI entry point for htmlcleaner.

Commands:
  htmlcleaner strip [PATH]      Strip HTML from a file (or stdin) to stdout
  htmlcleaner strip -o OUT      Write the plain text to a file instead
  htmlcleaner elements          Show the configured block elements
  htmlcleaner init-config       Write a default configuration file
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import cyclopts
from loguru import logger
from pydantic import ValidationError

from htmlcleaner.config.schema import DEFAULT_CONFIG_PATH, CleanerSettings
from htmlcleaner.core.pipeline import HtmlCleaner

app = cyclopts.App(name="htmlcleaner", help="Convert HTML markup into plain text.")


@app.command
def strip(
    path: Path | None = None,
    output: Path | None = None,
    config: Path = DEFAULT_CONFIG_PATH,
    log_level: str = "WARNING",
) -> None:
    """
    Strip comments, block elements, tags and entities from HTML.

    Reads PATH, or stdin when PATH is omitted or "-".
    """
    _setup_logging(log_level)
    settings = _load_settings(config)
    cleaner = HtmlCleaner.from_settings(settings)

    html = _read_input(path)
    text = cleaner.clean(html)
    logger.info("strip: {} -> {} chars", len(html), len(text))

    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    logger.info("strip: wrote {}", output)


@app.command
def elements(config: Path = DEFAULT_CONFIG_PATH) -> None:
    """List the block elements removed with their contents, in order."""
    settings = _load_settings(config)
    if not settings.block_elements:
        print("No block elements configured.")
        return
    for name in settings.block_elements:
        print(f"  {name}")


@app.command
def init_config(config: Path = DEFAULT_CONFIG_PATH) -> None:
    """Write a configuration file with default values."""
    if config.exists():
        print(f"error: {config} already exists", file=sys.stderr)
        raise SystemExit(1)
    CleanerSettings().save(config)
    print(f"Wrote default configuration to {config}")


# ── Internal helpers ─────────────────────────────────────────────────────────


def _read_input(path: Path | None) -> str:
    """
    Read the HTML to clean.

    Args:
        path: File to read, or None / "-" for stdin.

    Raises:
        SystemExit: If the file does not exist.
    """
    if path is None or str(path) == "-":
        return sys.stdin.read()
    if not path.is_file():
        print(f"error: no such file: {path}", file=sys.stderr)
        raise SystemExit(1)
    return path.read_text(encoding="utf-8", errors="replace")


def _load_settings(path: Path) -> CleanerSettings:
    """
    Load settings, turning a broken config file into a clean CLI error.

    Raises:
        SystemExit: If the file is not valid JSON or fails validation.
    """
    try:
        return CleanerSettings.load(path)
    except (json.JSONDecodeError, ValidationError) as e:
        print(f"error: invalid config {path}: {e}", file=sys.stderr)
        raise SystemExit(1) from e


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _setup_logging(level: str) -> None:
    """
    Configure loguru for CLI output.

    Removes the default loguru stderr handler and replaces it with one that
    uses a consistent timestamp+level format. Logs always go to stderr so
    they never mix with the cleaned text on stdout.

    Args:
        level: Log level string (case-insensitive), e.g. "INFO", "DEBUG".

    Raises:
        SystemExit: If the level is not a valid log level name.
    """
    normalised = level.upper()
    if normalised not in _VALID_LOG_LEVELS:
        valid = ", ".join(sorted(_VALID_LOG_LEVELS))
        print(f"error: invalid --log-level '{level}'. Valid values: {valid}", file=sys.stderr)
        raise SystemExit(1)

    logger.remove()  # remove loguru's built-in default handler
    logger.add(
        sys.stderr,
        level=normalised,
        format=("<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level:<8}</level> {message}"),
        colorize=True,
    )


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
