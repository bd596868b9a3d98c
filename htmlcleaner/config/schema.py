"""
Configuration schema for htmlcleaner.

Settings are loaded from a JSON file (default: ~/.htmlcleaner/config.json).
The file is optional; every field has a default that reproduces strip_html().
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from htmlcleaner.core.text_extract import BLOCK_ELEMENTS

DEFAULT_CONFIG_PATH = Path.home() / ".htmlcleaner" / "config.json"

_ELEMENT_NAME = re.compile(r"[A-Za-z][A-Za-z0-9-]*")


class CleanerSettings(BaseModel):
    """Root configuration object for htmlcleaner."""

    block_elements: list[str] = Field(
        default_factory=lambda: list(BLOCK_ELEMENTS),
        description="Elements removed together with their contents, in order.",
    )
    strip_comments: bool = True
    strip_tags: bool = True
    strip_entities: bool = True

    @model_validator(mode="after")
    def _validate_block_elements(self) -> CleanerSettings:
        """
        Validate that block element names are usable tag names.

        Raises:
            ValueError: If a name is empty, is not a valid tag name,
                        or appears more than once.
        """
        seen: set[str] = set()
        for name in self.block_elements:
            if not _ELEMENT_NAME.fullmatch(name):
                raise ValueError(f"block_elements: '{name}' is not a valid element name")
            if name in seen:
                raise ValueError(f"block_elements: '{name}' is listed more than once")
            seen.add(name)
        return self

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> CleanerSettings:
        """
        Load settings from a JSON file.

        Missing keys use their default values.
        The file is optional — if it doesn't exist, all defaults apply.
        """
        if not path.exists():
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.model_validate(data)

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Persist settings to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            self.model_dump_json(indent=2, exclude_none=False),
            encoding="utf-8",
        )
