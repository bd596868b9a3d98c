"""
Ordered cleaning pipeline.

An HtmlCleaner holds a fixed sequence of named text transformations and feeds
each step the full output of the previous one. HtmlCleaner.default() builds
the same sequence as strip_html(); from_settings() builds it from a loaded
configuration.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from htmlcleaner.core.text_extract import (
    BLOCK_ELEMENTS,
    strip_comments,
    strip_element,
    strip_entities,
    strip_tags,
)

if TYPE_CHECKING:
    from htmlcleaner.config.schema import CleanerSettings


@dataclass(frozen=True)
class CleanStep:
    """A named str -> str transformation."""

    name: str
    func: Callable[[str], str]

    def __call__(self, text: str) -> str:
        return self.func(text)


def _element_step(name: str) -> CleanStep:
    return CleanStep(name=f"strip_element:{name}", func=functools.partial(strip_element, name=name))


class HtmlCleaner:
    """Runs cleaning steps in order over a text buffer."""

    def __init__(self, steps: Iterable[CleanStep]) -> None:
        self._steps: tuple[CleanStep, ...] = tuple(steps)
        names = [s.name for s in self._steps]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate pipeline steps: {', '.join(duplicates)}")

    @property
    def steps(self) -> tuple[CleanStep, ...]:
        """The steps in execution order."""
        return self._steps

    @classmethod
    def default(cls, elements: Iterable[str] = BLOCK_ELEMENTS) -> HtmlCleaner:
        """
        Build the standard pipeline.

        Comments, then each block element, then tags, then entities. With the
        default element list the result matches strip_html() exactly.

        Args:
            elements: Block element names, removed in the given order.
        """
        return cls(
            [
                CleanStep(name="strip_comments", func=strip_comments),
                *(_element_step(name) for name in elements),
                CleanStep(name="strip_tags", func=strip_tags),
                CleanStep(name="strip_entities", func=strip_entities),
            ]
        )

    @classmethod
    def from_settings(cls, settings: CleanerSettings) -> HtmlCleaner:
        """
        Build a pipeline from configuration.

        Block elements always run; the comment, tag and entity steps can be
        switched off individually.

        Args:
            settings: Loaded cleaner settings.
        """
        steps: list[CleanStep] = []
        if settings.strip_comments:
            steps.append(CleanStep(name="strip_comments", func=strip_comments))
        steps.extend(_element_step(name) for name in settings.block_elements)
        if settings.strip_tags:
            steps.append(CleanStep(name="strip_tags", func=strip_tags))
        if settings.strip_entities:
            steps.append(CleanStep(name="strip_entities", func=strip_entities))
        return cls(steps)

    def clean(self, html: str) -> str:
        """
        Run every step over the text.

        Args:
            html: HTML document or fragment.

        Returns:
            The output of the last step (the input itself if there are no steps).
        """
        text = html
        for step in self._steps:
            before = len(text)
            text = step(text)
            logger.debug("pipeline: {} {} -> {} chars", step.name, before, len(text))
        return text
