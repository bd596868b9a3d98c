"""Tests for the ordered cleaning pipeline."""

from __future__ import annotations

import pytest
from loguru import logger

from htmlcleaner.config.schema import CleanerSettings
from htmlcleaner.core.pipeline import CleanStep, HtmlCleaner
from htmlcleaner.core.text_extract import strip_html

_SAMPLES = [
    "",
    "plain",
    "<html><head><style>.a{}</style></head><body>Hi&nbsp;There<!-- c --></body></html>",
    "<p>One</p>\n<script>\nvar x = '<b>';\n</script>\n<p>Two &amp; three</p>",
    "A<!--\nB -->C<svg width='1'><circle/></svg>D",
]


class TestHtmlCleanerDefault:
    def test_step_order(self) -> None:
        names = [s.name for s in HtmlCleaner.default().steps]
        assert names == [
            "strip_comments",
            "strip_element:head",
            "strip_element:style",
            "strip_element:script",
            "strip_element:noscript",
            "strip_element:iframe",
            "strip_element:svg",
            "strip_tags",
            "strip_entities",
        ]

    @pytest.mark.parametrize("html", _SAMPLES)
    def test_matches_strip_html(self, html: str) -> None:
        assert HtmlCleaner.default().clean(html) == strip_html(html)

    def test_custom_elements(self) -> None:
        cleaner = HtmlCleaner.default(elements=["nav"])
        assert cleaner.clean("<nav>menu</nav><p>body</p>") == "body"


class TestHtmlCleanerSteps:
    def test_runs_steps_in_order(self) -> None:
        cleaner = HtmlCleaner(
            [
                CleanStep(name="upper", func=str.upper),
                CleanStep(name="suffix", func=lambda s: s + "!"),
            ]
        )
        assert cleaner.clean("hi") == "HI!"

    def test_no_steps_returns_input(self) -> None:
        assert HtmlCleaner([]).clean("<b>x</b>") == "<b>x</b>"

    def test_duplicate_step_names_rejected(self) -> None:
        step = CleanStep(name="same", func=str.strip)
        with pytest.raises(ValueError, match="same"):
            HtmlCleaner([step, step])

    def test_logs_each_step(self) -> None:
        messages: list[str] = []
        handler_id = logger.add(lambda m: messages.append(str(m)), level="DEBUG")
        try:
            HtmlCleaner.default().clean("<b>x</b>")
        finally:
            logger.remove(handler_id)
        assert any("strip_tags 8 -> 1 chars" in m for m in messages)
        assert len(messages) == len(HtmlCleaner.default().steps)


class TestHtmlCleanerFromSettings:
    def test_defaults_match_strip_html(self) -> None:
        cleaner = HtmlCleaner.from_settings(CleanerSettings())
        html = _SAMPLES[2]
        assert cleaner.clean(html) == strip_html(html)

    def test_disable_entities(self) -> None:
        cleaner = HtmlCleaner.from_settings(CleanerSettings(strip_entities=False))
        assert cleaner.clean("<p>a&amp;b</p>") == "a&amp;b"

    def test_disable_tags(self) -> None:
        cleaner = HtmlCleaner.from_settings(CleanerSettings(strip_tags=False))
        assert cleaner.clean("<p>a<style>x</style></p>") == "<p>a</p>"

    def test_disable_comments(self) -> None:
        settings = CleanerSettings(strip_comments=False, strip_tags=False)
        cleaner = HtmlCleaner.from_settings(settings)
        assert cleaner.clean("a<!-- b -->c") == "a<!-- b -->c"

    def test_configured_elements(self) -> None:
        settings = CleanerSettings(block_elements=["footer"])
        cleaner = HtmlCleaner.from_settings(settings)
        assert cleaner.clean("<style>a{}</style><footer>f</footer>x") == "a{}x"
