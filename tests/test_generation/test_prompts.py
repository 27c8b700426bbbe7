"""Tests for prompt templates and the persisted system prompt."""

from unittest.mock import MagicMock

import pytest

from hybrid_rag.generation.prompts import (
    ANSWER_PROMPT,
    DEFAULT_SYSTEM_PROMPT,
    FULL_CONTEXT_PROMPT,
    SYSTEM_PROMPT_KEY,
    WEB_SEARCH_PROMPT,
    load_system_prompt,
    reset_system_prompt,
    save_system_prompt,
)


def _format(template):
    return template.format(
        system_instruction="SYS_VALUE",
        no_data_marker="[NONE]",
        context="CTX_VALUE",
        web_status="Active",
        web_findings="WEB_VALUE",
        query="Q_VALUE",
    )


class TestTemplates:

    @pytest.mark.parametrize("template", [ANSWER_PROMPT, FULL_CONTEXT_PROMPT])
    def test_sections_in_order(self, template):
        text = _format(template)
        positions = [text.index(part) for part in ("SYS_VALUE", "CTX_VALUE", "WEB_VALUE", "Q_VALUE")]
        assert positions == sorted(positions)
        assert "[[1]]" in text
        assert "[NONE]" in text
        assert "Status: Active" in text

    def test_web_search_prompt(self):
        assert '"세부 호핑투어"' in WEB_SEARCH_PROMPT.format(query="세부 호핑투어")

    def test_context_with_braces_is_not_reformatted(self):
        text = ANSWER_PROMPT.format(
            system_instruction="S", no_data_marker="M", context="{not_a_variable}",
            web_status="Disabled", web_findings="", query="q",
        )
        assert "{not_a_variable}" in text


class TestSystemPromptSetting:

    def test_default_when_unset(self, store):
        assert load_system_prompt(store) == DEFAULT_SYSTEM_PROMPT

    def test_save_and_load(self, store):
        save_system_prompt(store, "  You are the Cheolsan travel guide.  ")
        assert load_system_prompt(store) == "You are the Cheolsan travel guide."
        assert store.get_setting(SYSTEM_PROMPT_KEY) == "You are the Cheolsan travel guide."

    def test_reset(self, store):
        save_system_prompt(store, "Custom")
        assert reset_system_prompt(store) == DEFAULT_SYSTEM_PROMPT
        assert load_system_prompt(store) == DEFAULT_SYSTEM_PROMPT

    def test_empty_prompt_rejected(self, store):
        with pytest.raises(ValueError):
            save_system_prompt(store, "   ")

    def test_store_error_falls_back_to_default(self):
        broken = MagicMock()
        broken.get_setting.side_effect = RuntimeError("settings table missing")
        assert load_system_prompt(broken) == DEFAULT_SYSTEM_PROMPT
