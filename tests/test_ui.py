"""Tests for the Textual TUI."""
import asyncio

import pytest

from fgpt.conversation import Phase
from fgpt.ui import DebugPanel, FormGeneratorApp, FormPreview, PromptBar
from fgpt.ui.config import INPUT_HISTORY_MAX_SIZE, LogLevel
from fgpt.ui.widgets import HistoryInput


class TestLogLevel:
    """Tests for trace level parsing."""

    @pytest.mark.parametrize("value, expected", [
        ("debug", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("warning", LogLevel.WARNING),
        ("error", LogLevel.ERROR),
        ("verbose", LogLevel.DEBUG),
    ])
    def test_parse(self, value, expected):
        """Test that callback level names map to members, DEBUG when unknown."""
        assert LogLevel.parse(value) is expected

    def test_ordering(self):
        """Test that levels compare by severity."""
        assert LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR


class TestHistoryInput:
    """Tests for the prompt history."""

    def test_history_trimmed_to_max_size(self):
        """Test that only the most recent prompts are kept."""
        history_input = HistoryInput()

        for number in range(INPUT_HISTORY_MAX_SIZE + 2):
            history_input.remember(f"prompt {number}")

        assert len(history_input.history) == INPUT_HISTORY_MAX_SIZE
        assert history_input.history[0] == "prompt 2"
        assert history_input.history[-1] == f"prompt {INPUT_HISTORY_MAX_SIZE + 1}"

    def test_repeated_prompt_stored_once(self):
        """Test that submitting the same prompt twice keeps one entry."""
        history_input = HistoryInput()

        history_input.remember("Survey")
        history_input.remember("Survey")

        assert history_input.history == ("Survey",)

class TestFormGeneratorApp:
    """Tests for FormGeneratorApp driven through the Textual pilot."""

    @pytest.mark.asyncio
    async def test_committed_form_is_previewed(self, fake_client, nps_questions):
        """Test that a successful generation shows every question."""
        app = FormGeneratorApp(client=fake_client(result=nps_questions))

        async with app.run_test() as pilot:
            await app.machine.submit("Create a 3-question NPS survey")
            await pilot.pause()

            preview = app.query_one("#form-preview", FormPreview)
            assert app.machine.state.phase is Phase.PRESENTING
            assert preview.display
            assert len(preview.query(".form-question")) == 3

    @pytest.mark.asyncio
    async def test_new_form_binding_resets(self, fake_client, nps_questions):
        """Test that Ctrl+N clears the conversation and the preview."""
        app = FormGeneratorApp(client=fake_client(result=nps_questions))

        async with app.run_test() as pilot:
            await app.machine.submit("Create a 3-question NPS survey")
            await pilot.pause()
            await pilot.press("ctrl+n")
            await pilot.pause()

            assert app.machine.state.phase is Phase.IDLE
            assert app.machine.state.messages == ()
            assert not app.query_one("#form-preview", FormPreview).display

    @pytest.mark.asyncio
    async def test_prompt_bar_disabled_while_generating(self, fake_client, nps_questions):
        """Test that the input is locked during a generation."""
        gate = asyncio.Event()
        app = FormGeneratorApp(client=fake_client(result=nps_questions, gate=gate))

        async with app.run_test() as pilot:
            task = asyncio.create_task(app.machine.submit("Survey"))
            await pilot.pause()

            prompt_input = app.query_one("#prompt-bar", PromptBar).query_one("#prompt-input", HistoryInput)
            assert prompt_input.disabled

            gate.set()
            await task
            await pilot.pause()
            assert not prompt_input.disabled

    @pytest.mark.asyncio
    async def test_up_and_down_recall_prompts(self, fake_client):
        """Test browsing the prompt history from the input."""
        app = FormGeneratorApp(client=fake_client())

        async with app.run_test() as pilot:
            prompt_input = app.query_one("#prompt-input", HistoryInput)
            prompt_input.remember("Survey")
            prompt_input.remember("Quiz")
            prompt_input.focus()
            prompt_input.value = "draft"
            await pilot.pause()

            await pilot.press("up")
            assert prompt_input.value == "Quiz"
            await pilot.press("up")
            await pilot.press("up")
            assert prompt_input.value == "Survey"
            await pilot.press("down")
            assert prompt_input.value == "Quiz"
            await pilot.press("down")
            assert prompt_input.value == "draft"

    @pytest.mark.asyncio
    async def test_log_level_shows_panel(self, fake_client):
        """Test that --log-level shows the panel with the chosen threshold."""
        app = FormGeneratorApp(client=fake_client(), log_level="warning")

        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one("#debug-panel", DebugPanel)

            assert panel.display
            assert panel.threshold is LogLevel.WARNING
            assert panel.border_subtitle == "Level: WARNING"

            await pilot.press("ctrl+d")
            assert not panel.display
            assert panel.border_subtitle == "Hidden"
