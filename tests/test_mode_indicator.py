from __future__ import annotations

import asyncio

from textual.app import App, ComposeResult

from modegate.adapters.events import ModeChanged, ToolCallBlocked
from modegate.engine.models import Mode
from modegate.tui.widgets.mode_indicator import ModeIndicator, render_mode_label


def test_render_mode_label_uses_theme_color() -> None:
    ask = render_mode_label(Mode.ASK)
    assert ask.plain == " \U0001f50d ask "
    assert str(ask.style) == "bold cyan"
    assert str(render_mode_label(Mode.PLAN).style) == "bold yellow"
    assert str(render_mode_label(Mode.BUILD).style) == "bold green"


class _IndicatorApp(App):
    def compose(self) -> ComposeResult:
        yield ModeIndicator()


def test_indicator_follows_mode_changed_events() -> None:
    async def _run() -> None:
        app = _IndicatorApp()
        async with app.run_test(size=(40, 5)) as pilot:
            await pilot.pause()
            indicator = app.query_one(ModeIndicator)
            assert indicator.mode == "build"

            indicator.handle_event(ModeChanged(mode="plan", label="\U0001f4cb plan", color="warning"))
            await pilot.pause()
            assert indicator.mode == "plan"
            assert indicator.render().plain == " \U0001f4cb plan "

            indicator.handle_event(ToolCallBlocked(mode="plan", tool_name="write", reason="x"))
            assert indicator.mode == "plan"

            indicator.mode = "chaos"
            assert indicator.render().plain == " \U0001f528 build "

    asyncio.run(_run())
