"""Mode indicator: status-bar segment showing the active agent mode."""

from __future__ import annotations

from textual.reactive import reactive
from textual.widget import Widget
from rich.text import Text

from modegate.adapters.events import GateEvent, ModeChanged
from modegate.engine.lifecycle import coerce_mode
from modegate.engine.models import MODE_COLORS, MODE_LABELS, Mode

# Host theme color names mapped to rich styles.
THEME_STYLES: dict[str, str] = {
    "accent": "bold cyan",
    "warning": "bold yellow",
    "success": "bold green",
}


def render_mode_label(mode: Mode) -> Text:
    """Render the mode label in its theme color."""
    style = THEME_STYLES.get(MODE_COLORS[mode], "bold")
    return Text(f" {MODE_LABELS[mode]} ", style=style)


class ModeIndicator(Widget):
    """Single-line indicator for the current agent mode."""

    DEFAULT_CSS = """
    ModeIndicator {
        height: 1;
        width: auto;
    }
    """

    mode: reactive[str] = reactive(Mode.BUILD.value)

    def handle_event(self, event: GateEvent) -> None:
        """Apply a gate event; only ModeChanged affects the indicator."""
        if isinstance(event, ModeChanged):
            self.mode = event.mode

    def render(self) -> Text:
        return render_mode_label(coerce_mode(self.mode))
