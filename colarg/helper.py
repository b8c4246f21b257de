"""
Help rendering.

render() prints the usage line, a column-aligned table of the declared options and, when
commands exist, a table of commands with their own options; then it terminates the
process with exit status 0. It only reads the registries and never affects parsing.

Palette keys (overridable through __main__.__styles__, ignored unless colorful=True)
- usage-label, usage-section
- options-title, option-name, option-alias, option-type, option-default,
  option-description, required, not-required, callback
- commands-title, command-name, command-description
"""
import sys
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .utils import Unset, coalesce


def render(usage, options, commands, /, *, colorful=False, fancy=False, console=Unset):
    """
    Render help for a parse scope and exit with status 0.

    Parameters
    - usage: str | Text
      Usage line; "Usage:" is printed when it is empty.
    - options: Iterable[Option]
    - commands: Iterable[Command]
    - colorful: bool (keyword-only)
      Apply the palette; otherwise plain text.
    - fancy: bool (keyword-only)
      Wrap the output in a panel.
    - console: rich Console (keyword-only)
      Output console; a fresh stdout console when omitted.
    """
    console = coalesce(console, Console())

    styles = defaultdict(str, {
        "usage-label": "bold #FF4D94",
        "usage-section": "#E5E7EB",

        "options-title": "bold #00E6FF",
        "option-name": "bold #E6E6F0",
        "option-alias": "#36C5F0",
        "option-type": "#FFD600",
        "option-default": "#9CA3AF",
        "option-description": "#C8C8D0",
        "required": "bold #FF4DA6",
        "not-required": "#6B6F7A",
        "callback": "italic #9CE19C",

        "commands-title": "bold #00E6FF",
        "command-name": "bold #22C55E",
        "command-description": "#C8C8D0",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text("" if fragment is None else str(fragment), styler(style))

    renders = [text(usage or "Usage:", "usage-section")]

    table = Table(
        "Name", "Alias", "Type", "Default", "Description", "Required", "Callback",
        title=text("options", "options-title"),
        title_justify="left",
        box=ROUNDED,
        header_style=styler("options-title"),
    )
    for option in options:
        table.add_row(
            text("--" + option.name, "option-name"),
            text("-" + option.alias if option.alias else "", "option-alias"),
            text(option.type.value, "option-type"),
            text(option.default, "option-default"),
            text(option.descr, "option-description"),
            text("[REQUIRED]", "required") if option.required else text("[NOT REQUIRED]", "not-required"),
            text("[CALLBACK]" if option.callback else "", "callback"),
        )
    renders.append(table)

    if commands := list(commands):
        table = Table(
            "Name", "Description", "Options",
            title=text("commands", "commands-title"),
            title_justify="left",
            box=ROUNDED,
            header_style=styler("commands-title"),
        )
        for command in commands:
            grid = Table.grid(padding=(0, 2))
            for option in command.options:
                grid.add_row(
                    text("--" + option.name, "option-name"),
                    text("-" + option.alias if option.alias else "", "option-alias"),
                    text(option.type.value, "option-type"),
                )
            table.add_row(
                text(command.name, "command-name"),
                text(command.descr, "command-description"),
                grid,
            )
        renders.append(table)

    renderable = Group(*renders)
    if fancy:
        renderable = Panel(renderable, title=text("help", "usage-label"), title_align="left")

    console.print(renderable)
    sys.exit(0)


__all__ = (
    "render",
)
