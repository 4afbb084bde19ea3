from typing import Optional
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme
from rich.traceback import Traceback

# ========== UI Theme ==========
custom_theme = Theme({
    "ok":   "bold green",
    "warn": "bold yellow",
    "err":  "bold red",
    "info": "bold cyan",
})
console = Console(theme=custom_theme)
err_console = Console(theme=custom_theme, stderr=True)


def _line(label: str, msg: str, style: str) -> Text:
    # Text is never parsed as markup, so urls and bodies print verbatim.
    line = Text.assemble((label, style))
    if msg:
        line.append(" ")
        line.append(msg)
    return line


def say(label: str, msg: str = "", style: str = "info"):
    """Print a themed label followed by plain text on stdout."""
    console.print(_line(label, msg, style), soft_wrap=True)


def say_err(label: str, msg: str = ""):
    err_console.print(_line(label, msg, "err"), soft_wrap=True)


def print_exception_detail(exc: BaseException):
    err_console.print(Traceback.from_exception(type(exc), exc, exc.__traceback__))


def info_panel(title: str, msg: str, style: str = "cyan"):
    console.print(Panel.fit(Text(msg, no_wrap=False), title=title, border_style=style))


def print_rule(title: Optional[str] = None):
    if title:
        console.rule(f"[info]{escape(title)}[/info]")
    else:
        console.rule()
