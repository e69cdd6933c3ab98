"""
Usage rendering for a flag set (the help collaborator).

Reads flag records only (name, shorthand, usage, default rendering, greedy/boolean
markers) and the positional policy; never touches parser state.

Layout
- usage line, shaped by the positional policy:
  • NONE:              usage: prog [flags]
  • ARBITRARY_LEADING: usage: prog [ARGS...] [flags]
  • MANDATORY_N:       usage: prog <arg1> .. <argN> [flags]
                          or: prog [flags] <arg1> .. <argN>
- a "flags" section: '-s, --name', a metavar ('string', 'string...' for greedy
  flags, nothing for booleans), the usage text and '(default X)' when meaningful.

Palette keys
- usage-label, program-name, usage-section, group-label,
  flag-name, metavar, greedy-metavar, argument-description, default, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- colorful=False strips styles; fancy=True wraps everything in a panel.
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .policy import Mode
from .utils import *

_SILENT_DEFAULTS = frozenset(("", "[]", "false", "0"))


def render(flagset, /, *, colorful=Unset, fancy=Unset):
    """
    Build a rich renderable describing how to invoke `flagset`.

    colorful/fancy default to the flag set's own presentation options.
    """
    colorful = coalesce(colorful, flagset.colorful)
    fancy = coalesce(fancy, flagset.fancy)

    styles = defaultdict(str, {
        # === Head ===
        "usage-label": "bold #00E6FF",  # cyan signature label
        "program-name": "bold #FF4D94",  # magenta-pink brand pop
        "usage-section": "bold #36C5F0",  # sky-blue positional shapes

        # === Flags ===
        "group-label": "bold #FFFFFF",
        "flag-name": "bold #22C55E",
        "metavar": "bold #FFD600",
        "greedy-metavar": "bold italic #FFD600",
        "argument-description": "#9CA3AF",
        "default": "dim #9CA3AF",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(__import__('__main__'), "__styles__", {}))

    def text(fragment, style=""):
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = flagset.name
    flags = list(flagset)
    positionals = flagset.positionals
    tail = text("[flags]", "usage-section") if flags else Text("")

    def line(label, *parts):
        result = Text.assemble(text(label, "usage-label"), ": ", text(prog, "program-name"))
        for part in parts:
            if part:
                result.append(" ").append(part)
        return result

    match positionals.mode:
        case Mode.ARBITRARY_LEADING:
            head = [line("usage", text("[ARGS...]", "usage-section"), tail)]
        case Mode.MANDATORY_N:
            args = text(" ".join("<arg%d>" % index for index in range(1, positionals.count + 1)), "usage-section")
            head = [line("usage", args, tail), line("   or", tail, args)]
        case _:
            head = [line("usage", tail)]

    renders = [*head]

    if flags:
        table = Table.grid(padding=(0, 2))
        table.add_column(no_wrap=True)
        table.add_column(no_wrap=True)
        table.add_column()

        for flag in flags:
            names = Text.assemble(
                text("-" + flag.shorthand, "flag-name") if flag.shorthand else Text("  "),
                ", " if flag.shorthand else "  ",
                text("--" + flag.name, "flag-name"),
            )
            if flag.boolean:
                metavar = Text("")
            elif flag.greedy:
                metavar = text("string...", "greedy-metavar")
            else:
                metavar = text("string", "metavar")

            description = text(flag.usage, "argument-description")
            if not flag.boolean and flag.default not in _SILENT_DEFAULTS:
                description.append(" ").append(text("(default %s)" % flag.default, "default"))
            table.add_row(names, metavar, description)

        renders.append(Text(""))
        renders.append(text("flags:", "group-label"))
        renders.append(table)

    if fancy:
        return Panel(Group(*renders), title=text(prog, "panel-title"), title_align="left")
    return Group(*renders)


def display(flagset, /, *, colorful=Unset, fancy=Unset, console=None):
    """
    Print the usage of `flagset` (to stderr unless a console is given).
    """
    console = console if console is not None else Console(stderr=True)
    console.print(render(flagset, colorful=colorful, fancy=fancy))


__all__ = (
    "render",
    "display",
)
