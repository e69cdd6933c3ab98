"""
Greedyflag faults (configuration errors, parse errors, and the help signal) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- GreedyFlagException: base type that carries a message, a hint, and structured data
  (tokens, counts, flags) and knows how to render itself with rich.
- ConfigError / ParseError: the two failure families. ConfigError is raised while a
  FlagSet is being built; ParseError while tokens are read or positionals are resolved.
- HelpRequested: a distinguished non-error outcome (“stop and print usage”).
- trigger(): central entry point to surface a fault (raise it, or print it and exit).

UX goals
- Position-first messages: token-level faults name the ordinal position of the token.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Structured data
- Every fault keeps the raw offending data as attributes so callers and tests can
  assert on structure (fault.tokens, fault.expected, fault.found, fault.flag, ...)
  rather than on message text.
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import *

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across greedyflag (stable identifiers).

    grouping (by high-level domain)
    - configuration (131xx)
      • DUPLICATE_FLAG, DUPLICATE_SHORTHAND, INVALID_FLAG,
        POLICY_LOCKED, POLICY_CONFLICT, NEGATIVE_COUNT
    - flag parsing (141xx)
      • UNKNOWN_FLAG, MALFORMED_FLAG, MISSING_ARGUMENT, INVALID_VALUE,
        BOOLEAN_WITH_VALUE, COMBINED_NON_BOOLEAN, ALREADY_PARSED
    - positionals (151xx)
      • UNEXPECTED_ARGUMENT, TRAILING_ARGUMENTS, SPLIT_POSITIONALS, COUNT_MISMATCH
    - signals (161xx)
      • HELP_REQUESTED
    """
    # --- configuration errors (13xxx) ---
    DUPLICATE_FLAG              = 13101
    DUPLICATE_SHORTHAND         = 13102
    INVALID_FLAG                = 13103
    POLICY_LOCKED               = 13111
    POLICY_CONFLICT             = 13112
    NEGATIVE_COUNT              = 13113

    # --- flag parsing errors (14xxx) ---
    UNKNOWN_FLAG                = 14101
    MALFORMED_FLAG              = 14102
    MISSING_ARGUMENT            = 14111
    INVALID_VALUE               = 14112
    BOOLEAN_WITH_VALUE          = 14113
    COMBINED_NON_BOOLEAN        = 14114
    ALREADY_PARSED              = 14121

    # --- positional errors (15xxx) ---
    UNEXPECTED_ARGUMENT         = 15101
    TRAILING_ARGUMENTS          = 15102
    SPLIT_POSITIONALS           = 15103
    COUNT_MISMATCH              = 15104

    # --- signals (16xxx) ---
    HELP_REQUESTED              = 16101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def progname():
    """
    resolve the program name shown in fault headers and usage lines.

    lookup order: __main__.__prog__, then the basename of sys.argv[0], then "greedyflag".
    """
    try:
        return getattr(__import__("__main__"), "__prog__")
    except AttributeError:
        pass
    if sys.argv and sys.argv[0]:
        return os.path.basename(sys.argv[0])
    return "greedyflag"


class GreedyFlagException(Exception):
    """
    base type for every greedyflag fault.

    class attributes
    - title: short, lowercased headline used in rendered output.
    - code: the FaultCode of this fault kind.
    - status: process exit status used by trigger() in shell mode.
    """
    title = "greedyflag fault"
    code = None
    status = 2

    def __init__(self, message, /, *, hint=Unset):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.hint = coalesce(hint)

    def render(self, *, prog=Unset, fancy=False, colorful=True):
        """
        build a rich renderable for this fault.

        layout
        - header: "[ prog — code | Title ]"
        - body: the message, then the hint (when present) after an arrow.
        - fancy=True wraps the body in a panel titled with the header.
        """
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        code = self.code.normalize() if self.code is not None else "-"

        header = Text.assemble(
            "[ ",
            text(coalesce(prog, progname()), "prog-name"),
            " — ",
            text(code, "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        parts = [text(self.message, "error-message")]
        if self.hint:
            parts.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))

        if fancy:
            return Panel(Group(*parts), title=header, title_align="left")
        return Group(header, *parts)

    def __rich__(self):
        return self.render()

    def __trigger__(self, *, shell=False, **options):
        if not shell:
            raise self
        console.print(self.render(**options))
        sys.exit(self.status)


# --- configuration errors ---

class ConfigError(GreedyFlagException):
    """
    raised while a FlagSet is configured (before any token is read).

    these are programmer errors: they signal a broken CLI definition, not bad user input.
    """
    title = "configuration error"


class DuplicateFlagError(ConfigError):
    code = FaultCode.DUPLICATE_FLAG

    def __init__(self, name, /):
        super().__init__(
            "flag %r is already defined" % ("--" + name),
            hint="give each flag a unique long name",
        )
        self.name = name


class DuplicateShorthandError(ConfigError):
    code = FaultCode.DUPLICATE_SHORTHAND

    def __init__(self, shorthand, name, owner, /):
        super().__init__(
            "shorthand %r of flag %r is already used by flag %r" % ("-" + shorthand, "--" + name, "--" + owner),
            hint="pick another single-character shorthand or leave it empty",
        )
        self.shorthand = shorthand
        self.name = name
        self.owner = owner


class InvalidFlagError(ConfigError):
    code = FaultCode.INVALID_FLAG

    def __init__(self, message, name, /):
        super().__init__(message, hint="long names are non-empty and shorthands are exactly one character")
        self.name = name


class PolicyLockedError(ConfigError):
    code = FaultCode.POLICY_LOCKED

    def __init__(self, /):
        super().__init__(
            "cannot change the positional argument policy after flags have been defined",
            hint="select the positional policy before defining any flag",
        )


class PolicyConflictError(ConfigError):
    code = FaultCode.POLICY_CONFLICT

    def __init__(self, current, requested, /):
        super().__init__(
            "cannot set multiple positional argument policies (current: %s, new: %s)" % (
                current.name.lower(), requested.name.lower()
            ),
            hint="positional policies are mutually exclusive; keep only one",
        )
        self.current = current
        self.requested = requested


class NegativeCountError(ConfigError):
    code = FaultCode.NEGATIVE_COUNT

    def __init__(self, count, /):
        super().__init__(
            "number of mandatory positional arguments cannot be negative (got %d)" % count,
            hint="use zero or a positive count",
        )
        self.count = count


# --- parse errors ---

class ParseError(GreedyFlagException):
    """
    raised during the token pass or the final positional resolution.

    a single malformed token aborts the whole pass; nothing is retried or recovered.
    """
    title = "parse error"


class UnknownFlagError(ParseError):
    title = "unknown flag"
    code = FaultCode.UNKNOWN_FLAG

    def __init__(self, token, input, /, *, index=Unset, suggestions=()):
        where = " at %s position" % ordinal(index) if index else ""
        if suggestions:
            hint = "did you mean %r? try '--help' to see all flags" % suggestions[0]
        else:
            hint = "try '--help' to see all available flags"
        super().__init__("unknown flag %r%s" % (input, where), hint=hint)
        self.token = token
        self.input = input
        self.index = coalesce(index)
        self.suggestions = tuple(suggestions)


class MalformedFlagError(ParseError):
    title = "malformed flag"
    code = FaultCode.MALFORMED_FLAG

    def __init__(self, token, /, *, index=Unset):
        where = " at %s position" % ordinal(index) if index else ""
        super().__init__(
            "bad form of short flag %r%s" % (token, where),
            hint="inline values on short flags take a single character (for example: -x=value)",
        )
        self.token = token
        self.index = coalesce(index)


class MissingArgumentError(ParseError):
    title = "missing argument"
    code = FaultCode.MISSING_ARGUMENT

    def __init__(self, flag, input, /, *, index=Unset):
        where = " at %s position" % ordinal(index) if index else ""
        super().__init__(
            "flag %r%s needs an argument" % (input, where),
            hint="pass a value after a space or inline (for example: --%s=<value>)" % flag.name,
        )
        self.flag = flag
        self.input = input
        self.index = coalesce(index)


class InvalidValueError(ParseError):
    title = "invalid value"
    code = FaultCode.INVALID_VALUE

    def __init__(self, flag, input, value, reason, /, *, index=Unset):
        where = " at %s position" % ordinal(index) if index else ""
        super().__init__(
            "invalid value %r for flag %r%s: %s" % (value, input, where, reason),
            hint="boolean flags accept true/false, yes/no, on/off or 1/0" if flag.boolean else Unset,
        )
        self.flag = flag
        self.input = input
        self.value = value
        self.index = coalesce(index)


class BooleanWithValueError(ParseError):
    title = "boolean with value"
    code = FaultCode.BOOLEAN_WITH_VALUE

    def __init__(self, flag, input, value, /, *, index=Unset):
        where = " at %s position" % ordinal(index) if index else ""
        super().__init__(
            "boolean flag %r%s cannot have value %r" % (input, where, value),
            hint="remove everything from '=' or use the long form (for example: --%s=%s)" % (flag.name, value),
        )
        self.flag = flag
        self.input = input
        self.value = value
        self.index = coalesce(index)


class CombinedNonBooleanError(ParseError):
    title = "combined non-boolean"
    code = FaultCode.COMBINED_NON_BOOLEAN

    def __init__(self, flag, token, /, *, index=Unset):
        where = " at %s position" % ordinal(index) if index else ""
        super().__init__(
            "flag %r requires a value and cannot be combined before the end of %r%s" % (
                "-" + flag.shorthand, token, where
            ),
            hint="move it to the end of the group or pass it on its own",
        )
        self.flag = flag
        self.token = token
        self.index = coalesce(index)


class AlreadyParsedError(ParseError):
    title = "already parsed"
    code = FaultCode.ALREADY_PARSED

    def __init__(self, /):
        super().__init__(
            "parse() was already called on this flag set",
            hint="build a new flag set for every parse",
        )


class UnexpectedArgumentError(ParseError):
    title = "unexpected argument"
    code = FaultCode.UNEXPECTED_ARGUMENT

    def __init__(self, tokens, /, *, index=Unset):
        tokens = tuple(tokens)
        where = " at %s position" % ordinal(index) if index else ""
        super().__init__(
            "unexpected %s%s: %s" % (
                "argument" if len(tokens) == 1 else pluralize("argument"), where, " ".join(map(repr, tokens))
            ),
            hint="positional arguments are not accepted here",
        )
        self.tokens = tokens
        self.index = coalesce(index)


class TrailingArgumentsError(ParseError):
    title = "trailing arguments"
    code = FaultCode.TRAILING_ARGUMENTS

    def __init__(self, tokens, /):
        tokens = tuple(tokens)
        super().__init__(
            "non-flag arguments found after flags: %s" % " ".join(map(repr, tokens)),
            hint="place positional arguments before the first flag",
        )
        self.tokens = tokens


class SplitPositionalsError(ParseError):
    title = "split positionals"
    code = FaultCode.SPLIT_POSITIONALS

    def __init__(self, leading, trailing, /):
        leading, trailing = tuple(leading), tuple(trailing)
        super().__init__(
            "positional arguments found both before flags (%s) and after flags (%s)" % (
                " ".join(map(repr, leading)), " ".join(map(repr, trailing))
            ),
            hint="pass positional arguments either all before or all after the flags",
        )
        self.leading = leading
        self.trailing = trailing


class CountMismatchError(ParseError):
    title = "count mismatch"
    code = FaultCode.COUNT_MISMATCH

    def __init__(self, expected, found, tokens=(), /):
        tokens = tuple(tokens)
        super().__init__(
            "expected exactly %s, found %d%s" % (
                quantify(expected, "positional argument"),
                found,
                (": " + " ".join(map(repr, tokens))) if tokens else "",
            ),
            hint="pass exactly %d positional %s before or after the flags" % (
                expected, "argument" if expected == 1 else "arguments"
            ),
        )
        self.expected = expected
        self.found = found
        self.tokens = tokens


# --- signals ---

class HelpRequested(GreedyFlagException):
    """
    distinguished non-error outcome: the user asked for help.

    callers must treat it as “stop and print usage”, not as malformed input.
    in shell mode trigger() prints the usage renderable it is given and exits with 0.
    """
    title = "help requested"
    code = FaultCode.HELP_REQUESTED
    status = 0

    def __init__(self, input="--help", /):
        super().__init__("help requested via %r" % input)
        self.input = input

    def __trigger__(self, *, shell=False, usage=None, **options):
        if not shell:
            raise self
        if usage is not None:
            console.print(usage)
        sys.exit(self.status)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide a callable __trigger__ (see GreedyFlagException).
    - shell=False (default): the fault is raised.
    - shell=True: the fault is printed to stderr with rich and the process exits
      with fault.status (2 for errors, 0 for HelpRequested).

    typical options
    - shell, fancy, colorful, prog, and usage (for HelpRequested).
    """
    if not hasattr(fault, "__trigger__") or not callable(fault.__trigger__):
        raise TypeError("trigger() argument must have a __trigger__ method")
    fault.__trigger__(**options)


__all__ = (
    "FaultCode",
    "GreedyFlagException",
    "ConfigError",
    "DuplicateFlagError",
    "DuplicateShorthandError",
    "InvalidFlagError",
    "PolicyLockedError",
    "PolicyConflictError",
    "NegativeCountError",
    "ParseError",
    "UnknownFlagError",
    "MalformedFlagError",
    "MissingArgumentError",
    "InvalidValueError",
    "BooleanWithValueError",
    "CombinedNonBooleanError",
    "AlreadyParsedError",
    "UnexpectedArgumentError",
    "TrailingArgumentsError",
    "SplitPositionalsError",
    "CountMismatchError",
    "HelpRequested",
    "trigger",
    "progname",
)
