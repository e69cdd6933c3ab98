r"""
Greedyflag flag records and the flag registry.

Overview
- Flag: one defined command-line flag.
  • identity: long name (unique) and optional one-character shorthand (unique).
  • metadata: usage text and the rendering of its initial value (default).
  • kind markers: boolean (BooleanValue) and greedy (StringListValue).
  • state: the Value payload and `changed`, set by the parser the first time the
    user supplies the flag.

- FlagSet: explicitly owned registry of flags plus its positional policy.
  • define(flag) / boolean(...) / string(...) / string_list(...)
  • lookup(name) / lookup_short(char)
  • positionals (Positionals) with arbitrary_leading() / mandatory(n) shortcuts
  • parse(tokens) → Result (at most once per flag set)

Validation highlights
- Long names must be non-empty, must not start with '-', and must not contain '=' or whitespace.
- Shorthands are empty or exactly one character that is not '-', '=' or a digit.
- Defining the first flag locks the positional policy.

Presentation options
- name: program name used in usage and fault headers (Unset → __main__.__prog__ / argv[0]).
- helper: install the reserved 'help' flag (and '-h' when free) at parse time.
- shell/fancy/colorful: how runner.invoke() surfaces faults and usage.

Quick example:
    >>> flags = FlagSet("lint")
    >>> flags.mandatory(2)
    >>> verbose = flags.boolean("verbose", "v", usage="chatty output")
    >>> exts = flags.string_list("ext", "e", usage="extensions to check")
    >>> result = flags.parse(["src", "out", "-v", "-e", "go", "py"])
    >>> result.args, exts.get()
    (('src', 'out'), ('go', 'py'))
"""
import logging
import re

from .faults import *
from .parser import Parser, HELP
from .policy import Positionals
from .utils import *
from .values import *

logger = logging.getLogger(__name__)


def _sanitize_identity(name, shorthand, /):
    """
    Internal: validate a flag's long name and shorthand.

    Raises
    - TypeError: when either is not a string.
    - InvalidFlagError: when the spelling could never be typed unambiguously.
    """
    if not isinstance(name, str):
        raise TypeError("flag name must be a string")
    if not isinstance(shorthand, str):
        raise TypeError("flag shorthand must be a string")

    if not name:
        raise InvalidFlagError("flag name cannot be empty", name)
    if name.startswith("-"):
        raise InvalidFlagError("flag name %r must be given without leading dashes" % name, name)
    if re.search(r"[=\s]", name):
        raise InvalidFlagError("flag name %r cannot contain '=' or whitespace" % name, name)

    if len(shorthand) > 1:
        raise InvalidFlagError("flag shorthand must be one character: %r" % shorthand, name)
    if shorthand and (shorthand in "-=" or shorthand.isspace() or "0" <= shorthand <= "9"):
        raise InvalidFlagError("flag shorthand %r cannot be typed as a short flag" % shorthand, name)


class Flag:
    """
    State of one flag defined for the command line.

    The registry owns Flag records; the parser only mutates `changed` and the
    associated Value. Identity and metadata are exposed read-only.
    """

    __introspectable__ = (
        "name",
        "shorthand",
        "usage",
        "default",
        "greedy",
        "boolean",
    )

    name = mirror("name")
    shorthand = mirror("shorthand")
    usage = mirror("usage")
    default = mirror("default")
    value = mirror("value")

    def __init__(self, name, shorthand, value, /, usage=""):
        _sanitize_identity(name, shorthand)
        if not isinstance(value, Value):
            raise TypeError("flag value must implement Value")
        if not isinstance(usage, str):
            raise TypeError("flag usage must be a string")

        self._name = name
        self._shorthand = shorthand
        self._value = value
        self._usage = usage.strip()
        self._default = value.render()
        self.changed = False

    @property
    def greedy(self):
        return isinstance(self._value, StringListValue)

    @property
    def boolean(self):
        return isinstance(self._value, BooleanValue)

    def get(self):
        """
        Shortcut for flag.value.get().
        """
        return self._value.get()

    def __repr__(self):
        return "flag(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


class FlagSet:
    """
    Registry of flags together with the positional policy they are parsed under.

    Each call site builds its own FlagSet; there is no process-wide registry.
    A FlagSet is configured, parsed once, and then read through its Result.
    """

    def __init__(self, name=Unset, /, *, helper=True, shell=False, fancy=False, colorful=True):
        if not isinstance(name, str | Unset):
            raise TypeError("FlagSet() name must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError("FlagSet() name cannot be empty")

        self._name = name
        self._flags = {}
        self._shorts = {}
        self._positionals = Positionals()
        self._result = Unset
        self._started = False

        self.helper = bool(helper)
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)

    @property
    def name(self):
        """
        Program name; falls back to __main__.__prog__ or argv[0] when not given.
        """
        return coalesce(self._name, progname())

    @property
    def positionals(self):
        return self._positionals

    @property
    def parsed(self):
        return self._started

    @property
    def result(self):
        """
        The Result of the (single) parse; None before parse() succeeded.
        """
        return coalesce(self._result)

    # --- positional policy shortcuts ---

    def arbitrary_leading(self):
        self._positionals.arbitrary_leading()

    def mandatory(self, count, /):
        self._positionals.mandatory(count)

    # --- definition ---

    def define(self, flag, /):
        """
        Register a flag; the first registration locks the positional policy.

        Raises DuplicateFlagError / DuplicateShorthandError on identity clashes.
        """
        if not isinstance(flag, Flag):
            raise TypeError("define() argument must be a Flag")
        if flag.name in self._flags:
            raise DuplicateFlagError(flag.name)
        if flag.shorthand and (owner := self._shorts.get(flag.shorthand)) is not None:
            raise DuplicateShorthandError(flag.shorthand, flag.name, owner.name)

        self._flags[flag.name] = flag
        if flag.shorthand:
            self._shorts[flag.shorthand] = flag
        self._positionals.lock()
        return flag

    def boolean(self, name, shorthand="", /, default=False, usage=""):
        """
        Define a boolean flag: '--name', '-n', '--name=false'; never consumes the next token.
        """
        return self.define(Flag(name, shorthand, BooleanValue(default), usage))

    def string(self, name, shorthand="", /, default="", usage=""):
        """
        Define a string flag taking exactly one value ('--name value', '--name=value', '-n value').
        """
        return self.define(Flag(name, shorthand, StringValue(default), usage))

    def string_list(self, name, shorthand="", /, default=(), usage=""):
        """
        Define a greedy string-list flag.

        '-e a b c' appends every following non-flag token until the next flag or '--';
        '-e=a' and '--ext=a' append exactly one value without starting a greedy run.
        """
        return self.define(Flag(name, shorthand, StringListValue(default), usage))

    def _install_helper(self):
        if not self.helper or HELP in self._flags:
            return
        flag = Flag(HELP, "" if "h" in self._shorts else "h", BooleanValue(False), "Display this help message")
        self._flags[HELP] = flag
        if flag.shorthand:
            self._shorts[flag.shorthand] = flag

    # --- lookup ---

    def lookup(self, name, /):
        return self._flags.get(name)

    def lookup_short(self, shorthand, /):
        return self._shorts.get(shorthand)

    def visit(self, function, /):
        """
        Call `function` for each flag supplied on the command line, in name order.
        """
        for flag in self:
            if flag.changed:
                function(flag)

    def visit_all(self, function, /):
        """
        Call `function` for every defined flag, in name order.
        """
        for flag in self:
            function(flag)

    def __iter__(self):
        return iter(sorted(self._flags.values(), key=lambda flag: flag.name))

    def __len__(self):
        return len(self._flags)

    def __contains__(self, name):
        return name in self._flags

    # --- parsing ---

    def parse(self, tokens, /):
        """
        Parse the argument tokens (program name excluded) and return a Result.

        Raises
        - ParseError subclasses on malformed input or positional mismatches.
        - HelpRequested when the reserved help flag is supplied.
        - AlreadyParsedError on a second call; values are never re-applied.
        """
        if self._started:
            raise AlreadyParsedError()
        if isinstance(tokens, str):
            raise TypeError("parse() argument must be an iterable of strings, not a string")
        tokens = list(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must only contain strings")

        self._started = True
        self._install_helper()
        self._result = Parser(self, tokens).run()
        logger.debug("parsed %d tokens into %r", len(tokens), self._result)
        return self._result

    def __repr__(self):
        return "FlagSet(name=%r, flags=%r, positionals=%r)" % (
            self.name, tuple(self._flags), self._positionals
        )


__all__ = (
    "Flag",
    "FlagSet",
)
