r"""
Greedyflag token-processing state machine.

One synchronous left-to-right pass over the token vector:

phases
- A (MANDATORY_N only): leading attempt. Collect non-flag tokens from the start; when
  exactly n of them precede the first flag (or make up the whole input), they are
  committed as the positional result and removed from the stream.
- B: main pass with one token of lookahead.
  1. after '--' every token goes to the trailing buffer.
  2. '--' terminates flag interpretation and clears the active greedy flag.
  3. a non-flag token while a greedy flag is active is appended to it.
  4. a flag token while a greedy flag is active interrupts it (not consumed).
  5. flag tokens dispatch on their form: '--name[=value]', '-x=value', '-xyz'.
  6. any other non-flag token is classified under the positional policy.
- C: finalization. The leading/trailing collections are reconciled per policy.

flag-likeness
- a token looks like a flag iff it starts with '-', is longer than one character,
  and is not an optionally-signed decimal integer. '-5' is a value; '-' is a value.

atomicity
- a short cluster is fully resolved and validated before any flag is touched,
  so a rejected token leaves every flag as it was.
"""
import difflib
import logging
import re
from collections import deque

from .faults import *
from .policy import Mode
from .results import Result

logger = logging.getLogger(__name__)

TERMINATOR = "--"
HELP = "help"

_INTEGER = re.compile(r"-?[0-9]+")


def is_integer(token, /):
    """
    True when the token is an optionally-signed decimal integer ('42', '-7').
    """
    return _INTEGER.fullmatch(token) is not None


def looks_like_flag(token, /):
    """
    True when the token should be interpreted as a flag rather than a value.
    """
    return token.startswith("-") and len(token) > 1 and not is_integer(token)


class Parser:
    """
    Transient parser state for a single pass over one flag set.

    attributes
    - active: the greedy flag currently absorbing values, or None.
    - flags_seen: flips to True at the first flag token (or a committed leading run).
    - committed: True when the MANDATORY_N leading attempt succeeded.
    - terminated: True once '--' was consumed.
    - leading / strays / trailing: positional collections reconciled at the end.
      strays holds non-flag tokens seen before any flag under MANDATORY_N when the
      leading attempt failed; they are never counted as trailing positionals.
    """

    def __init__(self, flagset, tokens, /):
        self.flagset = flagset
        self.tokens = tuple(tokens)
        self.mode = flagset.positionals.mode
        self.count = flagset.positionals.count

        self.active = None
        self.flags_seen = False
        self.committed = False
        self.terminated = False

        self.leading = []
        self.strays = []
        self.trailing = []

        self._queue = deque()

    def run(self):
        """
        Execute phases A, B and C; return a Result over the positional tuple.
        """
        offset = self._lead()
        self._queue.extend(enumerate(self.tokens[offset:], start=offset + 1))

        while self._queue:
            index, token = self._queue.popleft()
            logger.debug("parsing token %r at %d (greedy active: %s)", token, index, self.active is not None)

            if self.terminated:
                self.trailing.append(token)
                continue

            if token == TERMINATOR:
                logger.debug("flag parsing stopped by terminator '--'")
                self.terminated = True
                self.active = None
                continue

            flaglike = looks_like_flag(token)

            if self.active is not None:
                if not flaglike:
                    logger.debug("consumed %r by greedy flag %r", token, self.active.name)
                    self._assign(self.active, "--" + self.active.name, token, index)
                    continue
                logger.debug("greedy flag %r interrupted by %r", self.active.name, token)
                self.active = None

            if flaglike:
                self.flags_seen = True
                if token.startswith("--"):
                    self._long(token, index)
                else:
                    self._short(token, index)
            else:
                self._positional(token, index)

        return Result(self.flagset, self._finalize())

    # --- phase A ---

    def _lead(self):
        if self.mode is not Mode.MANDATORY_N:
            return 0

        collected = []
        for token in self.tokens:
            if looks_like_flag(token):
                break
            collected.append(token)

        # collection stops at the first flag or at the end, so a length match means
        # the run is immediately followed by a flag or is the whole input
        if len(collected) != self.count:
            logger.debug("mandatory leading positionals not matched (needed %d, found %d before a flag)",
                         self.count, len(collected))
            return 0

        logger.debug("found %d mandatory leading positionals: %r", self.count, collected)
        self.leading = collected
        self.committed = True
        self.flags_seen = True
        return self.count

    # --- phase B ---

    def _long(self, token, index):
        name, separator, value = token[2:].partition("=")
        input = "--" + name
        inline = bool(separator)

        if name == HELP and self.flagset.helper:
            raise HelpRequested(input)

        if (flag := self.flagset.lookup(name)) is None:
            raise UnknownFlagError(token, input, index=index, suggestions=[
                "--" + match for match in difflib.get_close_matches(name, [other.name for other in self.flagset], 3)
            ])

        if flag.boolean:
            self._assign(flag, input, value if inline else "true", index)
        elif flag.greedy:
            if inline:
                self._assign(flag, input, value, index)
            else:
                self.active = flag
                logger.debug("greedy mode activated for %r", flag.name)
        else:
            self._assign(flag, input, value if inline else self._take(flag, input, index), index)
        flag.changed = True

    def _short(self, token, index):
        body = token[1:]

        if "=" in body:
            shorthand, _, value = body.partition("=")
            if len(shorthand) != 1:
                raise MalformedFlagError(token, index=index)
            flag = self._resolve(shorthand, token, index)
            input = "-" + shorthand
            if flag.boolean:
                raise BooleanWithValueError(flag, input, value, index=index)
            # inline values never activate greedy scanning
            self._assign(flag, input, value, index)
            flag.changed = True
            return

        *heads, last = [self._resolve(shorthand, token, index) for shorthand in body]
        for flag in heads:
            if not flag.boolean:
                raise CombinedNonBooleanError(flag, token, index=index)

        input = "-" + last.shorthand
        if not last.boolean and not last.greedy:
            value = self._take(last, input, index)

        for flag in heads:
            self._assign(flag, "-" + flag.shorthand, "true", index)
            flag.changed = True

        if last.boolean:
            self._assign(last, input, "true", index)
        elif last.greedy:
            self.active = last
            logger.debug("greedy mode activated for %r", last.name)
        else:
            self._assign(last, input, value, index)
        last.changed = True

    def _resolve(self, shorthand, token, index):
        if (flag := self.flagset.lookup_short(shorthand)) is None:
            raise UnknownFlagError(token, "-" + shorthand, index=index)
        if flag.name == HELP and self.flagset.helper:
            raise HelpRequested("-" + shorthand)
        return flag

    def _take(self, flag, input, index):
        """
        Consume the next whole token as the value of a scalar flag.
        """
        if not self._queue or self._queue[0][1] == TERMINATOR or looks_like_flag(self._queue[0][1]):
            raise MissingArgumentError(flag, input, index=index)
        return self._queue.popleft()[1]

    def _assign(self, flag, input, value, index):
        try:
            flag.value.set(value)
        except ValueError as error:
            raise InvalidValueError(flag, input, value, str(error), index=index) from error

    def _positional(self, token, index):
        match self.mode:
            case Mode.ARBITRARY_LEADING if not self.flags_seen:
                logger.debug("collected leading positional %r", token)
                self.leading.append(token)
            case Mode.MANDATORY_N if not self.committed:
                if self.flags_seen:
                    logger.debug("buffering potential trailing positional %r", token)
                    self.trailing.append(token)
                else:
                    logger.debug("leading positional %r outside a matched run", token)
                    self.strays.append(token)
            case Mode.NONE:
                self.trailing.append(token)
            case _:
                raise UnexpectedArgumentError((token,), index=index)

    # --- phase C ---

    def _finalize(self):
        match self.mode:
            case Mode.NONE:
                if self.leading or self.trailing:
                    raise UnexpectedArgumentError(self.leading + self.trailing)
                logger.debug("no positional arguments allowed or found")
                return ()

            case Mode.ARBITRARY_LEADING:
                if self.trailing:
                    raise TrailingArgumentsError(self.trailing)
                logger.debug("arbitrary leading positionals: %r", self.leading)
                return tuple(self.leading)

            case Mode.MANDATORY_N if self.committed:
                if self.trailing:
                    raise SplitPositionalsError(self.leading, self.trailing)
                logger.debug("mandatory leading positionals: %r", self.leading)
                return tuple(self.leading)

            case Mode.MANDATORY_N:
                # compared against the full count, regardless of any stray leading tokens
                if len(self.trailing) != self.count:
                    raise CountMismatchError(self.count, len(self.trailing), self.trailing)
                if self.strays:
                    if not self.trailing:
                        raise UnexpectedArgumentError(self.strays)
                    raise SplitPositionalsError(self.strays, self.trailing)
                logger.debug("mandatory trailing positionals: %r", self.trailing)
                return tuple(self.trailing)


def parse(flagset, tokens, /):
    """
    Parse `tokens` against `flagset` and return a Result.

    - tokens: iterable of strings, excluding the program name.
    - raises ParseError subclasses on malformed input and HelpRequested on '--help'/'-h'.
    - a flag set parses at most once (AlreadyParsedError afterwards).
    """
    return flagset.parse(tokens)


__all__ = (
    "Parser",
    "parse",
    "looks_like_flag",
    "is_integer",
    "TERMINATOR",
)
