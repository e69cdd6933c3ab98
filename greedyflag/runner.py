"""
Process-level runner: acquire the argument vector, parse it, and surface the outcome.

This is where CLI-facing behavior lives (printing to stderr, exit codes). The parser
itself only raises; invoke() decides, per the flag set's `shell` option, whether a
fault is re-raised to the caller or rendered with rich and turned into an exit status:
- HelpRequested → usage printed, exit status 0
- any other fault → fault printed, exit status 2
"""
import logging
import shlex
import sys
from collections.abc import Iterable

from rich.logging import RichHandler

from .faults import GreedyFlagException, HelpRequested, trigger
from .usage import render
from .utils import *

logger = logging.getLogger(__package__)


def tokenize(prompt=Unset, /):
    """
    Normalize a prompt into a list of tokens.

    - Unset: read tokens from sys.argv[1:].
    - str: shell-like string; split via shlex.split.
    - Iterable[str]: pre-tokenized sequence, taken as-is (empty strings are kept,
      they are legitimate values).

    Raises
    - TypeError: when prompt is not Unset/str/Iterable[str].
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("tokenize() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("tokenize() argument must be a string or an iterable of strings")


def trace(level=logging.DEBUG, /):
    """
    Attach a RichHandler to the package logger so parser transitions are visible.
    """
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(show_path=False, markup=False))
    logger.setLevel(level)


def invoke(flagset, prompt=Unset, /, *, debug=False):
    """
    Parse `prompt` (default: sys.argv[1:]) with `flagset` and return the Result.

    Outside shell mode every fault propagates to the caller unchanged. In shell mode
    (FlagSet(shell=True)) faults are printed and the process exits.
    """
    if debug:
        trace()

    tokens = tokenize(prompt)
    try:
        return flagset.parse(tokens)
    except HelpRequested as fault:
        trigger(
            fault,
            shell=flagset.shell,
            usage=render(flagset),
        )
    except GreedyFlagException as fault:
        trigger(
            fault,
            shell=flagset.shell,
            prog=flagset.name,
            fancy=flagset.fancy,
            colorful=flagset.colorful,
        )


__all__ = (
    "tokenize",
    "trace",
    "invoke",
)
