"""
Positional argument policies.

A flag set tolerates positional (non-flag) tokens under exactly one policy:

- NONE: no positional tokens at all (the default).
- ARBITRARY_LEADING: zero or more tokens, but only before the first flag.
- MANDATORY_N: exactly n tokens, either all before the first flag or all after
  the last flag (or its values); never split between both.

The policy is chosen once, before the first flag is defined. Registering a flag
locks it; later changes are configuration errors.
"""
import logging
from enum import IntEnum

from .faults import PolicyLockedError, PolicyConflictError, NegativeCountError

logger = logging.getLogger(__name__)


class Mode(IntEnum):
    NONE = 0
    ARBITRARY_LEADING = 1
    MANDATORY_N = 2


class Positionals:
    """
    Configurator for the positional policy of one flag set.

    Attributes
    - mode: the selected Mode.
    - count: n for MANDATORY_N, otherwise None.
    - locked: True once the owning flag set has defined a flag.
    """
    __slots__ = ("_mode", "_count", "_locked")

    def __init__(self):
        self._mode = Mode.NONE
        self._count = None
        self._locked = False

    @property
    def mode(self):
        return self._mode

    @property
    def count(self):
        return self._count

    @property
    def locked(self):
        return self._locked

    def lock(self):
        self._locked = True

    def _select(self, mode):
        if self._locked:
            raise PolicyLockedError()
        if self._mode is not Mode.NONE and self._mode is not mode:
            raise PolicyConflictError(self._mode, mode)

    def none(self):
        """
        Accept no positional arguments (the default; calling it is optional).
        """
        self._select(Mode.NONE)
        self._mode = Mode.NONE
        self._count = None

    def arbitrary_leading(self):
        """
        Accept zero or more positional arguments before the first flag.
        """
        self._select(Mode.ARBITRARY_LEADING)
        self._mode = Mode.ARBITRARY_LEADING
        self._count = None
        logger.debug("positional policy set: arbitrary leading")

    def mandatory(self, count, /):
        """
        Require exactly `count` positional arguments, all leading or all trailing.
        """
        if not isinstance(count, int) or isinstance(count, bool):
            raise TypeError("mandatory() argument must be an integer")
        if count < 0:
            raise NegativeCountError(count)
        self._select(Mode.MANDATORY_N)
        self._mode = Mode.MANDATORY_N
        self._count = count
        logger.debug("positional policy set: mandatory %d", count)

    def __repr__(self):
        if self._mode is Mode.MANDATORY_N:
            return "Positionals(%s, %d)" % (self._mode.name.lower(), self._count)
        return "Positionals(%s)" % self._mode.name.lower()


__all__ = (
    "Mode",
    "Positionals",
)
