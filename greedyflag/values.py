r"""
Greedyflag values (the payload behind every flag).

Overview
- Value: abstract contract with exactly two operations the parser relies on:
  • set(token)  → absorb one raw command-line token (may raise ValueError)
  • render()    → textual form used for defaults in help output
- Variants (closed, documented set)
  • BooleanValue: canonical truthy/falsy spellings only.
  • StringValue: replaces the stored text on every set.
  • StringListValue: appends on every set; backs greedy flags.

Extension
- New scalar kinds subclass Value. The parser treats anything that is neither
  a BooleanValue nor a StringListValue as a scalar (exactly one value token).

Quick example:
    >>> value = StringListValue(["go"])
    >>> value.set("mod")
    >>> value.render()
    '[go,mod]'
"""
from abc import ABC, abstractmethod

from rich.text import Text

_TRUTHY = frozenset(("1", "t", "T", "true", "True", "TRUE", "y", "Y", "yes", "Yes", "YES", "on", "On", "ON"))
_FALSY = frozenset(("0", "f", "F", "false", "False", "FALSE", "n", "N", "no", "No", "NO", "off", "Off", "OFF"))


class InvalidBooleanError(ValueError):
    """
    Raised when a token is not one of the canonical boolean spellings.
    """

    def __init__(self, token):
        super().__init__("invalid boolean value %r" % token)
        self.token = token


class Value(ABC):
    """
    Contract for flag payloads.

    Implementations keep their state privately and mutate it only through set().
    They never touch the owning flag; marking a flag as changed is the parser's job.
    """
    __slots__ = ("_value",)

    @abstractmethod
    def set(self, token, /):
        """
        Absorb one raw token; raise ValueError (or a subclass) when it cannot be converted.
        """

    @abstractmethod
    def render(self):
        """
        Return the textual rendering of the current state.
        """

    def get(self):
        """
        Return the current state as a plain Python object.
        """
        return self._value

    def __str__(self):
        return self.render()

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, self.render())

    def __rich__(self):
        return Text(self.render(), style="bold")


class BooleanValue(Value):
    __slots__ = ()

    def __init__(self, default=False, /):
        if not isinstance(default, bool):
            raise TypeError("BooleanValue() default must be a bool")
        self._value = default

    def set(self, token, /):
        if token in _TRUTHY:
            self._value = True
        elif token in _FALSY:
            self._value = False
        else:
            raise InvalidBooleanError(token)

    def render(self):
        return "true" if self._value else "false"


class StringValue(Value):
    __slots__ = ()

    def __init__(self, default="", /):
        if not isinstance(default, str):
            raise TypeError("StringValue() default must be a string")
        self._value = default

    def set(self, token, /):
        self._value = token

    def render(self):
        return self._value


class StringListValue(Value):
    """
    Ordered collection of strings backing a greedy flag.

    Invariants
    - set() appends exactly one element and never clears or replaces the list.
    - The default is copied on construction, so callers' lists are never shared.
    - get() returns a tuple snapshot; insertion order is preserved.
    """
    __slots__ = ()

    def __init__(self, default=(), /):
        if isinstance(default, str):
            raise TypeError("StringListValue() default must be an iterable of strings, not a string")
        self._value = list(default)
        if not all(isinstance(item, str) for item in self._value):
            raise TypeError("StringListValue() default must only contain strings")

    def set(self, token, /):
        self._value.append(token)

    def render(self):
        return "[" + ",".join(self._value) + "]"

    def get(self):
        return tuple(self._value)

    def __len__(self):
        return len(self._value)


__all__ = (
    "InvalidBooleanError",
    "Value",
    "BooleanValue",
    "StringValue",
    "StringListValue",
)
