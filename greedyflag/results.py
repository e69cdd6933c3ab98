"""
Read-only view over the outcome of a parse.

A Result pairs the final positional vector with the flag set whose values were
mutated by the parser. It never mutates anything itself.
"""
from rich.table import Table
from rich.text import Text


class Result:
    __slots__ = ("_flagset", "_args")

    def __init__(self, flagset, args, /):
        self._flagset = flagset
        self._args = tuple(args)

    @property
    def args(self):
        """
        The positional arguments matched under the flag set's positional policy.
        """
        return self._args

    @property
    def narg(self):
        return len(self._args)

    def arg(self, index, /):
        """
        Return the index-th positional argument (0-based); IndexError when out of range.
        """
        return self._args[index]

    def changed(self, name, /):
        """
        True when the flag with this long name was supplied on the command line.

        Raises KeyError for names that were never defined.
        """
        if (flag := self._flagset.lookup(name)) is None:
            raise KeyError(name)
        return flag.changed

    def visit(self, function, /):
        """
        Call `function` for every flag set on the command line, in name order.
        """
        self._flagset.visit(function)

    def __getitem__(self, name):
        if (flag := self._flagset.lookup(name)) is None:
            raise KeyError(name)
        return flag.get()

    def __iter__(self):
        return iter(self._args)

    def __len__(self):
        return len(self._args)

    def __repr__(self):
        return "Result(args=%r, changed=%r)" % (
            self._args, tuple(flag.name for flag in self._flagset if flag.changed)
        )

    def __rich__(self):
        # user tokens may contain brackets, so cells are Text rather than markup
        table = Table(title=Text("positionals: %s" % (" ".join(self._args) or "(none)")), title_justify="left")
        table.add_column("flag")
        table.add_column("value")
        table.add_column("changed")
        for flag in self._flagset:
            table.add_row(Text("--" + flag.name), Text(flag.value.render()), "yes" if flag.changed else "no")
        return table


__all__ = (
    "Result",
)
