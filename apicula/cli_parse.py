"""Small command-line option parser.

Handles flags (``-x``, ``--x``) and options with arguments
(``-xfoo``, ``-x=foo``, ``-x foo``, ``--x=foo``, ``--x foo``).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from apicula.errors import NitroError

HELP_HINT = "Pass --help if you need help."


class UsageError(NitroError):
    """Raised for bad command-line usage; ``hint`` tells the user what to do."""

    def __init__(self, msg: str, hint: str = HELP_HINT) -> None:
        super().__init__(msg)
        self.hint = hint


@dataclass
class Args:
    """The result of parsing the command line."""

    subcommand: str = ""
    free_args: list[str] = field(default_factory=list)
    opt_args: list[tuple[str, str]] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)

    def get_opt(self, long: str) -> str | None:
        """Return the argument given to option ``--long``, if any."""
        return next((value for name, value in self.opt_args if name == long), None)


@dataclass(frozen=True)
class Opt:
    """A recognised option or flag."""

    short: str
    long: str
    flag: bool
    help: str


def _split(arg: str) -> tuple[str, str | None, bool]:
    """Split an option argument into (name, parameter, is_long)."""
    if arg.startswith("--"):
        name, sep, param = arg[2:].partition("=")
        return name, (param if sep else None), True
    name = arg[1:]
    if len(name) >= 2:
        if name[1] == "=":
            return name[0], name[2:], False
        return name[0], name[1:], False
    return name, None, False


def parse_opts(argv: Iterable[str], opts: Sequence[Opt], args: Args | None = None) -> Args:
    """Parse ``argv`` against ``opts``, accumulating into ``args``.

    Raises UsageError for unknown options, misplaced arguments and repeats.
    """
    if args is None:
        args = Args()
    it = iter(argv)
    for arg in it:
        if not arg.startswith("-"):
            args.free_args.append(arg)
            continue

        name, param, is_long = _split(arg)
        opt = next(
            (
                o for o in opts
                if (name == o.long if is_long else (o.short != "" and name == o.short))
            ),
            None,
        )
        if opt is None:
            raise UsageError(f"don't understand option {'--' if is_long else '-'}{name}")

        if opt.flag:
            if param is not None:
                raise UsageError(f"flag --{opt.long} doesn't take an argument")
            args.flags.append(opt.long)
            continue

        if param is None:
            param = next(it, None)
            if param is None:
                raise UsageError(f"expected an argument after --{opt.long}")
        if args.get_opt(opt.long) is not None:
            raise UsageError(f"you already passed --{opt.long}")
        args.opt_args.append((opt.long, param))
    return args