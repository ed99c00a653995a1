"""
Pennant registry: declare flags, parse argv, report the outcome.

What this module provides
- FlagSet: an explicit registry of flag descriptors with
  • declare_bool / declare_uint64 / declare_string: append a descriptor and
    return it as the live handle.
  • nameof(handle): recover a handle's flag name.
  • parse(args): single left-to-right pass over argv, fail-fast.
  • rest / rest_count / error / last_result: post-parse queries.
  • print_options(stream) / print_error(stream): rich-rendered diagnostics.
- ParseResult: the value returned by parse(), truthy on success.

Token grammar
- `-<name>`  a bool flag, or a string/uint64 flag followed by one value token.
- `--`       end of flags; everything after it is positional.
- anything not starting with `-` is the first positional; scanning stops and
  that token opens the residual arguments.

Quick start
    from pennant import FlagSet

    flags = FlagSet()
    verbose = flags.declare_bool("verbose", False, "Print more")
    count = flags.declare_uint64("count", 1, "How many times")

    result = flags.parse(["prog", "-verbose", "-count", "3", "file.txt"])
    if not result:
        flags.print_options(sys.stderr)
        flags.print_error(sys.stderr)
        sys.exit(1)
    verbose.value, count.value, result.rest  # True, 3, ('file.txt',)

Design notes
- There is no process-wide state: every FlagSet owns its descriptors.
- Values are never reset between parses; a second parse simply overwrites.
- Parse failures are returned, not raised. Declaring past capacity raises
  CapacityExceededError.
"""
import copy
import re
import sys
import warnings
from collections import deque
from collections.abc import Iterable
from typing import NamedTuple

from rich.console import Console
from rich.text import Text

from .faults import *
from .faults import _stylesheet
from .flags import *
from .utils import *

DEFAULT_CAPACITY = 256

# strtoull-style base-10 digits, restricted to ASCII (str.isdigit() would accept other scripts)
_NUMBER = re.compile(r"\+?[0-9]+")

_ABSURD = (
    "Operation Failed Successfully! "
    "Please tell the developer of this software that they don't know what they are doing! :)"
)


class ParseResult(NamedTuple):
    """
    outcome of FlagSet.parse().

    - rest: residual (positional) arguments; empty when parsing failed.
    - error: the first FlagError hit, or None on success.

    the result is truthy on success, so `if not flags.parse(argv): ...` reads
    naturally.
    """
    rest: tuple[str, ...] = ()
    error: FlagError | None = None

    def __bool__(self):
        return self.error is None

    @property
    def ok(self):
        return self.error is None

    def check(self):
        """
        return the residual arguments, or raise the parse error.
        """
        if self.error is not None:
            raise self.error
        return self.rest


class FlagSet:
    """
    Ordered, bounded registry of flag descriptors plus the parser over them.

    Parameters
    - capacity: int
      Maximum number of declarations (default 256). Declaring past it raises
      CapacityExceededError and leaves the registry untouched.
    - colorful: bool
      When False, diagnostics are printed without any styling.

    Lookup
    - Names are matched exactly, first declaration first. Declaring a name
      twice is allowed (a DuplicateFlagWarning is emitted) and the later
      declaration is unreachable from the command line.
    """

    capacity = mirror("capacity")
    colorful = mirror("colorful")
    flags = mirror("flags")

    def __init__(self, *, capacity=DEFAULT_CAPACITY, colorful=True):
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise TypeError("FlagSet 'capacity' must be an integer")
        if capacity < 0:
            raise ValueError("FlagSet 'capacity' cannot be negative")

        self._capacity = capacity
        self._colorful = bool(colorful)
        self._flags = []
        self._result = ParseResult()

    def __len__(self):
        return len(self._flags)

    def __iter__(self):
        return iter(tuple(self._flags))

    def __repr__(self):
        return "flag-set(flags=%r, capacity=%r)" % (tuple(flag.name for flag in self._flags), self._capacity)

    def _declare(self, cls, name, default, descr):
        if len(self._flags) >= self._capacity:
            raise CapacityExceededError(
                "cannot declare -%s: the flag set is full (capacity %d)" % (name, self._capacity),
                name=name,
                capacity=self._capacity,
            )

        flag = cls(name, default, descr)

        if self.lookup(name) is not None:
            warnings.warn(DuplicateFlagWarning(
                "-%s is already declared; the first declaration keeps precedence" % name,
                name=name,
            ), stacklevel=3)

        self._flags.append(flag)
        return flag

    def declare_bool(self, name, default, descr):
        """
        Declare a bool flag; `-name` on the command line sets it to True.
        """
        return self._declare(BoolFlag, name, default, descr)

    def declare_uint64(self, name, default, descr):
        """
        Declare an unsigned 64-bit flag; `-name N` on the command line.
        """
        return self._declare(UInt64Flag, name, default, descr)

    def declare_string(self, name, default, descr):
        """
        Declare a string flag; `-name TEXT` on the command line.
        """
        return self._declare(StringFlag, name, default, descr)

    def lookup(self, name, /):
        """
        Return the first descriptor declared under `name`, or None.
        """
        for flag in self._flags:
            if flag.name == name:
                return flag
        return None

    def nameof(self, handle, /):
        """
        Return the flag name behind a handle returned by a declare_* method.

        Raises
        - ValueError: when the handle was not declared on this set.
        """
        if not any(flag is handle for flag in self._flags):
            raise ValueError("nameof() argument must be a handle declared on this flag set")
        return handle.name

    @property
    def last_result(self):
        return self._result

    @property
    def rest(self):
        """
        Residual arguments of the last parse (empty if it failed).
        """
        return self._result.rest

    @property
    def rest_count(self):
        return len(self._result.rest)

    @property
    def error(self):
        """
        Error of the last parse, or None.
        """
        return self._result.error

    def parse(self, args=Unset, /):
        """
        Parse argv-like tokens against the declared flags.

        Parameters
        - args: Unset | Iterable[str]
          • Unset: read sys.argv.
          • Iterable[str]: args[0] is the program name and is always skipped.

        Returns
        - ParseResult, also kept as last_result.

        Raises
        - TypeError: when args is a plain string or holds non-string items.
        - ValueError: when args is empty (no program name to skip).
        """
        if args is Unset:
            args = sys.argv
        elif isinstance(args, str) or not isinstance(args, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")

        tokens = deque(args)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be an iterable of strings")
        if not tokens:
            raise ValueError("parse() argument must start with the program name")

        tokens.popleft()
        self._result = self._parseargs(tokens)
        return self._result

    def _parseargs(self, tokens):
        """
        the parsing loop proper; tokens excludes the program name.

        invariants
        - every token is consumed at most once, strictly left to right.
        - flags applied before a failing token stay applied; the failing token
          and everything after it are dropped.
        """
        while tokens:
            token = tokens.popleft()

            if not token.startswith("-"):
                # put it back: the first positional opens the residual arguments
                tokens.appendleft(token)
                return ParseResult(tuple(tokens))

            if token == "--":
                return ParseResult(tuple(tokens))

            if (flag := self.lookup(name := token[1:])) is None:
                return ParseResult(error=UnknownFlagError(name=name))

            match flag.kind:
                case FlagKind.BOOL:
                    flag._value = True  # NOQA: written by the owning set only
                case FlagKind.STRING:
                    if not tokens:
                        return ParseResult(error=NoValueError(name=name))
                    flag._value = tokens.popleft()  # NOQA: written by the owning set only
                case FlagKind.UINT64:
                    if not tokens:
                        return ParseResult(error=NoValueError(name=name))
                    try:
                        flag._value = _parse_uint64(tokens.popleft())  # NOQA: written by the owning set only
                    except FlagError as error:
                        return ParseResult(error=copy.replace(error, name=name))
                case _:
                    raise RuntimeError("unexpected flag kind")

        return ParseResult()

    def _console(self, stream):
        options = {
            "soft_wrap": True,
            "highlight": False,
            "markup": False,
            "emoji": False,
        }
        if not self._colorful:
            options["color_system"] = None
        if stream is Unset:
            return Console(stderr=True, **options)
        return Console(file=stream, **options)

    def print_options(self, stream=Unset, /):
        """
        List every declared flag, in declaration order, on `stream` (stderr by default).

        Layout
            -<name>
                <descr>
                Default: <default>

        The Default line is printed for uint64 flags always, for bool flags only
        when the default is true, and for string flags only when non-empty.
        Non-printable characters in names, descriptions and defaults are shown
        escaped ("\\t", "\\r\\n"), never expanded or dropped.
        """
        console = self._console(stream)
        styler = _stylesheet(self._colorful)

        for flag in self._flags:
            match flag.kind:
                case FlagKind.BOOL:
                    default = "true" if flag.default else Unset
                case FlagKind.UINT64:
                    default = "%d" % flag.default
                case FlagKind.STRING:
                    default = printable(flag.default) or Unset
                case _:
                    raise RuntimeError("unexpected flag kind")

            console.print(Text.assemble("    ", ("-" + printable(flag.name), styler("option-name"))))
            console.print(Text.assemble("        ", (printable(flag.descr), styler("option-description"))))
            if default is not Unset:
                console.print(Text.assemble(
                    "        ",
                    ("Default:", styler("default-label")),
                    " ",
                    (default, styler("default-value")),
                ))

    def print_error(self, stream=Unset, error=Unset, /):
        """
        Print one error line on `stream` (stderr by default).

        The error defaults to the one from the last parse. Asking for it when
        nothing failed prints a deliberately absurd line instead.
        """
        error = coalesce(error, self.error)
        console = self._console(stream)

        if error is None:
            console.print(Text(_ABSURD, style=_stylesheet(self._colorful)("absurd")))
            return
        if not isinstance(error, FlagException):
            raise TypeError("print_error() error must be a flag exception")

        console.print(copy.replace(error, colorful=self._colorful))


def _parse_uint64(token, /):
    """
    convert a value token into an unsigned 64-bit integer.

    the whole token must be base-10 digits with at most one leading '+';
    whitespace, signs other than '+', underscores and radix prefixes are
    rejected. raises InvalidNumberError / IntegerOverflowError with an empty
    name, the caller fills the real one in.
    """
    if not _NUMBER.fullmatch(token):
        raise InvalidNumberError(name="")
    # leading zeros do not count towards the 20-digit bound
    digits = token.lstrip("+").lstrip("0") or "0"
    if len(digits) > len(str(UINT64_MAX)) or (number := int(digits)) > UINT64_MAX:
        raise IntegerOverflowError(name="")
    return number


__all__ = (
    "DEFAULT_CAPACITY",
    "ParseResult",
    "FlagSet",
)
