"""
Pennant faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the
  registry can produce. Codes are grouped by domain so they stay searchable.
- FlagException: base error carrying a message plus read-only options; it
  knows how to render itself through rich.
- FlagWarning: the same message and options, surfaced through str() by the
  warnings module.
- FlagError and its subclasses: the four parse failures. They are returned by
  FlagSet.parse() instead of being raised; ParseResult.check() raises them.
- CapacityExceededError: raised by declarations once a registry is full.
- DuplicateFlagWarning: emitted through the warnings module when a name is
  declared twice (the first declaration keeps winning lookups).

Rendering
- Every error implements __rich__, so rich consoles print it directly.
  Control characters are shown escaped, never expanded or dropped.
- The palette can be overridden by a __styles__ mapping defined in __main__.
- options["colorful"] (default True) toggles styling; copy.replace() is the
  supported way to derive an error with different options.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import Unset, coalesce, printable


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - parsing (111xx)
      • UNKNOWN_FLAG, NO_VALUE (1111x)
      • INVALID_NUMBER, INTEGER_OVERFLOW (1112x)
    - registration (112xx)
      • CAPACITY_EXCEEDED
    - warnings (12xxx)
      • DUPLICATED_FLAG
    """
    # --- parsing errors (111xx) ---
    UNKNOWN_FLAG      = 11111
    NO_VALUE          = 11112
    INVALID_NUMBER    = 11121
    INTEGER_OVERFLOW  = 11122

    # --- registration errors (112xx) ---
    CAPACITY_EXCEEDED = 11201

    # --- warnings (12xxx) ---
    DUPLICATED_FLAG   = 12111


def _stylesheet(colorful=True, /):
    """
    return a styler: palette key -> rich style string.

    the host application can override entries with a __styles__ mapping in
    __main__; unknown keys resolve to the empty style. when colorful is False
    every key resolves to the empty style.
    """
    styles = defaultdict(str, {
        # errors
        "error-label": "bold #FF4DA6",  # friendly pinky label
        "flag-name": "bold #00E5FF",  # neon cyan flag name
        "error-reason": "#C8C8D0",  # soft light gray reason
        "absurd": "italic #FFB400",  # amber, nothing is actually wrong

        # option listing
        "option-name": "bold #00E6FF",
        "option-description": "#9CA3AF",
        "default-label": "#737373",
        "default-value": "bold #FFD600",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


class FlagException(Exception):
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        styler = _stylesheet(self.options.get("colorful", True))
        return Text.assemble(("ERROR", styler("error-label")), ": ", (printable(self.message), styler("error-reason")))

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class FlagError(FlagException):
    """
    a parse failure tied to one offending flag.

    the message is always derived from the flag name and the class reason:
    "-<name>: <reason>". the name is given without its leading dash.
    """
    reason = "flag error"

    def __init__(self, /, **options):
        if not isinstance(name := options.get("name"), str):
            raise TypeError(f"{type(self).__name__} 'name' must be a string")
        super().__init__("-%s: %s" % (name, self.reason), **options)

    @property
    def name(self):
        return self.options["name"]

    def __rich__(self):
        styler = _stylesheet(self.options.get("colorful", True))
        return Text.assemble(
            ("ERROR", styler("error-label")),
            ": ",
            ("-" + printable(self.name), styler("flag-name")),
            ": ",
            (self.reason, styler("error-reason")),
        )

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(**{**self.options, **overrides})


class UnknownFlagError(FlagError):
    code = FaultCode.UNKNOWN_FLAG
    reason = "unknown flag"


class NoValueError(FlagError):
    code = FaultCode.NO_VALUE
    reason = "no value provided"


class InvalidNumberError(FlagError):
    code = FaultCode.INVALID_NUMBER
    reason = "invalid number"


class IntegerOverflowError(FlagError):
    code = FaultCode.INTEGER_OVERFLOW
    reason = "integer overflow"


class CapacityExceededError(FlagException):
    code = FaultCode.CAPACITY_EXCEEDED


class FlagWarning(Warning):
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message


class DuplicateFlagWarning(FlagWarning):
    code = FaultCode.DUPLICATED_FLAG


__all__ = (
    "FaultCode",
    "FlagException",
    "FlagError",
    "UnknownFlagError",
    "NoValueError",
    "InvalidNumberError",
    "IntegerOverflowError",
    "CapacityExceededError",
    "FlagWarning",
    "DuplicateFlagWarning",
)
