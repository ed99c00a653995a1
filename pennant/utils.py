"""
Pennant utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the flag descriptors, the registry and the
  fault types.

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not provided", distinct from None, False and "".

- coalesce(value, default=None)
  • Replace Unset with a concrete default, preserving legitimate falsey values.

- @rename("name")
  • Assign stable __name__/__qualname__ to generated methods.

- mirror("attr")
  • Read-only property over a private backing field (self._attr).

- printable(text)
  • Escape control characters so rendered text shows what was declared.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> printable("a\\tb")
    'a\\\\tb'
"""
import functools
from typing import final


@final
class UnsetType:
    """
    Sentinel type for a value that was not provided.

    Flags legitimately default to False, 0 or "", so the API needs a marker that
    cannot collide with any of them. A single instance, Unset, is exposed. It is
    falsy, prints as "Unset", and takes part in `str | Unset` unions.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __or__(self, other, /):
        return type(self) | other

    def __ror__(self, other, /):
        return other | type(self)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return `object`, or `default` when it is Unset.
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator giving a generated function a stable __name__/__qualname__.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def decorator(function):
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def mirror(name, /):
    """
    Read-only property over "_{name}". Lists come out as tuples.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        value = getattr(self, "_" + name)
        return tuple(value) if isinstance(value, list) else value

    return property(getter)


def printable(text, /):
    """
    Escape the non-printable characters of `text` the way repr() does.

    Rich expands tabs and drops control characters, so "a\\tb" or "\\r\\n"
    would otherwise render as something else than what was declared.
    """
    return "".join(char if char.isprintable() else repr(char)[1:-1] for char in text)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "printable",
)
