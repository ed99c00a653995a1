r"""
Pennant flag descriptors.

Overview
- Descriptors
  • BoolFlag: presence-only switch, `-name` sets the value to True.
  • UInt64Flag: unsigned 64-bit integer, `-name 42`.
  • StringFlag: free text, `-name value` (taken verbatim).

- Handles
  A descriptor is also the handle returned by FlagSet.declare_*(): it carries
  its own name next to its live value, so reading `handle.value` after parsing
  needs no lookup and `handle.name` needs no address arithmetic.

- Introspection & representation
  • FlagType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties.

Metadata (checked on construction)
- name: str, stored verbatim (no leading dash, contents are not validated).
- descr: str, stored verbatim.
- default: bool | int in [0, UINT64_MAX] | str depending on the kind.

Quick example:
    >>> verbose = BoolFlag("verbose", False, "Print more")
    >>> verbose.name, verbose.value
    ('verbose', False)
"""
import functools
import operator
import re
from enum import Enum

from .utils import *

UINT64_MAX = 2 ** 64 - 1


class FlagKind(Enum):
    BOOL = "bool"
    UINT64 = "uint64"
    STRING = "string"


class FlagType(type):
    """
    Metaclass for flag descriptors.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens)
      unless the class sets one explicitly.
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_<name>" field.
    - Provide stable __repr__/__rich_repr__ driven by __displayable__ (falls
      back to __introspectable__).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | namespace | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Flag(metaclass=FlagType):
    """
    Base descriptor: one declared flag and its live value.

    Subclasses set `kind` and implement `_check_default`. The value is only
    written by the owning FlagSet while parsing; callers read it through the
    `value` property.
    """

    kind = Unset

    __introspectable__ = (
        "name",
        "descr",
        "default",
    )

    __displayable__ = (
        "name",
        "value",
        "default",
        "descr",
    )

    def __new__(cls, name, default, descr, /):
        if cls.kind is Unset:
            raise TypeError(f"{cls.__typename__} cannot be instantiated directly")
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        if not isinstance(descr, str):
            raise TypeError(f"{cls.__typename__} 'descr' must be a string")
        cls._check_default(default)

        self = super().__new__(cls)
        self._name = name
        self._descr = descr
        self._default = default
        self._value = default
        return self

    @classmethod
    def _check_default(cls, default, /):
        raise NotImplementedError

    @property
    def value(self):
        """
        Live value: the default until a parse assigns something else.
        """
        return self._value


class BoolFlag(Flag):
    kind = FlagKind.BOOL

    @classmethod
    def _check_default(cls, default, /):
        if not isinstance(default, bool):
            raise TypeError(f"{cls.__typename__} 'default' must be a boolean")


class UInt64Flag(Flag):
    kind = FlagKind.UINT64
    __typename__ = "uint64-flag"

    @classmethod
    def _check_default(cls, default, /):
        if not isinstance(default, int) or isinstance(default, bool):
            raise TypeError(f"{cls.__typename__} 'default' must be an integer")
        if not 0 <= default <= UINT64_MAX:
            raise ValueError(f"{cls.__typename__} 'default' must fit in an unsigned 64-bit integer")


class StringFlag(Flag):
    kind = FlagKind.STRING

    @classmethod
    def _check_default(cls, default, /):
        if not isinstance(default, str):
            raise TypeError(f"{cls.__typename__} 'default' must be a string")


__all__ = (
    "UINT64_MAX",
    "FlagKind",
    "Flag",
    "BoolFlag",
    "UInt64Flag",
    "StringFlag",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del FlagType
