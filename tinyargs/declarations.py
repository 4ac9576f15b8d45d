"""
tinyargs argument declarations.

Overview
- Kind: what a declaration expects on the command line.
  • Kind.FLAG: presence-only switch (e.g., -h/--help).
  • Kind.VALUE: key/value option that consumes the following token (e.g., -n NAME).
  The member value doubles as the help label ("Flag" / "Key=Value").

- Declaration: one declared argument plus its parse state.
  • short / long: the two alternative tokens that identify it (either may be None).
  • kind / required / descr: declaration metadata.
  • set / value: parse state, mutated only by the owning registry.

Introspection & representation
- DeclarationType metaclass provides stable __repr__/__rich_repr__ and exposes
  every field listed in __introspectable__ through a read-only property.

Validation highlights
- Names must be strings or None. They are matched byte-for-byte, so they are
  neither trimmed nor pattern-checked.
- kind must be a Kind member; descr must be a string or a rich Text.
- A declaration without names is legal; it never matches and help skips it.

Quick example:
    >>> from tinyargs.declarations import Declaration, Kind
    >>> declaration = Declaration("-n", "--name", Kind.VALUE, required=True, descr="who to greet")
    >>> declaration.matches("--name")
    True
"""
import enum
import functools
import operator
import re

from rich.text import Text

from .utils import *


class Kind(enum.Enum):
    """
    Declaration kinds; the value is the label shown in help output.
    """
    FLAG = "Flag"
    VALUE = "Key=Value"

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


class DeclarationType(type):
    """
    Metaclass that turns declaration classes into introspectable records.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens)
      for use in messages.
    - Expose every name listed in __introspectable__ as a read-only property
      backed by "_{name}".
    - Provide stable __repr__/__rich_repr__ implementations.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - declaration(short='-h', long='--help', kind=Kind.FLAG, ...)
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate the short/long names of a declaration.

    Both are optional. Any string (including an empty one) is accepted as-is
    because tokens are compared exactly; only the type is enforced.

    Raises
    - TypeError: when a name is neither a string nor None.
    """
    for field in ("short", "long"):
        if not isinstance(metadata[field], str | None):
            raise TypeError(f"{cls.__typename__} {field!r} name must be a string")


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize kind/required/descr.

    - kind: must be a Kind member.
    - required: coerced to bool (a required flag is legal but unusual).
    - descr: string or rich Text; None and a missing description become an empty string.
    """
    if not isinstance(metadata["kind"], Kind):
        raise TypeError(f"{cls.__typename__} 'kind' must be a Kind member")

    metadata["required"] = bool(metadata["required"])

    if (descr := coalesce(metadata["descr"], "")) is None:
        descr = ""
    if not isinstance(descr, str | Text):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = descr


class Declaration(metaclass=DeclarationType):
    """
    A declared argument and its parse state.

    The public fields are read-only; the owning registry records parse state
    through _mark(). Parse state is never reset: parsing the same registry
    again accumulates on top of the previous pass.
    """

    __introspectable__ = (
        "short",
        "long",
        "kind",
        "required",
        "descr",
        "set",
        "value",
    )

    def __init__(self, short=None, long=None, kind=Kind.FLAG, required=False, descr=Unset):
        metadata = {
            "short": short,
            "long": long,
            "kind": kind,
            "required": required,
            "descr": descr,
        }
        _sanitize_names(type(self), metadata)
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        self._set = False
        self._value = None

    @property
    def names(self):
        """
        The present names, short first.
        """
        return tuple(name for name in (self._short, self._long) if name is not None)

    @property
    def label(self):
        """
        The name used to refer to this declaration in messages: long, then short.
        """
        if self._long is not None:
            return self._long
        if self._short is not None:
            return self._short
        return "(null)"

    def matches(self, token, /):
        """
        Exact, case-sensitive comparison against either name.
        """
        return token in self.names

    def _mark(self, value=Unset, /):
        """
        Record that the declaration was seen; store the value when one was consumed.
        A missing value leaves any previous value untouched.
        """
        self._set = True
        if value is not Unset:
            self._value = value


__all__ = (
    "Kind",
    "Declaration",
)

# Remove the internal metaclass from the module namespace; not part of the public API.
del DeclarationType
