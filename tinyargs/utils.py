"""
tinyargs internal helpers.

- Unset: sentinel for “not provided” when None is a meaningful value.
- coalesce(): turn Unset into a concrete default, leaving every other value alone.
- rename(): decorator giving generated accessors a stable __name__/__qualname__.
- mirror(): read-only property over a private "_{name}" backing field.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel: falsy, single instance, survives copy and pickle.
    """
    __slots__ = ()

    def __new__(cls):
        try:
            return Unset
        except NameError:
            return super().__new__(cls)

    def __reduce__(self):
        return "Unset"

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset; any other value (None included) passes through.
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator assigning `name` to a callable's __name__ and __qualname__.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def wrapper(callable):
        callable.__name__ = callable.__qualname__ = name
        return callable
    return wrapper


def mirror(name, /):
    """
    Read-only property exposing the backing attribute "_{name}".
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return getattr(self, "_" + name)

    return property(getter)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "UnsetType",
    "Unset",
)
