"""
tinyargs faults (errors and warnings), parse results and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (carried on faults and results so callers can branch on the failure kind).
- ParseError: base type for parse failures. Carries a message plus options
  (code, token, declaration, ...) and knows how to render itself.
- DeclarationWarning: advisories raised while declaring arguments.
- ParseResult: the typed outcome of a parse pass (truthy on success).
- trigger(): central entry point to surface any fault with runtime options.

Compatibility
- Every parse failure formats to exactly one line, kept byte-compatible with
  the historical tinyargs output:
    Error: Unrecognized argument <token>
    Error: Missing value for argument <token>
    Error: Missing required argument <long-name>
- The line is printed to standard output (written verbatim unless styled for a
  terminal, where only the "Error:" label is styled); callers that want silence pass
  quiet=True and inspect the ParseResult instead.

Integration
- The registry builds a fault, hands it to trigger(fault, quiet=..., colorful=..., console=...)
  and returns ParseResult(fault). Nothing here ever exits the process.
"""
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType
from typing import NamedTuple

from rich.console import Console
from rich.text import Text

from .utils import Unset, coalesce

console = Console(highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - parse errors (111xx)
      • UNRECOGNIZED_ARGUMENT, MISSING_VALUE, MISSING_REQUIRED_ARGUMENT
    - declaration warnings (121xx)
      • SHADOWED_NAME, NAMELESS_DECLARATION

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- parse errors (11xxx) ---
    UNRECOGNIZED_ARGUMENT     = 11112
    MISSING_VALUE             = 11117
    MISSING_REQUIRED_ARGUMENT = 11125

    # --- declaration warnings (12xxx) ---
    SHADOWED_NAME             = 12113
    NAMELESS_DECLARATION      = 12114


def _styler(options, palette):
    """
    Build a style resolver honoring the colorful option and __styles__ overrides in __main__.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if options.get("colorful", False) else ""
    return styler


class ParseError(Exception):
    """
    A parse failure: one offending token (or missing declaration) and one message.

    options
    - code: FaultCode of the failure.
    - token: the offending token, or the name of the missing declaration.
    - declaration: the Declaration involved, when there is one.
    - quiet / colorful / console: runtime options merged in by trigger().
    """

    def __init__(self, message=Unset, /, **options):
        assert message is Unset or isinstance(message, str)
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)
        super().__init__(self.message)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def token(self):
        return self.options.get("token")

    def format(self):
        """
        The compatibility line printed for this fault.
        """
        return "Error: %s" % self.message

    def __str__(self):
        return self.format()

    def __rich__(self):
        styler = _styler(self.options, {
            "error-label": "bold #FF4DA6",  # friendly pinky label
            "error-message": "#C8C8D0",  # soft light gray message
        })
        return Text.assemble(
            Text("Error:", styler("error-label")),
            " ",
            Text(self.message, styler("error-message")),
        )

    def __trigger__(self):
        if self.options.get("quiet", False):
            return
        output = coalesce(self.options.get("console", Unset), console)
        if not self.options.get("colorful", False) or not output.is_terminal:
            # the exact line, byte for byte
            output.file.write(self.format() + "\n")
            return
        output.print(self.__rich__()[:len("Error:")], end=" ", soft_wrap=True)
        output.file.write(self.message + "\n")

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedArgumentError(ParseError): ...
class MissingValueError(ParseError): ...
class MissingRequiredArgumentError(ParseError): ...


class DeclarationWarning(Warning):
    """
    Advisory emitted while declaring arguments. It never changes behavior.
    """

    def __init__(self, message=Unset, /, **options):
        assert message is Unset or isinstance(message, str)
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)
        super().__init__(self.message)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return self.message

    def __trigger__(self):
        warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ShadowedNameWarning(DeclarationWarning): ...
class NamelessDeclarationWarning(DeclarationWarning): ...


class ParseResult(NamedTuple):
    """
    Outcome of a parse pass.

    Truthy when parsing succeeded, falsy otherwise; the fault (if any) keeps the
    error kind and the offending token for callers that want to inspect them.

        >>> result = registry.parse(sys.argv)
        >>> if not result:
        ...     registry.print_help()
    """
    fault: ParseError | None = None

    def __bool__(self):
        return self.fault is None

    @property
    def ok(self):
        return self.fault is None

    @property
    def code(self):
        return None if self.fault is None else self.fault.code

    @property
    def token(self):
        return None if self.fault is None else self.fault.token

    def unwrap(self):
        """
        Raise the fault if parsing failed; otherwise return the result itself.
        """
        if self.fault is not None:
            raise self.fault
        return self


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault = fault.__replace__(**options)
    fault.__trigger__()
    return fault


__all__ = (
    "FaultCode",
    "ParseError",
    "UnrecognizedArgumentError",
    "MissingValueError",
    "MissingRequiredArgumentError",
    "DeclarationWarning",
    "ShadowedNameWarning",
    "NamelessDeclarationWarning",
    "ParseResult",
    "trigger",
)
