"""
tinyargs registry: declare, parse, query and describe command-line arguments.

What this module provides
- ArgumentRegistry: an append-only, insertion-ordered collection of
  declarations plus the parse state recorded on them.
  • declare()/flag()/value(): append declarations.
  • parse(): one left-to-right scan over an argv-like token list.
  • lookup()/get_value()/is_flag_set()/has(): query by short or long name.
  • format_help()/print_help(): "Usage:" followed by one line per declaration.
  • release(): drop every declaration (also done when leaving a with-block).

Quick start
    from tinyargs import ArgumentRegistry, Kind

    registry = ArgumentRegistry()
    registry.declare("-h", "--help", Kind.FLAG, descr="show this help")
    registry.declare("-n", "--name", Kind.VALUE, required=True, descr="who to greet")

    if not registry.parse(sys.argv):
        registry.print_help()
        sys.exit(1)
    print("hello", registry.get_value("--name"))

Parsing rules
- Element 0 of the token list is the program name and is always skipped.
- The first declaration (in insertion order) whose short or long name equals
  the token exactly is the match; later duplicates are shadowed.
- Flags are marked set. Value options are marked set and consume the next
  token when there is one. A required value option at the end of the list
  fails; a non-required one is left set without a value.
- After a clean scan, the first required declaration that is still unset fails.
- Failures short-circuit. Nothing is rolled back, and nothing is reset between
  parses: parse state accumulates until the registry is discarded.

Concurrency
- A registry is not designed for concurrent use. Callers serialize
  declare()/parse() on a shared instance.
"""
import shlex
import sys
from collections import defaultdict
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from .declarations import Declaration, Kind
from .faults import *
from .faults import console as stdout
from .utils import *


class ArgumentRegistry:
    """
    Mutable collection of argument declarations and their parse state.

    Options
    - quiet: when True, parse failures are not printed (the result still carries the fault).
    - colorful: style help and diagnostics (palette overridable via __styles__ in __main__).
    - console: rich Console to write to; defaults to standard output.

    Raises
    - TypeError: when console is given and is not a rich Console.
    """

    def __init__(self, *, quiet=False, colorful=True, console=Unset):
        if console is not Unset and not isinstance(console, Console):
            raise TypeError("argument-registry 'console' must be a rich Console")
        self._declarations = []
        self._quiet = bool(quiet)
        self._colorful = bool(colorful)
        self._console = console

    quiet = mirror("quiet")
    colorful = mirror("colorful")

    @property
    def console(self):
        return coalesce(self._console, stdout)

    @property
    def declarations(self):
        return tuple(self._declarations)

    def declare(self, short=None, long=None, kind=Kind.FLAG, required=False, descr=Unset):
        """
        Append a declaration and return it.

        Duplicate names are accepted (the earlier declaration wins at parse and
        query time) and a declaration without names is accepted too; both emit
        a DeclarationWarning without changing behavior.
        """
        return self._declare(short, long, kind, required, descr)

    def flag(self, short=None, long=None, *, required=False, descr=Unset):
        """
        Shortcut for declare(short, long, Kind.FLAG, ...).
        """
        return self._declare(short, long, Kind.FLAG, required, descr)

    def value(self, short=None, long=None, *, required=False, descr=Unset):
        """
        Shortcut for declare(short, long, Kind.VALUE, ...).
        """
        return self._declare(short, long, Kind.VALUE, required, descr)

    def _declare(self, short, long, kind, required, descr):
        declaration = Declaration(short, long, kind, required, descr)

        if not declaration.names:
            trigger(NamelessDeclarationWarning(
                "declaration without short or long name can never be matched",
                code=FaultCode.NAMELESS_DECLARATION,
                declaration=declaration,
            ), stacklevel=5)

        for name in declaration.names:
            if self.lookup(name) is not None:
                trigger(ShadowedNameWarning(
                    "name %r is already declared; the earlier declaration wins" % name,
                    code=FaultCode.SHADOWED_NAME,
                    token=name,
                    declaration=declaration,
                ), stacklevel=5)

        self._declarations.append(declaration)
        return declaration

    def parse(self, argv=Unset, /):
        """
        Parse an argv-like token list against the declarations.

        Parameters
        - argv:
          • Unset: use sys.argv.
          • str: shell-like string split via shlex.split (first word is the program name).
          • Iterable[str]: tokens as-is; element 0 is the program name.

        Returns
        - ParseResult: truthy on success; otherwise falsy and carrying the fault.

        Raises
        - TypeError: when argv is not Unset/str/Iterable[str].
        """
        tokens = self._tokenize(argv)

        index = 1
        while index < len(tokens):
            token = tokens[index]

            if (declaration := self.lookup(token)) is None:
                return self._fail(UnrecognizedArgumentError(
                    "Unrecognized argument %s" % token,
                    code=FaultCode.UNRECOGNIZED_ARGUMENT,
                    token=token,
                ))

            if declaration.kind is Kind.VALUE and index + 1 < len(tokens):
                declaration._mark(tokens[index + 1])
                index += 2
                continue

            declaration._mark()

            if declaration.kind is Kind.VALUE and declaration.required:
                return self._fail(MissingValueError(
                    "Missing value for argument %s" % token,
                    code=FaultCode.MISSING_VALUE,
                    token=token,
                    declaration=declaration,
                ))
            index += 1

        for declaration in self._declarations:
            if declaration.required and not declaration.set:
                return self._fail(MissingRequiredArgumentError(
                    "Missing required argument %s" % declaration.label,
                    code=FaultCode.MISSING_REQUIRED_ARGUMENT,
                    token=declaration.label,
                    declaration=declaration,
                ))

        return ParseResult()

    @staticmethod
    def _tokenize(argv):
        if argv is Unset:
            return list(sys.argv)
        if isinstance(argv, str):
            return shlex.split(argv)
        if isinstance(argv, Iterable):
            tokens = list(argv)
            for token in tokens:
                if not isinstance(token, str):
                    raise TypeError("parse() argument must be a string or an iterable of strings")
            return tokens
        raise TypeError("parse() argument must be a string or an iterable of strings")

    def _fail(self, fault):
        return ParseResult(trigger(fault, quiet=self._quiet, colorful=self._colorful, console=self._console))

    def lookup(self, name, /):
        """
        Return the first declaration (in insertion order) named `name`, or None.
        """
        for declaration in self._declarations:
            if declaration.matches(name):
                return declaration
        return None

    def get_value(self, name, /):
        """
        Value recorded for `name`; None when nothing matches or no value was given.
        """
        if (declaration := self.lookup(name)) is None:
            return None
        return declaration.value

    def is_flag_set(self, name, /):
        """
        Whether the declaration named `name` was seen. Value options count too.
        """
        if (declaration := self.lookup(name)) is None:
            return False
        return declaration.set

    def has(self, name, /):
        """
        Flags: whether they were seen. Value options: whether a value was recorded.
        """
        if (declaration := self.lookup(name)) is None:
            return False
        if declaration.kind is Kind.FLAG:
            return declaration.set
        return declaration.value is not None

    def _helper(self):
        """
        Build the help text.

        Palette keys
        - usage-label, flag-name, option-name, argument-description, type-label

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        """
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # CYAN header
            "flag-name": "bold #22C55E",  # GREEN for flags
            "option-name": "bold #00E6FF",  # CYAN for value options
            "argument-description": "#9CA3AF",  # Muted gray
            "type-label": "#FFD600",  # AMBER type label
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style]

        def text(fragment, style=""):
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        lines = [text("Usage:", styler("usage-label"))]

        for declaration in self._declarations:
            if not (names := declaration.names):
                continue

            style = styler("flag-name" if declaration.kind is Kind.FLAG else "option-name")

            line = Text("  ")
            if len(names) == 2:
                line.append(text(names[0], style)).append(", ").append(text(names[1], style)).append(": ")
            else:
                line.append(text(names[0], style)).append(":     ")
            line.append(text(declaration.descr, styler("argument-description")))
            line.append(" (Type: ").append(text(declaration.kind.value, styler("type-label"))).append(")")
            lines.append(line)

        return Text("\n").join(lines)

    def format_help(self):
        """
        Plain help text: "Usage:" then one line per named declaration.

        Descriptions are kept exactly as declared (rich Text contributes its plain text).
        """
        lines = ["Usage:"]
        for declaration in self._declarations:
            if not (names := declaration.names):
                continue
            descr = str(declaration.descr)
            if len(names) == 2:
                lines.append("  %s, %s: %s (Type: %s)" % (*names, descr, declaration.kind.value))
            else:
                lines.append("  %s:     %s (Type: %s)" % (names[0], descr, declaration.kind.value))
        return "\n".join(lines)

    def print_help(self):
        """
        Write the help text to the console (standard output by default).

        Styled through rich only when colorful and the console is a terminal;
        otherwise format_help() is written as-is.
        """
        output = self.console
        if not self._colorful or not output.is_terminal:
            output.file.write(self.format_help() + "\n")
            return
        output.print(self._helper(), soft_wrap=True)

    def release(self):
        """
        Drop every declaration. The registry can be reused afterwards as if new.
        """
        self._declarations.clear()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.release()

    def __len__(self):
        return len(self._declarations)

    def __iter__(self):
        return iter(tuple(self._declarations))

    def __rich_repr__(self):
        yield "declarations", self.declarations
        yield "quiet", self._quiet
        yield "colorful", self._colorful

    def __repr__(self):
        return "argument-registry(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "ArgumentRegistry",
)
