"""
Argscribe faults (configuration, parse, and usage errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by domain to keep copy consistent and make logs searchable.
- ArgscribeException: base type that carries message + options and knows how to
  render itself (header, one-sentence body, single hint) through rich.
- trigger(): central entry point to surface any fault (respecting shell/colorful).
- getdoc(): optional description lookup for a code from the host application.

Kinds
- ConfigurationError: malformed or duplicate declarations, empty table, blank version.
  Detected while the engine is set up; a broken static declaration is a programmer error.
- ParseError: unknown flags, bare '-' or '--'. Detected during the single matching pass.
- UsageError: lifecycle misuse (parsing twice, querying a closed engine).

Integration
- Lower layers raise faults directly; the engine re-surfaces them with trigger(fault, **ctx).
- In library mode (shell=False) the fault is raised; in shell mode it is rendered to
  stderr via rich and the process exits with status 1.
"""
import copy
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping (by high-level domain)
    - configuration (2110x, 2111x)
      • MISSING_IDENTIFIER, MALFORMED_IDENTIFIER, IDENTIFIER_TOO_LONG,
        BOOLEAN_HINT, MISSING_HINT, EMPTY_DESCRIPTION, DUPLICATE_IDENTIFIER,
        EMPTY_TABLE, EMPTY_VERSION, INVALID_DESCRIPTOR
    - parsing (2112x)
      • MALFORMED_TOKEN, UNKNOWN_FLAG
    - usage (2113x)
      • REPEATED_CALL, CLOSED_ENGINE, NOT_PARSED

    normalize() lets a host remap codes to its own labels while keeping them stable.
    """
    # --- configuration errors ---
    MISSING_IDENTIFIER   = 21101
    MALFORMED_IDENTIFIER = 21102
    IDENTIFIER_TOO_LONG  = 21103
    BOOLEAN_HINT         = 21104
    MISSING_HINT         = 21105
    EMPTY_DESCRIPTION    = 21106
    DUPLICATE_IDENTIFIER = 21107
    EMPTY_TABLE          = 21108
    EMPTY_VERSION        = 21109
    INVALID_DESCRIPTOR   = 21110

    # --- parse errors ---
    MALFORMED_TOKEN      = 21121
    UNKNOWN_FLAG         = 21122

    # --- usage errors ---
    REPEATED_CALL        = 21131
    CLOSED_ENGINE        = 21132
    NOT_PARSED           = 21133

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgscribeException(Exception):
    """
    base fault: a message plus a read-only bag of rendering/context options.

    well-known options
    - title, code, hint: header and footer copy.
    - shell, colorful, prog: runtime flags supplied by the engine at trigger time.
    - anything else (index, field, token, ...) is context for callers and tests.
    """
    code = Unset
    title = "error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)
        if "code" in options:
            self.code = options["code"]
        if "title" in options:
            self.title = options["title"]

    def __str__(self):
        return str(self.message) if self.message else self.title

    def __getattr__(self, name):
        # context options double as attributes (fault.index, fault.field, ...)
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), style)

        prog = text(
            getattr(main, "__prog__", self.options.get("prog") or os.path.basename(sys.argv[0])),
            styler("prog-name"),
        )

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize() if self.code else "?", styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))

        if hint := self.options.get("hint"):
            return Group(header, message, Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        return Group(header, message)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(ArgscribeException):
    title = "bad option declaration"


class ParseError(ArgscribeException):
    title = "bad argument"


class UsageError(ArgscribeException):
    title = "engine misuse"
    code = FaultCode.REPEATED_CALL


class InvalidDescriptorError(ConfigurationError):
    code = FaultCode.INVALID_DESCRIPTOR


class MissingIdentifierError(ConfigurationError):
    code = FaultCode.MISSING_IDENTIFIER


class MalformedIdentifierError(ConfigurationError):
    code = FaultCode.MALFORMED_IDENTIFIER


class IdentifierTooLongError(ConfigurationError):
    code = FaultCode.IDENTIFIER_TOO_LONG


class BooleanHintError(ConfigurationError):
    code = FaultCode.BOOLEAN_HINT


class MissingHintError(ConfigurationError):
    code = FaultCode.MISSING_HINT


class EmptyDescriptionError(ConfigurationError):
    code = FaultCode.EMPTY_DESCRIPTION


class DuplicateIdentifierError(ConfigurationError):
    code = FaultCode.DUPLICATE_IDENTIFIER


class EmptyTableError(ConfigurationError):
    code = FaultCode.EMPTY_TABLE


class EmptyVersionError(ConfigurationError):
    code = FaultCode.EMPTY_VERSION


class MalformedTokenError(ParseError):
    code = FaultCode.MALFORMED_TOKEN


class UnknownFlagError(ParseError):
    code = FaultCode.UNKNOWN_FLAG


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgscribeException).
    - options are merged into a copy of the fault via copy.replace(fault, **options).
    - in shell mode, rendering happens via the rich console and the process exits;
      otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgscribeException",
    "ConfigurationError",
    "ParseError",
    "UsageError",
    "InvalidDescriptorError",
    "MissingIdentifierError",
    "MalformedIdentifierError",
    "IdentifierTooLongError",
    "BooleanHintError",
    "MissingHintError",
    "EmptyDescriptionError",
    "DuplicateIdentifierError",
    "EmptyTableError",
    "EmptyVersionError",
    "MalformedTokenError",
    "UnknownFlagError",
    "FaultCode",
    "trigger",
    "getdoc",
)
