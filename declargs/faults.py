"""
declargs faults (user-input errors, contract violations) and rendering.

Scope
- FaultCode: stable numeric identifiers for every fault the library reports.
- ArgumentsException: base type for user-input errors. It carries a message
  plus options and knows how to render itself as the classic two-line
  diagnostic:
      Error: unknown argument "--nope"
      Try: prog --help
- ArgumentsExit: a group of user-input errors reported together (used for
  missing required arguments), rendered with a single "Try:" hint.
- ContractError: raised for host programming errors (bad declarations,
  wrong accessor for a handle, use after destroy...).
- trigger(): central entry point to surface a fault through a printer.
- violate(): central entry point for contract violations.

Integration
- The submission engine raises ArgumentsException subclasses while scanning
  and turns them into trigger(fault, prog=..., printer=..., colorful=...)
  calls; submit() then returns False. User input never escapes as an
  exception.
- Contract violations print "declargs error: <operation>: <reason>" and raise
  ContractError while assertions are enabled; under `python -O` the caller
  returns its failure sentinel instead.

Customization
- __styles__ in __main__ overrides palette entries (colorful mode only).
- __codes__ in __main__ remaps fault codes to host-defined labels.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - scanning (2110x): UNKNOWN_ARGUMENT, MISSING_VALUE, DUPLICATED_VALUE,
      SWITCH_ASSIGNMENT, ARRAY_ASSIGNMENT
    - grammar (2111x): INVALID_BOOL, INVALID_INTEGER, INVALID_NUMBER
    - validation (2112x): MISSING_REQUIRED
    - contract (2190x): CONTRACT_VIOLATION, DECLARATION_CONFLICT

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- scanning errors ---
    UNKNOWN_ARGUMENT            = 21101
    MISSING_VALUE               = 21102
    DUPLICATED_VALUE            = 21103
    SWITCH_ASSIGNMENT           = 21104
    ARRAY_ASSIGNMENT            = 21105

    # --- grammar errors ---
    INVALID_BOOL                = 21111
    INVALID_INTEGER             = 21112
    INVALID_NUMBER              = 21113

    # --- validation errors ---
    MISSING_REQUIRED            = 21121

    # --- host contract ---
    CONTRACT_VIOLATION          = 21901
    DECLARATION_CONFLICT        = 21902

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _palette(colorful):
    """
    build the styler/text pair shared by every renderer.

    when colorful is False every fragment is plain Text, so the rendered
    output is exactly the characters shown in the docs.
    """
    styles = defaultdict(str, {
        # diagnostics
        "error-label": "bold #FF4DA6",  # friendly pinky label
        "error-message": "#C8C8D0",  # soft light gray message
        "code": "bold #00E5FF",  # neon cyan fault code
        "hint-label": "#9CE19C dim",  # gentle green label
        "hint": "italic #9CE19C",  # gentle green hint text

        # help / version
        "program-name": "bold #FF4D94",
        "version": "bold #36C5F0",
        "usage-label": "bold #00E6FF",
        "section-label": "bold #FFFFFF",
        "documentation": "italic #A3A3A3",
        "flag-name": "bold #22C55E",
        "metavar": "bold #FFD600",
        "argument-description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), styler(style) if style else "")

    return styler, text


class ArgumentsException(Exception):
    """
    base type for user-input errors found while scanning argv.

    options
    - code: FaultCode of the error.
    - prog: application name used in the "Try:" hint.
    - hint: when False, the "Try:" line is omitted (used inside a group).
    - colorful: style the rendering with the palette.
    - printer: callable receiving the rendered Text.
    - token: offending token, when there is one.
    """
    __code__ = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType({"code": type(self).__code__} | options)
        super().__init__(message)

    @property
    def code(self):
        return self.options["code"]

    def __rich__(self):
        _, text = _palette(self.options.get("colorful", False))

        render = Text.assemble(text("Error", "error-label"))
        if self.options.get("colorful", False) and self.code:
            render.append_text(Text.assemble(" [", text(self.code.normalize(), "code"), "]"))
        render.append_text(Text.assemble(": ", text(self.message, "error-message")))

        if self.options.get("hint", True) and self.options.get("prog"):
            render.append_text(Text.assemble(
                "\n",
                text("Try:", "hint-label"),
                " ",
                text("%s --help" % self.options["prog"], "hint"),
            ))
        return render

    def __trigger__(self):
        self.options["printer"](self.__rich__(), error=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownArgumentError(ArgumentsException):
    __code__ = FaultCode.UNKNOWN_ARGUMENT


class MissingValueError(ArgumentsException):
    __code__ = FaultCode.MISSING_VALUE


class DuplicatedValueError(ArgumentsException):
    __code__ = FaultCode.DUPLICATED_VALUE


class AssignmentError(ArgumentsException):
    __code__ = FaultCode.ARRAY_ASSIGNMENT


class InvalidValueError(ArgumentsException): ...


class InvalidBoolError(InvalidValueError):
    __code__ = FaultCode.INVALID_BOOL


class InvalidIntegerError(InvalidValueError):
    __code__ = FaultCode.INVALID_INTEGER


class InvalidNumberError(InvalidValueError):
    __code__ = FaultCode.INVALID_NUMBER


class MissingRequiredError(ArgumentsException):
    __code__ = FaultCode.MISSING_REQUIRED


class ArgumentsExit(ExceptionGroup[ArgumentsException]):
    """
    several user-input errors reported at once.

    every member renders its "Error:" line; the "Try:" hint is printed once,
    after the last one.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad arguments", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("bad arguments", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        _, text = _palette(self.options.get("colorful", False))

        renders = [copy.replace(exception, hint=False, **self.options).__rich__() for exception in self.exceptions]
        if self.options.get("prog"):
            renders.append(Text.assemble(
                text("Try:", "hint-label"),
                " ",
                text("%s --help" % self.options["prog"], "hint"),
            ))
        return Text("\n").join(renders)

    def __trigger__(self):
        self.options["printer"](self.__rich__(), error=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


class ContractError(AssertionError):
    """
    raised when the host breaks the API contract.

    this is a programming error, never a user-input error: it is raised only
    while assertions are enabled, so optimized builds degrade to the failure
    sentinel of the offending call.
    """

    def __init__(self, operation, reason, /, code=FaultCode.CONTRACT_VIOLATION):
        self.operation = operation
        self.reason = reason
        self.code = code
        super().__init__("%s: %s" % (operation, reason))


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - typical options: prog, printer, colorful.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def violate(printer, operation, reason, /, code=FaultCode.CONTRACT_VIOLATION):
    """
    report a host contract violation.

    the diagnostic always goes through the printer; the ContractError is
    raised only when assertions are enabled. callers return their failure
    sentinel right after this call.
    """
    printer(Text("declargs error: %s: %s" % (operation, reason)), error=True)
    if __debug__:
        raise ContractError(operation, reason, code)


__all__ = (
    "FaultCode",
    "ArgumentsException",
    "UnknownArgumentError",
    "MissingValueError",
    "DuplicatedValueError",
    "AssignmentError",
    "InvalidValueError",
    "InvalidBoolError",
    "InvalidIntegerError",
    "InvalidNumberError",
    "MissingRequiredError",
    "ArgumentsExit",
    "ContractError",
    "trigger",
    "violate",
)
