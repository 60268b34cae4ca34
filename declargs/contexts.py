"""
declargs parsing context and submission engine.

Lifecycle
- create(argv, name, version, doc) builds a Context and registers the
  implicit switches: --help / -h always, --version / -v only when a version
  was given.
- Context.declare(...) appends user arguments, in order.
- submit() walks argv once. It returns True when every token was consumed and
  every required argument has a value; otherwise it prints what went wrong
  (or the help/version text) and returns False. It never raises for bad user
  input.
- try_get_* (see getters) read the parsed values back.
- destroy() releases everything the context owns; the returned values must
  not be used afterwards.

Scanning
- empty tokens are skipped.
- anything that is not flag shaped ("-" alone, or no leading "-") and any flag
  that matches no declaration is an unknown argument.
- a non-array argument seen twice is rejected before its value is looked at.
- String/Bool/Int/Double take the inline value of "--name=VALUE" or else the
  next token, whatever it looks like.
- Switch takes nothing; "--switch=VALUE" is rejected.
- Arrays take the next token unconditionally, then keep taking tokens until
  one matches a declared argument. Repeating the flag appends. The inline
  "=" form is rejected for arrays.

After a clean scan
1. --help set: the help is printed, submit() returns False.
2. --version set: "prog version X" is printed, submit() returns False.
3. every required argument without a value is reported, then "Try:".

Contract violations (see faults.violate) are reported for: a bad argv, bad
declaration metadata, name clashes, declaring after submit, submitting twice
and any use of a destroyed context.
"""
import sys
from collections import deque
from collections.abc import Sequence

from .arguments import Argument, Registry, Type
from .faults import (
    ArgumentsException,
    ArgumentsExit,
    AssignmentError,
    DuplicatedValueError,
    FaultCode,
    InvalidBoolError,
    InvalidIntegerError,
    InvalidNumberError,
    MissingRequiredError,
    MissingValueError,
    UnknownArgumentError,
    trigger,
    violate,
)
from .grammar import parse_bool, parse_double, parse_int
from .helps import render_help, render_version
from .matcher import flagshaped, match
from .outputs import Allocator, Printer
from .utils import Unset, basename, coalesce, mirror


def _sanitize_metadata(metadata, /):
    """
    Internal: normalize and validate context metadata in place.

    - argv: non-string sequence of at least one string.
    - name/version/doc: strings when given; name defaults to argv[0]'s basename.
    - allocator: object with callable alloc/free.
    - colorful: coerced to bool.
    """
    argv = metadata["argv"]
    if not isinstance(argv, Sequence) or isinstance(argv, str | bytes):
        raise TypeError("context 'argv' must be a sequence of strings")
    if len(argv) < 1:
        raise ValueError("context 'argv' must hold at least the program path")
    for index, token in enumerate(argv):
        if not isinstance(token, str):
            raise TypeError("context 'argv' entries must be strings (argv[%d] is %s)" % (index, type(token).__name__))
    metadata["argv"] = tuple(argv)

    for field in ("name", "version", "doc"):
        if not isinstance(metadata[field], str | Unset):
            raise TypeError(f"context '{field}' must be a string")
    if metadata["name"] is Unset:
        metadata["name"] = basename(metadata["argv"][0])
    if not metadata["name"]:
        raise ValueError("context 'name' cannot be empty")

    allocator = metadata["allocator"]
    if not all(callable(getattr(allocator, method, None)) for method in ("alloc", "free")):
        raise TypeError("context 'allocator' must provide alloc() and free()")

    metadata["colorful"] = bool(metadata["colorful"])


class Context:
    """
    One parsing session over one argv.

    The context owns every declaration, every value slot and every array
    buffer, each registered with its allocator; destroy() frees them all in
    one pass. It can be used as a context manager that destroys itself on
    exit.
    """

    __introspectable__ = (
        "argv",
        "name",
        "version",
        "doc",
        "colorful",
        "submitted",
        "destroyed",
    )

    argv = mirror("argv")
    name = mirror("name")
    version = mirror("version")
    doc = mirror("doc")
    colorful = mirror("colorful")
    submitted = mirror("submitted")
    destroyed = mirror("destroyed")
    printer = mirror("printer")
    fault = mirror("fault")

    def __init__(self, argv=Unset, /, name=Unset, version=Unset, doc=Unset, *, allocator=Unset, printer=Unset, colorful=False):
        """
        Build a context; raises TypeError/ValueError on bad metadata.

        Prefer create(), which reports the same problems as contract
        violations through the printer.
        """
        printer = Printer() if printer is Unset else printer
        if not callable(printer):
            raise TypeError("context 'printer' must be callable")

        metadata = {
            "argv": coalesce(argv, sys.argv),
            "name": name,
            "version": version,
            "doc": doc,
            "allocator": coalesce(allocator, Allocator()),
            "colorful": colorful,
        }
        _sanitize_metadata(metadata)

        self._printer = printer
        self._allocator = metadata["allocator"]
        self._owned = []
        self._registry = Registry()
        self._submitted = False
        self._destroyed = False
        self._fault = None

        self._argv = metadata["argv"]
        self._colorful = metadata["colorful"]
        self._name = self._own(str(metadata["name"]))
        self._version = self._own(str(metadata["version"])) if metadata["version"] is not Unset else None
        self._doc = self._own(str(metadata["doc"])) if metadata["doc"] is not Unset else None

        self._help = self._register(Argument(
            "help", "h", descr="show this help message and exit", type=Type.SWITCH, context=self,
        ))
        if self._version is not None:
            self._versioner = self._register(Argument(
                "version", "v", descr="show version information and exit", type=Type.SWITCH, context=self,
            ))
        else:
            self._versioner = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.destroy()

    def __repr__(self):
        return "context(%s)" % ", ".join("%s=%r" % (field, getattr(self, field)) for field in self.__introspectable__)

    @property
    def arguments(self):
        """declared arguments in declaration order (implicit ones first)."""
        return tuple(self._registry)

    def _own(self, object, /):
        object = self._allocator.alloc(object)
        self._owned.append(object)
        return object

    def _register(self, argument, /):
        return self._own(self._registry.append(argument))

    def declare(self, name, short=Unset, /, metavar=Unset, descr=Unset, *, type=Type.STRING, required=False):
        """
        Declare an argument and return its handle (None on failure).

        Parameters
        - name: long name, used as --name.
        - short: short name, used as -short.
        - metavar: value tip shown in help (defaults to the type tip).
        - descr: description shown in help.
        - type: one declargs.Type member (defaults to Type.STRING).
        - required: whether submit() fails without it (ignored for switches).
        """
        if self._destroyed:
            return violate(self._printer, "declare", "context was destroyed")
        if self._submitted:
            return violate(self._printer, "declare", "arguments cannot be declared after submit")

        try:
            argument = Argument(
                name,
                short,
                metavar,
                descr,
                type=type,
                required=required,
                context=self,
                allocator=self._own,
            )
        except (TypeError, ValueError) as error:
            return violate(self._printer, "declare", str(error))

        try:
            return self._register(argument)
        except ValueError as error:
            return violate(self._printer, "declare", str(error), FaultCode.DECLARATION_CONFLICT)

    def submit(self):
        """
        Parse argv against the declared arguments; see the module docs.

        Returns True on success. On failure the diagnostic (or the help or
        version text) has already been printed and False is returned; the
        fault, if any, stays available as context.fault.
        """
        if self._destroyed:
            violate(self._printer, "submit", "context was destroyed")
            return False
        if self._submitted:
            violate(self._printer, "submit", "context was already submitted")
            return False
        self._submitted = True

        try:
            self._scan(deque(self._argv[1:]))

            if self._help.has_value:
                self._printer(render_help(self))
                return False
            if self._versioner is not None and self._versioner.has_value:
                self._printer(render_version(self))
                return False

            self._validate()
        except (ArgumentsException, ArgumentsExit) as fault:
            self._fault = fault
            trigger(fault, prog=self._name, printer=self._printer, colorful=self._colorful)
            return False
        return True

    def destroy(self):
        """Release every owned object; later calls are no-ops."""
        if self._destroyed:
            return
        while self._owned:
            self._allocator.free(self._owned.pop())
        self._registry.clear()
        self._destroyed = True

    def _scan(self, tokens):
        while tokens:
            token = tokens.popleft()
            if not token:
                continue

            if not flagshaped(token) or not (found := match(token, self._registry)):
                raise UnknownArgumentError('unknown argument "%s"' % token, token=token)

            argument, flag = found.argument, found.flag
            slot = argument._slot

            if not argument.type.array and slot.has_value:
                raise DuplicatedValueError("%s was provided multiple times which is unsupported." % flag, token=token)

            if argument.type is Type.SWITCH:
                if found.form.assignment:
                    raise AssignmentError(
                        "%s is a switch and does not take a value" % flag,
                        code=FaultCode.SWITCH_ASSIGNMENT,
                        token=token,
                    )
                slot.set(True)
            elif argument.type.array:
                if found.form.assignment:
                    raise AssignmentError("%s is an array and does not support '=' assignment" % flag, token=token)
                if not tokens:
                    raise MissingValueError("No value provided for %s" % flag, token=token)
                # the first value is taken even when it looks like a flag
                slot.push(self._convert(flag, argument.type.element, tokens.popleft()))
                while tokens and match(tokens[0], self._registry) is None:
                    slot.push(self._convert(flag, argument.type.element, tokens.popleft()))
            else:
                if found.form.assignment:
                    value = found.value
                elif tokens:
                    value = tokens.popleft()
                else:
                    raise MissingValueError("No value provided for %s" % flag, token=token)
                slot.set(self._convert(flag, argument.type, value))

    @staticmethod
    def _convert(flag, type, value):
        match type:
            case Type.STRING:
                return value
            case Type.BOOL:
                try:
                    return parse_bool(value)
                except ValueError:
                    raise InvalidBoolError(
                        "Invalid value provided for %s\nexpected true or false." % flag, token=value
                    ) from None
            case Type.INT:
                try:
                    return parse_int(value)
                except ValueError:
                    raise InvalidIntegerError(
                        "Value for %s is not a valid integer or is out of range." % flag, token=value
                    ) from None
            case Type.DOUBLE:
                try:
                    return parse_double(value)
                except ValueError:
                    raise InvalidNumberError(
                        "Value for %s is not a valid number or is out of range." % flag, token=value
                    ) from None
        raise AssertionError("unreachable value type: %r" % type)

    def _validate(self):
        missing = []
        for argument in self._registry.required:
            if argument.has_value:
                continue
            if argument.short is None:
                message = "argument --%s is required." % argument.name
            else:
                message = "argument --%s / -%s is required." % (argument.name, argument.short)
            missing.append(MissingRequiredError(message))

        if len(missing) == 1:
            raise missing[0]
        if missing:
            raise ArgumentsExit(missing)


def create(argv=Unset, /, name=Unset, version=Unset, doc=Unset, *, allocator=Unset, printer=Unset, colorful=False):
    """
    Create a parsing context (None on contract violation).

    argv defaults to sys.argv and name to the basename of argv[0]. See
    Context for the other parameters.
    """
    try:
        return Context(argv, name, version, doc, allocator=allocator, printer=printer, colorful=colorful)
    except (TypeError, ValueError) as error:
        printer = Printer() if printer is Unset else printer
        if not callable(printer):
            raise
        return violate(printer, "create", str(error))


def submit(context, /):
    """Submit a context created by create(); see Context.submit()."""
    if not isinstance(context, Context):
        raise TypeError("submit() argument must be a declargs context")
    return context.submit()


def destroy(context, /):
    """Destroy a context created by create(); see Context.destroy()."""
    if not isinstance(context, Context):
        raise TypeError("destroy() argument must be a declargs context")
    context.destroy()


__all__ = (
    "Context",
    "create",
    "submit",
    "destroy",
)
