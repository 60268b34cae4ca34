r"""
declargs argument declarations, value slots and registry.

Overview
- Type
  • IntFlag with one bit per argument type: STRING, SWITCH, BOOL, INT, DOUBLE
    and the array variants STRING_ARRAY, BOOL_ARRAY, INT_ARRAY, DOUBLE_ARRAY.
  • A declaration carries exactly one bit. Type(0) means "no type given" and
    resolves to STRING.

- Argument
  • Immutable declaration: name, short, metavar (value tip), descr, type and
    required, exposed through read-only properties.
  • Owns its value slot (Scalar or Array) and remembers its owning context so
    accessors can refuse to read from a destroyed one.

- Scalar / Array
  • Value slots. A Scalar is written at most once; an Array only grows, in
    command-line order, and allocates its backing list on the first push.

- Registry
  • Ordered collection of declarations with name/short-name lookup tables.
  • Declaration order drives help layout and the required-argument sweep.

Metadata (sanitized on construction)
- name: non-empty, alphanumeric with inner hyphens ("dry-run", "x2").
- short: same grammar, optional.
- metavar/descr: optional strings; metavar defaults to the type tip.
- required: bool; a required SWITCH is silently made optional.

Validation errors raise TypeError/ValueError; the context turns them into
contract violations.
"""
import enum
import re

from .utils import Unset, coalesce, mirror

_IDENTIFIER = re.compile(r"[A-Za-z0-9]+(-[A-Za-z0-9]+)*")


class Type(enum.IntFlag):
    """argument type tags (exactly one per declaration)."""
    STRING = enum.auto()
    SWITCH = enum.auto()
    BOOL = enum.auto()
    INT = enum.auto()
    DOUBLE = enum.auto()
    STRING_ARRAY = enum.auto()
    BOOL_ARRAY = enum.auto()
    INT_ARRAY = enum.auto()
    DOUBLE_ARRAY = enum.auto()

    @property
    def array(self):
        return self in _ELEMENTS

    @property
    def element(self):
        """scalar type of one element (the type itself for scalars)."""
        return _ELEMENTS.get(self, self)

    @property
    def tip(self):
        """default value tip shown in help (None for switches)."""
        return _TIPS[self]


_ELEMENTS = {
    Type.STRING_ARRAY: Type.STRING,
    Type.BOOL_ARRAY: Type.BOOL,
    Type.INT_ARRAY: Type.INT,
    Type.DOUBLE_ARRAY: Type.DOUBLE,
}

_ALL = sum(member.value for member in Type)

_TIPS = {
    Type.STRING: "<text>",
    Type.SWITCH: None,
    Type.BOOL: "<true|false>",
    Type.INT: "<integer>",
    Type.DOUBLE: "<number>",
    Type.STRING_ARRAY: "[text]",
    Type.BOOL_ARRAY: "[true|false]",
    Type.INT_ARRAY: "[integer]",
    Type.DOUBLE_ARRAY: "[number]",
}


class Scalar:
    """single-value slot; a SWITCH uses has_value alone as its value."""
    __slots__ = ("has_value", "value")

    def __init__(self):
        self.has_value = False
        self.value = None

    def set(self, value, /):
        self.has_value = True
        self.value = value


class Array:
    """append-only multi-value slot, allocated lazily through an allocator."""
    __slots__ = ("has_value", "values", "_allocator")

    def __init__(self, allocator, /):
        self.has_value = False
        self.values = None
        self._allocator = allocator

    def push(self, value, /):
        if self.values is None:
            self.values = self._allocator(list())
        self.values.append(value)
        self.has_value = True


def _sanitize_name(label, name, /):
    if not isinstance(name, str):
        raise TypeError(f"argument {label} must be a string")
    if not name:
        raise ValueError(f"argument {label} cannot be empty")
    if not _IDENTIFIER.fullmatch(name):
        raise ValueError(f"argument {label} must be alphanumeric (hyphens allowed between words): {name!r}")


def _sanitize_metadata(metadata, /):
    """
    Internal: normalize and validate declaration metadata in place.

    - name/short: identifier grammar (short optional).
    - metavar/descr: strings when given; explicit None is rejected.
    - type: a Type (or int) with at most one bit set; zero means STRING.
    - required: coerced to bool, forced off for switches.
    """
    _sanitize_name("name", metadata["name"])

    if metadata["short"] is not Unset:
        _sanitize_name("short name", metadata["short"])

    for field in ("metavar", "descr"):
        if not isinstance(metadata[field], str | Unset):
            raise TypeError(f"argument '{field}' must be a string")

    type = metadata["type"]
    if isinstance(type, bool) or not isinstance(type, int):
        raise TypeError("argument 'type' must be a declargs.Type")
    if int(type) < 0 or int(type) & ~_ALL:
        raise ValueError(f"argument 'type' has unknown bits: {int(type):#x}")
    if int(type).bit_count() > 1:
        raise ValueError(f"argument 'type' must have at most one type bit: {Type(type)!r}")
    metadata["type"] = Type(type) or Type.STRING

    metadata["required"] = bool(metadata["required"]) and metadata["type"] is not Type.SWITCH


class Argument:
    """
    Declared command-line argument.

    Instances are created by Context.declare() and act as the handle given to
    the try_get_* accessors. The metadata properties are read-only; values
    live in the slot.
    """

    __introspectable__ = (
        "name",
        "short",
        "metavar",
        "descr",
        "type",
        "required",
    )

    name = mirror("name")
    short = mirror("short")
    metavar = mirror("metavar")
    descr = mirror("descr")
    type = mirror("type")
    required = mirror("required")

    def __init__(self, name, short=Unset, /, metavar=Unset, descr=Unset, *, type=Type.STRING, required=False, context=Unset, allocator=Unset):
        metadata = {
            "name": name,
            "short": short,
            "metavar": metavar,
            "descr": descr,
            "type": type,
            "required": required,
        }
        _sanitize_metadata(metadata)

        for field, object in metadata.items():
            setattr(self, "_" + field, coalesce(object))
        self._metavar = coalesce(metavar, self._type.tip)

        self._context = coalesce(context)
        if self._type.array:
            self._slot = Array(coalesce(allocator, lambda object: object))
        else:
            self._slot = Scalar()

    @property
    def has_value(self):
        return self._slot.has_value

    @property
    def flags(self):
        """the spellings this argument answers to, long first."""
        if self._short is None:
            return ("--" + self._name,)
        return ("--" + self._name, "-" + self._short)

    def __repr__(self):
        return "argument(%s)" % ", ".join("%s=%r" % (field, getattr(self, field)) for field in self.__introspectable__)


class Registry:
    """
    Ordered argument collection with O(1) lookups by name and short name.

    append() raises ValueError naming the clash when the name or the short name
    is already taken by another argument.
    """

    def __init__(self):
        self._arguments = []
        self._names = {}
        self._shorts = {}

    def __iter__(self):
        return iter(self._arguments)

    def __len__(self):
        return len(self._arguments)

    def __contains__(self, argument):
        return any(argument is object for object in self._arguments)

    def append(self, argument, /):
        if argument.name in self._names:
            raise ValueError("argument name conflict. name: %s" % argument.name)
        if argument.short is not None and argument.short in self._shorts:
            raise ValueError("argument short name conflict. short name: %s" % argument.short)
        self._arguments.append(argument)
        self._names[argument.name] = argument
        if argument.short is not None:
            self._shorts[argument.short] = argument
        return argument

    def named(self, name, /):
        return self._names.get(name)

    def shorted(self, short, /):
        return self._shorts.get(short)

    @property
    def required(self):
        return tuple(argument for argument in self._arguments if argument.required)

    @property
    def optional(self):
        return tuple(argument for argument in self._arguments if not argument.required)

    def clear(self):
        self._arguments.clear()
        self._names.clear()
        self._shorts.clear()


__all__ = (
    "Type",
    "Argument",
    "Scalar",
    "Array",
    "Registry",
)
