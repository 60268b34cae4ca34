"""
declargs accessors (typed reads of parsed values).

Every accessor takes an argument handle returned by Context.declare() and
returns a (value, found) pair:

- found is False when the argument did not appear on the command line; the
  value is then None.
- try_get_bool also reads switches: an absent switch gives (False, True) and a
  present one (True, True).
- array accessors return a tuple of the values in command-line order. The
  tuple is a view over context-owned storage and must not be used once the
  context is destroyed.

Reading an argument through the accessor of another type, or reading after
destroy(), is a contract violation.
"""
from .arguments import Argument, Type
from .faults import violate
from .utils import rename


def _getter(name, types, /):
    """build the accessor called name, accepting the given argument types."""

    @rename(name)
    def getter(argument, /):
        if not isinstance(argument, Argument):
            raise TypeError(f"{name}() argument must be a declared argument")
        if (context := argument._context) is None:
            raise TypeError(f"{name}() argument is not bound to a context")

        if context.destroyed:
            violate(context.printer, name, "context was destroyed")
            return None, False
        if argument.type not in types:
            violate(
                context.printer,
                name,
                "argument --%s is declared as %s" % (argument.name, argument.type.name.lower()),
            )
            return None, False

        slot = argument._slot
        if argument.type is Type.SWITCH:
            return slot.has_value, True
        if not slot.has_value:
            return None, False
        if argument.type.array:
            return tuple(slot.values), True
        return slot.value, True

    return getter


try_get_string = _getter("try_get_string", {Type.STRING})
try_get_int = _getter("try_get_int", {Type.INT})
try_get_double = _getter("try_get_double", {Type.DOUBLE})
try_get_bool = _getter("try_get_bool", {Type.BOOL, Type.SWITCH})
try_get_string_array = _getter("try_get_string_array", {Type.STRING_ARRAY})
try_get_int_array = _getter("try_get_int_array", {Type.INT_ARRAY})
try_get_double_array = _getter("try_get_double_array", {Type.DOUBLE_ARRAY})
try_get_bool_array = _getter("try_get_bool_array", {Type.BOOL_ARRAY})


__all__ = (
    "try_get_string",
    "try_get_int",
    "try_get_double",
    "try_get_bool",
    "try_get_string_array",
    "try_get_int_array",
    "try_get_double_array",
    "try_get_bool_array",
)
