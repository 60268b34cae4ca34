"""
declargs output and allocation collaborators.

A parsing context performs no I/O and owns no memory on its own: everything
it writes goes through a printer and everything it keeps is registered with
an allocator. Both are plain objects handed to create(), so hosts and tests
can swap them.

Printer
- Any callable printer(text, /, *, error=False) receiving a rich Text.
- The default Printer writes help/version to stdout and diagnostics to
  stderr through rich consoles, with highlighting disabled so the output
  stays byte-for-byte what the context rendered.

Allocator
- alloc(object) registers an object the context will own and returns it.
- free(object) releases it. destroy() frees every owned object once.
- The default Allocator keeps no books; instrumented allocators count live
  objects to prove that destroy() releases everything.
"""
from rich.console import Console

from .utils import Unset, coalesce


class Printer:
    """Default printer backed by two rich consoles."""

    def __init__(self, *, stdout=Unset, stderr=Unset):
        if not isinstance(stdout, Console | Unset):
            raise TypeError("Printer 'stdout' must be a rich console")
        if not isinstance(stderr, Console | Unset):
            raise TypeError("Printer 'stderr' must be a rich console")
        self._stdout = coalesce(stdout, Console(highlight=False))
        self._stderr = coalesce(stderr, Console(stderr=True, highlight=False))

    def __call__(self, text, /, *, error=False):
        console = self._stderr if error else self._stdout
        console.print(text, highlight=False, soft_wrap=True)


class Allocator:
    """Default allocator: ownership is recorded by the context only."""

    def alloc(self, object, /):
        return object

    def free(self, object, /):
        return None


__all__ = (
    "Printer",
    "Allocator",
)
