"""
Shared fakes for the declargs test-suite.

- RecordingPrinter: keeps every rendered Text as plain strings, split by stream.
- CountingAllocator: counts live objects so tests can check that destroy()
  releases everything a context allocated.
- parse(): create + declare + submit in one call for scenario tests.
"""
from declargs import create


class RecordingPrinter:
    def __init__(self):
        self.stdout = []
        self.stderr = []

    def __call__(self, text, /, *, error=False):
        (self.stderr if error else self.stdout).append(text.plain)

    @property
    def out(self):
        return "\n".join(self.stdout)

    @property
    def err(self):
        return "\n".join(self.stderr)


class CountingAllocator:
    def __init__(self):
        self.allocs = 0
        self.frees = 0

    @property
    def live(self):
        return self.allocs - self.frees

    def alloc(self, object, /):
        self.allocs += 1
        return object

    def free(self, object, /):
        self.frees += 1


def parse(argv, *declarations, **options):
    """
    Build a context over argv, declare each (args, kwargs) pair and submit.

    Returns (context, handles, result, printer).
    """
    printer = options.pop("printer", RecordingPrinter())
    context = create(argv, printer=printer, **options)
    handles = [context.declare(*args, **kwargs) for args, kwargs in declarations]
    return context, handles, context.submit(), printer


def arg(*args, **kwargs):
    """declaration helper for parse()."""
    return args, kwargs
