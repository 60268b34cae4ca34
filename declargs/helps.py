"""
declargs help and version rendering.

Layout (plain mode)

    prog version 1.2.0
    Usage: prog --message MSG [OPTION]...
    DOCUMENTATION
    Prints a message a few times.

    REQUIRED ARGUMENTS:
      -m, --message MSG       the message to print
    OPTIONAL ARGUMENTS:
      -h, --help              show this help message and exit
      -v, --version           show version information and exit
      -r, --repeat <integer>  how many times to print it

- Banner: the application name, followed by "version X" when a version was
  given at creation.
- Usage: every required argument inline (flag and tip), then "[OPTION]..."
  when optional arguments exist.
- DOCUMENTATION: emitted only when documentation was given.
- REQUIRED ARGUMENTS: emitted only when required arguments exist.
- OPTIONAL ARGUMENTS: always present (--help is always optional).
- Each entry shows "-s, --name TIP" ("-s TIP" when the short name equals the
  name, "--name TIP" without a short name), padded to the widest entry of the
  whole help, then the description.

Palette keys (colorful mode, overridable through __styles__ in __main__)
- program-name, version, usage-label, section-label, documentation
- flag-name, metavar, argument-description
"""
from rich.text import Text

from .faults import _palette


def _summary(argument, text):
    """flag summary of one argument, as a Text."""
    if argument.short is not None and argument.short == argument.name:
        flags = [text("-" + argument.short, "flag-name")]
    elif argument.short is not None:
        flags = [text("-" + argument.short, "flag-name"), Text(", "), text("--" + argument.name, "flag-name")]
    else:
        flags = [text("--" + argument.name, "flag-name")]

    summary = Text.assemble(*flags)
    if argument.metavar:
        summary.append_text(Text.assemble(" ", text(argument.metavar, "metavar")))
    return summary


def render_help(context, /):
    """
    Render the full help of a context as a single Text.

    The flag summary column is as wide as the widest summary over every
    declared argument, so both sections align on the same column.
    """
    _, text = _palette(context.colorful)
    arguments = tuple(context.arguments)

    lines = [render_version(context)]

    usage = Text.assemble(text("Usage:", "usage-label"), " ", text(context.name, "program-name"))
    for argument in arguments:
        if argument.required:
            usage.append_text(Text.assemble(" ", text("--" + argument.name, "flag-name")))
            if argument.metavar:
                usage.append_text(Text.assemble(" ", text(argument.metavar, "metavar")))
    if any(not argument.required for argument in arguments):
        usage.append(" [OPTION]...")
    lines.append(usage)

    if context.doc is not None:
        lines.append(text("DOCUMENTATION", "section-label"))
        lines.append(text(context.doc, "documentation"))

    lines.append(Text())

    summaries = {id(argument): _summary(argument, text) for argument in arguments}
    width = max((len(summary) for summary in summaries.values()), default=0)

    def section(title, members):
        lines.append(text(title, "section-label"))
        for argument in members:
            entry = Text("  ")
            entry.append_text(summaries[id(argument)].copy())
            if argument.descr:
                entry.pad_right(2 + width - len(entry))
                entry.append_text(Text.assemble("  ", text(argument.descr, "argument-description")))
            lines.append(entry)

    if required := [argument for argument in arguments if argument.required]:
        section("REQUIRED ARGUMENTS:", required)
    section("OPTIONAL ARGUMENTS:", [argument for argument in arguments if not argument.required])

    return Text("\n").join(lines)


def render_version(context, /):
    """banner line: "prog version X" when a version is known, "prog" otherwise."""
    _, text = _palette(context.colorful)
    banner = Text.assemble(text(context.name, "program-name"))
    if context.version is not None:
        banner.append_text(Text.assemble(" version ", text(context.version, "version")))
    return banner


__all__ = (
    "render_help",
    "render_version",
)
