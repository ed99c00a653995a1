import sys

from rich.console import Console
from rich.text import Text

from pennant import *
from pennant.utils import Unset, coalesce


def usage(flags, program, stream):
    console = Console(file=stream, soft_wrap=True, highlight=False, markup=False)
    console.print(Text("Usage: %s [OPTIONS] [--] <OUTPUT FILES...>" % program))
    console.print(Text("OPTIONS:"))
    flags.print_options(stream)


def fail(message):
    Console(stderr=True, highlight=False, markup=False).print(Text("ERROR: " + message))
    return 1


def main(args=Unset, /):
    args = list(coalesce(args, sys.argv))
    if not args:
        return fail("no program name in the argument vector")

    flags = FlagSet()

    help = flags.declare_bool("help", False, "Print this help to stdout and exit with 0")
    line = flags.declare_string("line", "Hi!", "Line to output to the file")
    count = flags.declare_uint64("count", 64, "Amount of lines to generate")

    program = args[0]

    if not (result := flags.parse(args)):
        usage(flags, program, sys.stderr)
        flags.print_error(sys.stderr)
        return 1

    if help.value:
        usage(flags, program, sys.stdout)
        return 0

    if not result.rest:
        usage(flags, program, sys.stderr)
        return fail("no output files provided")

    for path in result.rest:
        with open(path, "w") as file:
            file.writelines(line.value + "\n" for _ in range(count.value))

    return 0


if __name__ == '__main__':
    sys.exit(main())
