"""
Expense tracker front-end: declares the command-line surface and reports what was matched.

    python main.py -ev fetch 240105
    python main.py --help
    python main.py -h add
"""
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from argscribe import Engine, flag, option

__prog__ = "expense"

OPTIONS = [
    option("h", "help", hint="[option]", descr="Prints help message", group="general"),
    option("a", "add", hint="<money> <last_4_digits> <item> <remark>",
           descr="Adds an expense or income record", group="records"),
    option("f", "fetch", hint="[yymmdd]", descr="Fetches all records of the specified day or today",
           group="records"),
    option("d", "delete", hint="<serial_no>", descr="Deletes record of the given serial number",
           group="records"),
    option(long="sort", hint="<new/old/high/low>", descr="Sorts records in the given order", group="records"),
    option(long="from", hint="<yymmdd/yymm/yyww/yy>",
           descr="Provides a start point for range operations (inclusive)", group="ranges"),
    option(long="to", hint="<yymmdd/yymm/yyww/yy>",
           descr="Provides a finish point for range operations (inclusive)", group="ranges"),
    flag("e", "expense", descr="Does expense-related operations only", group="filters"),
    flag("i", "income", descr="Does income-related operations only", group="filters"),
    flag("w", "week", descr="Signals the date string in format of yyww", group="filters"),
    flag("v", "verbose", descr="Prints verbose messages", group="general"),
    flag(long="now", descr="Gets today's date information: year, month, week, date", group="general"),
]


def wants_verbose(argv, /):
    """
    True when argv asks for --verbose, alone or bundled (-ev).

    Checked on the raw tokens so logging is live before the engine parses.
    """
    return any(
        token == "--verbose" or (token.startswith("-") and not token.startswith("--") and "v" in token)
        for token in argv[1:]
    )


def main():
    console = Console()

    if wants_verbose(sys.argv):
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(console=console)])

    with Engine(OPTIONS, "0.1.0", usage="expense [options] [parameters]", shell=True, colorful=True) as engine:
        engine.parse()
        table = engine.table

        if table.by_long("help") in engine.nonboolean:
            if engine.positionals and (text := engine.help_for(engine.positionals[0])) is not None:
                console.print(text, end="", markup=False, highlight=False)
            else:
                console.print(engine.help(), end="", markup=False, highlight=False)
            return

        console.print("%s %s" % (__prog__, engine.version), markup=False, highlight=False)
        for title, indices in (("options", engine.nonboolean), ("flags", engine.boolean)):
            names = [table[index].long or table[index].short for index in indices]
            console.print("%s: %s" % (title, ", ".join(names) or "-"), markup=False, highlight=False)
        console.print("parameters: %s" % (" ".join(engine.positionals) or "-"), markup=False, highlight=False)


if __name__ == '__main__':
    main()
