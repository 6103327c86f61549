"""
Argscribe engine: the owned context that validates, parses, and answers queries.

Lifecycle
- CONFIGURED: Engine(options, version) validated the table and built the help groups.
- PARSED: parse(argv) ran the single matching pass; results are available.
- CLOSED: close() (or leaving a `with` block) dropped all state.

Parsing twice (a failed first parse counts), or using a closed engine, is a UsageError.

Fault surfacing
- Every fault raised by the lower layers goes through Engine.trigger(), which adds
  the runtime flags (shell, colorful, prog) and hands it to argscribe.faults.trigger():
  • shell=False (default): the fault is raised to the caller.
  • shell=True: the fault is printed to stderr through rich and the process exits(1).

Quick start
    from argscribe import Engine, flag, option

    with Engine([
        flag("v", "verbose", descr="prints verbose messages"),
        option("a", "add", hint="<money> <item>", descr="adds a record", group="records"),
    ], "1.0.0", shell=True) as engine:
        engine.parse()
        if engine.table.by_short("v") in engine.boolean:
            ...
        print(engine.help(), end="")
"""
import logging
import os.path
import sys
from enum import Enum

from .faults import *
from .groups import group_options
from .help import HelpRenderer, terminal_width
from .matcher import match
from .options import OptionTable
from .utils import *

logger = logging.getLogger(__name__)


class EngineState(Enum):
    CONFIGURED = "configured"
    PARSED = "parsed"
    CLOSED = "closed"


class Engine:
    """
    Owned context for one program run: option table, help groups, and parse result.

    Parameters
    - options: Iterable[Descriptor]
      The option declaration; validated into an OptionTable immediately.
    - version: str
      Version string reported by the `version` query (must be non-blank).
    - usage: str | Unset
      Optional usage line shown at the top of the full help.
    - width: callable | int | Unset
      Terminal width provider for help rendering (defaults to the rich console width).
    - shell: bool
      When True, faults are rendered and end the process instead of being raised.
    - colorful: bool
      When True, rendered faults are styled (see __styles__ in __main__).
    - prog: str | Unset
      Program name used in fault headers (defaults to basename of sys.argv[0]).
    """

    def __init__(self, options, version, /, *, usage=Unset, width=Unset, shell=False, colorful=False, prog=Unset):
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._prog = coalesce(prog, os.path.basename(sys.argv[0]) if sys.argv else "")
        self._result = Unset
        self._attempted = False

        try:
            if not isinstance(version, str) or not version.strip():
                raise EmptyVersionError(
                    "version string is empty" if isinstance(version, str) else "version is missing",
                    hint="pass the program version, for example: Engine(options, '1.0.0')",
                    index=None,
                    field="version",
                )
            self._table = OptionTable(options)
        except ConfigurationError as fault:
            self.trigger(fault)

        self._version = version.strip()
        self._groups = group_options(self._table)
        self._renderer = HelpRenderer(self._groups, coalesce(width, terminal_width), coalesce(usage))
        self._state = EngineState.CONFIGURED
        logger.debug("engine configured: %d options in %d groups", len(self._table), len(self._groups))

    def __enter__(self):
        return self

    def __exit__(self, *exception):
        self.close()

    def __repr__(self):
        return f"engine(version={self._version!r}, state={self._state.value!r})"

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this engine's runtime flags merged in.
        """
        trigger(fault, **options, shell=self._shell, colorful=self._colorful, prog=self._prog)

    def _require(self, *states):
        if self._state in states:
            return
        if self._state is EngineState.CLOSED:
            self.trigger(UsageError(
                "engine is closed",
                title="engine closed",
                code=FaultCode.CLOSED_ENGINE,
                hint="create a new engine for another run",
            ))
        elif self._state is EngineState.PARSED:
            self.trigger(UsageError(
                "arguments were already parsed",
                title="repeated parse",
                code=FaultCode.REPEATED_CALL,
                hint="parse() runs once per engine",
            ))
        else:
            self.trigger(UsageError(
                "arguments were not parsed yet",
                title="missing parse",
                code=FaultCode.NOT_PARSED,
                hint="call parse() before reading results",
            ))

    @property
    def state(self):
        return self._state

    @property
    def version(self):
        self._require(EngineState.CONFIGURED, EngineState.PARSED)
        return self._version

    @property
    def table(self):
        self._require(EngineState.CONFIGURED, EngineState.PARSED)
        return self._table

    @property
    def groups(self):
        self._require(EngineState.CONFIGURED, EngineState.PARSED)
        return self._groups

    @property
    def result(self):
        self._require(EngineState.PARSED)
        return self._result

    @property
    def nonboolean(self):
        """Indices of matched non-boolean options, first-seen order."""
        return self.result.nonboolean

    @property
    def boolean(self):
        """Indices of matched boolean options, first-seen order."""
        return self.result.boolean

    @property
    def positionals(self):
        return self.result.positionals

    def parse(self, argv=Unset, /):
        """
        Run the matching pass once over argv (defaults to sys.argv).

        Returns
        - ParseResult, also kept on the engine for the query properties.
        """
        self._require(EngineState.CONFIGURED)
        if self._attempted:
            self.trigger(UsageError(
                "arguments were already parsed",
                title="repeated parse",
                code=FaultCode.REPEATED_CALL,
                hint="parse() runs once per engine, even when the first run failed",
            ))
        self._attempted = True
        argv = list(coalesce(argv, sys.argv))

        try:
            result = match(self._table, argv)
        except ParseError as fault:
            self.trigger(fault)

        self._result = result
        self._state = EngineState.PARSED
        logger.debug(
            "parsed %d arguments: %d non-boolean, %d boolean, %d positional",
            max(len(argv) - 1, 0), len(result.nonboolean), len(result.boolean), len(result.positionals),
        )
        return result

    def help(self):
        """Full help text."""
        self._require(EngineState.CONFIGURED, EngineState.PARSED)
        return self._renderer.render()

    def help_for(self, id, /):
        """
        Help text of one option, looked up by short flag, long name, or keyword.

        Returns None when no option matches.
        """
        self._require(EngineState.CONFIGURED, EngineState.PARSED)
        if (index := self._table.find(id)) is None:
            return None
        return self._renderer.render_entry(index)

    def close(self):
        """
        Drop table, groups, and result. Closing twice is harmless.
        """
        if self._state is EngineState.CLOSED:
            return
        self._table = self._groups = self._renderer = None
        self._result = Unset
        self._state = EngineState.CLOSED
        logger.debug("engine closed")


__all__ = (
    "Engine",
    "EngineState",
)
