"""
Argscribe argument matcher: classify argv tokens against an OptionTable.

phases
- argv[0] (program name) is skipped.
- each remaining token is classified exactly once:
  • "--name"  → long-name lookup; unknown names are fatal.
  • "-abc"    → every character after the dash is a short flag; unknown characters are fatal.
  • "name"    → keyword lookup; misses are kept as positionals.
  • "-", "--" → malformed, fatal.
  • single characters (other than "-") and the empty string → positionals.
- matched options are recorded once, in first-seen order, into the boolean or
  non-boolean list according to the descriptor.

notes
- the matcher never consumes the tokens following a non-boolean option; they stay
  in positionals (argv order) and their arity is up to the caller.
- a failure raises before any result exists; there is no partial ParseResult.
"""
import difflib
import logging
from collections import deque
from dataclasses import dataclass

from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParseResult:
    """
    Outcome of the single matching pass.

    - nonboolean: table indices of matched non-boolean options (first-seen, unique).
    - boolean: table indices of matched boolean options (first-seen, unique).
    - positionals: raw tokens not matched to any option, in argv order.
    """
    nonboolean: tuple[int, ...] = ()
    boolean: tuple[int, ...] = ()
    positionals: tuple[str, ...] = ()


def _suggest(input, candidates):
    """
    friendly hint with the closest declared spelling, if any.
    """
    try:
        return "did you mean %r? run with --help to see all options" % difflib.get_close_matches(input, candidates, 1)[0]
    except IndexError:
        return "run with --help to see all options"


def match(table, argv, /):
    """
    Run the matching pass over argv.

    Parameters
    - table: OptionTable
      The validated declaration to match against.
    - argv: Sequence[str]
      Process arguments; element 0 is the program name and is ignored.

    Returns
    - ParseResult

    Raises
    - MalformedTokenError: for a bare "-" or "--".
    - UnknownFlagError: for a "--name" or "-x" that is not declared.
    """
    nonboolean, boolean, positionals = [], [], []

    def record(index):
        if index not in (bucket := boolean if table[index].boolean else nonboolean):
            bucket.append(index)

    tokens = deque(argv[1:])
    position = 0
    while tokens:
        token = tokens.popleft()
        position += 1

        if not isinstance(token, str):
            raise TypeError("argv entries must be strings, got %s" % type(token).__name__)

        if len(token) < 2:
            if token == "-":
                raise MalformedTokenError(
                    "lone '-' at %s position" % ordinal(position),
                    title="malformed flag",
                    hint="write the flag letters right after the dash (for example: -v)",
                    token=token,
                    position=position,
                )
            logger.debug("token %r at %d is a positional", token, position)
            positionals.append(token)

        elif token.startswith("--"):
            if len(token) == 2:
                raise MalformedTokenError(
                    "lone '--' at %s position" % ordinal(position),
                    title="malformed flag",
                    hint="write the long name right after the dashes (for example: --verbose)",
                    token=token,
                    position=position,
                )
            if (index := table.by_long(name := token[2:])) is None:
                raise UnknownFlagError(
                    "unknown flag %r at %s position" % (token, ordinal(position)),
                    title="unknown flag",
                    hint=_suggest(name, [descriptor.long for descriptor in table if descriptor.long]),
                    token=token,
                    input=name,
                    position=position,
                )
            logger.debug("token %r at %d matched option %d", token, position, index)
            record(index)

        elif token.startswith("-"):
            # bundled short flags: every character is its own lookup
            for char in token[1:]:
                if (index := table.by_short(char)) is None:
                    raise UnknownFlagError(
                        "unknown flag '-%s' in %r at %s position" % (char, token, ordinal(position)),
                        title="unknown flag",
                        hint=_suggest(char, [descriptor.short for descriptor in table if descriptor.short]),
                        token=token,
                        input=char,
                        position=position,
                    )
                logger.debug("flag '-%s' at %d matched option %d", char, position, index)
                record(index)

        elif (index := table.by_keyword(token)) is not None:
            logger.debug("token %r at %d matched keyword option %d", token, position, index)
            record(index)

        else:
            logger.debug("token %r at %d is a positional", token, position)
            positionals.append(token)

    return ParseResult(tuple(nonboolean), tuple(boolean), tuple(positionals))


__all__ = (
    "ParseResult",
    "match",
)
