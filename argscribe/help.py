"""
Argscribe help renderer: two-column, terminal-width-aware option listings.

Layout
    usage: expense [options] [parameters]      (only when a usage line is given)

      records:
        -a, --add <money>     Adds an expense or income record
        -d, --delete <no>     Deletes record of the given serial number
                              (cannot be undone)

- Group headers are indented two spaces, option rows four.
- The label column is `indent` wide: the longest label plus LABEL_PADDING, but
  never more than half of the terminal.
- Labels and descriptions are wrapped independently (argscribe.text.wrap) and then
  zipped into columns (argscribe.text.join).

Width
- Comes from a provider callable (by default the rich console width). A provider that
  fails with OSError/ValueError, or reports a non-positive width, falls back to
  DEFAULT_WIDTH. Widths below MIN_WIDTH are raised to it so both columns keep room.
"""
import logging

from rich.console import Console

from .text import join, wrap

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 80
MIN_WIDTH = 20
LABEL_PADDING = 8


def terminal_width():
    """
    Current output width in columns, as rich sees it (COLUMNS, then the terminal, then 80).
    """
    return Console().width


def resolve_width(provider, /):
    """
    Turn a width provider (callable or int) into a usable column count.
    """
    try:
        width = provider() if callable(provider) else provider
    except (OSError, ValueError) as exception:
        logger.debug("width provider failed (%s); using %d columns", exception, DEFAULT_WIDTH)
        return DEFAULT_WIDTH

    if not isinstance(width, int) or width <= 0:
        return DEFAULT_WIDTH
    return max(width, MIN_WIDTH)


class HelpRenderer:
    """
    Render full or single-option help from precomputed groups.

    Parameters
    - groups: tuple[Group, ...] built by argscribe.groups.group_options.
    - width: callable | int, the terminal width provider.
    - usage: optional usage line printed above the groups.
    """

    def __init__(self, groups, /, width=terminal_width, usage=None):
        self._groups = tuple(groups)
        self._width = width
        self._usage = usage
        self._longest = max((len(entry.label) for group in self._groups for entry in group), default=0)

    def indent(self, width, /):
        return min(width // 2, self._longest + LABEL_PADDING)

    def _entry(self, entry, width, indent, dest=""):
        return join(
            wrap(entry.label, indent, "    ", "  "),
            wrap(entry.descr, width - indent),
            indent,
            dest,
        )

    def render(self):
        """
        Full help text: optional usage line, then every group with its entries.
        """
        width = resolve_width(self._width)
        indent = self.indent(width)
        logger.debug("rendering help at %d columns (label column %d)", width, indent)

        text = "usage: %s\n\n" % self._usage if self._usage else ""
        for number, group in enumerate(self._groups):
            if number:
                text += "\n"
            text += "  %s:\n" % group.name
            for entry in group:
                text = self._entry(entry, width, indent, text)
        return text

    def render_entry(self, index, /):
        """
        Help text for the option at table `index`: its group header plus its row.

        Returns None when no entry has that index.
        """
        for group in self._groups:
            for entry in group:
                if entry.index == index:
                    width = resolve_width(self._width)
                    return self._entry(entry, width, self.indent(width), "  %s:\n" % group.name)
        return None


__all__ = (
    "DEFAULT_WIDTH",
    "MIN_WIDTH",
    "LABEL_PADDING",
    "HelpRenderer",
    "resolve_width",
    "terminal_width",
)
