"""
Argscribe help groups: first-seen-ordered buckets of pre-rendered option entries.

- Group order follows the first occurrence of each group name in the table.
- Entry order inside a group follows table order.
- Descriptors without a group land in DEFAULT_GROUP.
- Every entry carries its rendered label ("-a, --add, add <money>") and description,
  computed once so help rendering never has to look at descriptors again.
"""
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "options"


@dataclass(frozen=True, slots=True)
class Entry:
    """One option as shown in help: table index, descriptor, and rendered columns."""
    index: int
    descriptor: object
    label: str
    descr: str


@dataclass(frozen=True, slots=True)
class Group:
    name: str
    entries: tuple[Entry, ...]

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)


def render_label(descriptor, /):
    """
    Build the label column for a descriptor.

    Present identifiers are listed as "-s, --long, keyword, "; the trailing ", "
    becomes a single space and non-boolean options get their hint appended.

    Examples
    - flag("v", "verbose")                 -> "-v, --verbose "
    - option("a", "add", hint="<money>")   -> "-a, --add <money>"
    """
    parts = []
    if descriptor.short:
        parts.append("-" + descriptor.short)
    if descriptor.long:
        parts.append("--" + descriptor.long)
    if descriptor.keyword:
        parts.append(descriptor.keyword)

    label = ", ".join(parts) + " "
    if not descriptor.boolean:
        label += descriptor.hint
    return label


def group_options(table, /):
    """
    Partition a validated OptionTable into ordered groups.

    Returns
    - tuple[Group, ...] in first-seen group order.
    """
    buckets = {}  # insertion order is first-seen order
    for index, descriptor in enumerate(table):
        buckets.setdefault(descriptor.group or DEFAULT_GROUP, []).append(
            Entry(index, descriptor, render_label(descriptor), descriptor.descr)
        )

    groups = tuple(Group(name, tuple(entries)) for name, entries in buckets.items())
    logger.debug("built %d help groups: %s", len(groups), ", ".join(group.name for group in groups))
    return groups


__all__ = (
    "DEFAULT_GROUP",
    "Entry",
    "Group",
    "render_label",
    "group_options",
)
