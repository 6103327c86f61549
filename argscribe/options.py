r"""
Argscribe option declarations and the validated option table.

Overview
- Descriptor: one declared command-line option.
  • boolean: presence-only flag (no following parameters) when True.
  • short: single alphanumeric character, matched as "-x" (bundling allowed: "-xyz").
  • long: alphanumeric name, matched as "--name".
  • keyword: alphanumeric name, matched as a bare token ("name").
  • hint: parameter usage text shown in help (required for non-boolean, forbidden for boolean).
  • descr: short help text (required, non-blank).
  • group: help section label (optional; defaults to DEFAULT_GROUP when rendered).

- Factories
  • flag(...): build a boolean Descriptor.
  • option(..., hint=...): build a non-boolean Descriptor.

- OptionTable: the validated, immutable, ordered collection of descriptors.
  Validation either fully succeeds or raises; there is no partially valid table.

Validation highlights
- At least one of short/long/keyword must be present (empty strings count as absent).
- Identifiers are ASCII alphanumerics only; short is exactly one character;
  long/keyword are at most MAX_NAME_LENGTH characters.
- boolean implies no hint; non-boolean requires a non-blank hint.
- descr must be non-blank.
- short/long/keyword values are each unique across the whole table.

Quick example:
    >>> table = OptionTable([
    ...     flag("v", "verbose", descr="prints verbose messages"),
    ...     option("a", "add", hint="<money>", descr="adds a record", group="records"),
    ... ])
    >>> table.find("add")
    1
"""
import functools
import itertools
import logging
import operator
import re
from collections.abc import Iterable, Sequence

from .faults import *
from .utils import *

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 19
"""Upper bound for long names and keywords."""


class DescriptorType(type):
    """
    Metaclass that gives declaration types stable introspection.

    Responsibilities
    - Expose the names listed in __introspectable__ as read-only properties (mirror()).
    - Provide readable __repr__/__rich_repr__ implementations for diagnostics.
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        def __rich_repr__(self):
            # Only the fields that were actually provided, to keep reprs short.
            for name in type(self).__introspectable__:
                if (object := getattr(self, name)) is not None:
                    yield name, object
        self.__rich_repr__ = __rich_repr__

        return self


class Descriptor(metaclass=DescriptorType):
    """
    Metadata of one declared command-line option.

    The constructor only normalizes and type-checks; content rules (identifier
    shape, hint/boolean pairing, uniqueness) are enforced by OptionTable so
    that failures can name the offending position in the table.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    """

    __introspectable__ = (
        "boolean",
        "short",
        "long",
        "keyword",
        "hint",
        "descr",
        "group",
    )

    def __init__(
            self,
            boolean=False,
            short=None,
            long=None,
            keyword=None,
            hint=None,
            descr="",
            group=None,
    ):
        for name, object in (("short", short), ("long", long), ("keyword", keyword),
                             ("hint", hint), ("group", group)):
            if not isinstance(object, str | None):
                raise TypeError(f"{type(self).__typename__} {name!r} must be a string")
        if not isinstance(descr, str):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")

        self._boolean = bool(boolean)
        # Empty strings are the same as "not declared".
        self._short = short or None
        self._long = long or None
        self._keyword = keyword or None
        self._hint = hint or None
        self._descr = descr
        self._group = group.strip() if group and group.strip() else None

    @property
    def identifiers(self):
        """
        (field, value) pairs of the identifiers that are present, in matching priority order.
        """
        return tuple(
            (field, value)
            for field, value in (("short", self._short), ("long", self._long), ("keyword", self._keyword))
            if value
        )

    def __eq__(self, other):
        if not isinstance(other, Descriptor):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in type(self).__introspectable__))


def flag(short=None, long=None, keyword=None, *, descr, group=None):
    """
    Build a boolean (presence-only) descriptor.
    """
    return Descriptor(True, short, long, keyword, None, descr, group)


def option(short=None, long=None, keyword=None, *, hint, descr, group=None):
    """
    Build a non-boolean descriptor; hint is the parameter usage text (e.g., "<money>").
    """
    return Descriptor(False, short, long, keyword, hint, descr, group)


def _where(index):
    return "option at %s position (index %d)" % (ordinal(index + 1), index)


def _validate_descriptor(descriptor, index, /):
    """
    Enforce the per-entry shape rules, raising the first violation found.
    """
    if not isinstance(descriptor, Descriptor):
        raise InvalidDescriptorError(
            "%s is a %s, not a descriptor" % (_where(index), type(descriptor).__name__),
            hint="declare options with flag(...) or option(...)",
            index=index,
            field=None,
        )

    if not descriptor.identifiers:
        raise MissingIdentifierError(
            "%s has no identifier" % _where(index),
            hint="give it at least one of 'short', 'long', or 'keyword'",
            index=index,
            field="identifier",
        )

    for field, value in descriptor.identifiers:
        if not (value.isascii() and value.isalnum()):
            raise MalformedIdentifierError(
                "%s has a non-alphanumeric %s %r" % (_where(index), field, value),
                hint="identifiers may only contain letters and digits",
                index=index,
                field=field,
            )
        if field == "short" and len(value) != 1:
            raise MalformedIdentifierError(
                "%s has a short flag %r longer than one character" % (_where(index), value),
                hint="use 'long' or 'keyword' for multi-character names",
                index=index,
                field=field,
            )
        if len(value) > MAX_NAME_LENGTH:
            raise IdentifierTooLongError(
                "%s has a %s %r longer than %d characters" % (_where(index), field, value, MAX_NAME_LENGTH),
                hint="shorten the name",
                index=index,
                field=field,
            )

    if descriptor.boolean and descriptor.hint is not None:
        raise BooleanHintError(
            "%s is boolean but declares the hint %r" % (_where(index), descriptor.hint),
            hint="drop the hint or declare it as a non-boolean option",
            index=index,
            field="hint",
        )

    if not descriptor.boolean and not (descriptor.hint and descriptor.hint.strip()):
        raise MissingHintError(
            "%s is non-boolean but declares no hint" % _where(index),
            hint="describe its parameters (for example: hint='<file>')",
            index=index,
            field="hint",
        )

    if not descriptor.descr.strip():
        raise EmptyDescriptionError(
            "%s has an empty description" % _where(index),
            hint="describe what the option does",
            index=index,
            field="descr",
        )


def _validate_uniqueness(descriptors, /):
    """
    Pairwise comparison of identifiers; the first colliding pair is reported.
    """
    for (first, one), (second, other) in itertools.combinations(enumerate(descriptors), 2):
        for field in ("short", "long", "keyword"):
            if (value := getattr(one, field)) and value == getattr(other, field):
                raise DuplicateIdentifierError(
                    "%s reuses the %s %r already declared by the %s" % (
                        _where(second), field, value, _where(first)
                    ),
                    hint="every short flag, long name, and keyword must be unique",
                    index=second,
                    other=first,
                    field=field,
                )


class OptionTable(Sequence):
    """
    Validated, immutable, ordered set of option descriptors.

    Lifecycle
    - Constructed once from an ordered sequence of Descriptor.
    - Validation runs in two phases (entry shapes, then global uniqueness) and the
      first violation raises a ConfigurationError subclass naming the position and field.
    - After construction the table never changes; lookups are precomputed.

    Lookups
    - by_short / by_long / by_keyword: exact match → index or None.
    - find(id): short, then long, then keyword → index or None.
    """

    def __init__(self, descriptors, /):
        if descriptors is None:
            raise EmptyTableError(
                "option table is missing",
                hint="pass a sequence of flag(...) and option(...) declarations",
                index=None,
                field=None,
            )
        if isinstance(descriptors, str) or not isinstance(descriptors, Iterable):
            raise InvalidDescriptorError(
                "option table must be a sequence of descriptors, got %s" % type(descriptors).__name__,
                hint="pass a sequence of flag(...) and option(...) declarations",
                index=None,
                field=None,
            )

        descriptors = tuple(descriptors)
        if not descriptors:
            raise EmptyTableError(
                "option table is empty",
                hint="declare at least one option",
                index=None,
                field=None,
            )

        for index, descriptor in enumerate(descriptors):
            _validate_descriptor(descriptor, index)
        _validate_uniqueness(descriptors)

        self._descriptors = descriptors
        self._lookup = {
            field: {getattr(descriptor, field): index
                    for index, descriptor in enumerate(descriptors)
                    if getattr(descriptor, field)}
            for field in ("short", "long", "keyword")
        }
        logger.debug("validated option table with %d entries", len(descriptors))

    def __getitem__(self, index):
        return self._descriptors[index]

    def __len__(self):
        return len(self._descriptors)

    def __repr__(self):
        return f"option-table({len(self)} entries)"

    def __rich_repr__(self):
        yield from self._descriptors

    def by_short(self, name, /):
        return self._lookup["short"].get(name)

    def by_long(self, name, /):
        return self._lookup["long"].get(name)

    def by_keyword(self, name, /):
        return self._lookup["keyword"].get(name)

    def find(self, id, /):
        """
        Resolve an identifier by short flag, long name, or keyword (in that order).

        Leading dashes are accepted ("-a", "--add") for convenience when the id
        comes straight from user input. Returns the index, or None on a miss.
        """
        if not isinstance(id, str) or not id:
            return None
        if id.startswith("--"):
            return self.by_long(id[2:])
        if id.startswith("-"):
            return self.by_short(id[1:])
        for lookup in (self.by_short, self.by_long, self.by_keyword):
            if (index := lookup(id)) is not None:
                return index
        return None


__all__ = (
    "MAX_NAME_LENGTH",
    "Descriptor",
    "OptionTable",
    "flag",
    "option",
)
