"""
cmdlore catalog: parse many scripts and group the commands by category.

The catalog consumes (path, text) pairs supplied by whatever fetched the
scripts; it never touches the network or the filesystem. Each pair is parsed
independently, so callers are free to fan the per-file work out themselves
and hand the resulting records to group_commands().
"""
from collections import defaultdict
from typing import NamedTuple

from .categories import FALLBACK_CATEGORY
from .parsing import parse_command
from .records import CommandRecord


class CategoryGroup(NamedTuple):
    category: str
    commands: tuple[CommandRecord, ...]


def group_commands(records, /):
    """
    Group records by category.

    Groups are sorted by category label and each group's commands by name,
    both case-insensitively.
    """
    groups = defaultdict(list)
    for record in records:
        groups[record.category or FALLBACK_CATEGORY].append(record)

    return tuple(
        CategoryGroup(category, tuple(sorted(commands, key=lambda record: record.name.casefold())))
        for category, commands in sorted(groups.items(), key=lambda item: item[0].casefold())
    )


def build_catalog(config, sources, /):
    """
    Parse every (path, text) source and return its CategoryGroup tuple.

    Sources without text, or without a derivable command name, are skipped.
    """
    records = []
    for path, text in sources:
        if not text:
            continue
        if (record := parse_command(config, text, path)) is not None:
            records.append(record)
    return group_commands(records)


__all__ = (
    "CategoryGroup",
    "group_commands",
    "build_catalog",
)
