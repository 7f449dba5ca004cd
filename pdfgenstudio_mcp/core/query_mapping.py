"""
Query Mapping
=============

Declarative rules turning nested tool options into flat query parameters.

A ``QueryMapping`` is a table of per-key rules:

- ``Rename("pageFormat", "format")`` sends the value under another key.
- ``Flatten("margin", "margin")`` spreads ``{"top": "1cm"}`` into ``marginTop=1cm``.

Keys without a rule pass through unchanged. ``None`` values are dropped and any
remaining nested object is JSON encoded, so the result only holds scalars.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

QueryValue = Union[str, int, float, bool]
QueryMap = Dict[str, Optional[QueryValue]]


@dataclass(frozen=True)
class Rename:
    """Send ``source`` under the query key ``target``."""

    source: str
    target: str


@dataclass(frozen=True)
class Flatten:
    """Spread a nested object into ``<prefix><Key>`` entries, skipping empty values."""

    source: str
    prefix: str

    def key_for(self, name: str) -> str:
        return f"{self.prefix}{name[:1].upper()}{name[1:]}"


Rule = Union[Rename, Flatten]


class QueryMapping:
    """A table of option rules keyed by option name."""

    def __init__(self, *rules: Rule) -> None:
        self._rules: Dict[str, Rule] = {rule.source: rule for rule in rules}

    def apply(self, options: Optional[Mapping[str, Any]]) -> Dict[str, QueryValue]:
        """Flatten ``options`` into query entries, preserving insertion order."""
        query: Dict[str, QueryValue] = {}
        if not options:
            return query

        for key, value in options.items():
            if value is None:
                continue

            rule = self._rules.get(key)
            if isinstance(rule, Flatten):
                if not isinstance(value, Mapping):
                    raise ValueError(f"Option '{key}' must be an object")
                for name, nested in value.items():
                    if nested:
                        query[rule.key_for(name)] = _scalar(nested)
            elif isinstance(rule, Rename):
                query[rule.target] = _scalar(value)
            else:
                query[key] = _scalar(value)

        return query


def _scalar(value: Any) -> QueryValue:
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    return value


def merge_query(base: Mapping[str, Any], *groups: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge option groups over ``base``; later groups win, key order follows first sight."""
    merged: Dict[str, Any] = dict(base)
    for group in groups:
        merged.update(group)
    return merged


def format_query_value(value: QueryValue) -> str:
    """String form of a query value, matching what a JavaScript client would send."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# PDF options carry the page size under the API's ``format`` key and margins
# as four top-level entries.
PDF_OPTIONS = QueryMapping(Rename("pageFormat", "format"), Flatten("margin", "margin"))

PASSTHROUGH = QueryMapping()
