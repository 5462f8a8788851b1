#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
In-memory model of a Gmail filter set.

A Gmail filter is a trigger condition (Match) paired with the effects applied
when it fires (Actions). A FilterSet is an ordered collection of filters that
can be expanded into one filter per OR clause and sorted into a canonical,
deterministic order for the tabular form.
"""
from dataclasses import dataclass, field, replace
from functools import total_ordering
from typing import Any, Dict, Iterable, Iterator, List, Tuple

OR_SEPARATOR = " OR "


@dataclass(frozen=True)
class LogicExpression:
    """An ordered disjunction of free-text search clauses."""

    clauses: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, raw: str) -> "LogicExpression":
        """
        Split a Gmail search string on top-level " OR " separators.

        This is deliberately naive: parentheses are not balanced, so a clause
        containing " OR " inside a group such as list:(a OR b) is split too.
        Any string parses, the empty string into a single empty clause.
        """
        return cls(tuple(raw.split(OR_SEPARATOR)))

    def render(self) -> str:
        return OR_SEPARATOR.join(self.clauses)

    def __str__(self) -> str:
        return self.render()

    def __bool__(self) -> bool:
        return bool(self.render())

    def __iter__(self) -> Iterator[str]:
        return iter(self.clauses)

    def __len__(self) -> int:
        return len(self.clauses)


@total_ordering
@dataclass(frozen=True)
class Match:
    """Trigger conditions of a filter. Empty strings mean "not set"."""

    from_: str = ""
    to: str = ""
    subject: str = ""
    has_word: LogicExpression = field(default_factory=LogicExpression)
    not_have_word: str = ""

    def sort_key(self) -> Tuple:
        # Clauses last so that expressions rendering identically still order.
        return (
            self.from_,
            self.to,
            self.subject,
            self.has_word.render(),
            self.not_have_word,
            self.has_word.clauses,
        )

    def __lt__(self, other: "Match") -> bool:
        if not isinstance(other, Match):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def has_only_word_condition(self) -> bool:
        """True when hasWord is the sole condition that may be set."""
        return not (self.from_ or self.to or self.subject or self.not_have_word)

    def to_row(self) -> List[str]:
        return [
            self.from_,
            self.to,
            self.subject,
            self.has_word.render(),
            self.not_have_word,
        ]


@total_ordering
@dataclass(frozen=True)
class Actions:
    """Effects of a filter. Labels are always kept sorted; duplicates stay."""

    labels: Tuple[str, ...] = ()
    mark_as_read: bool = False
    archive: bool = False
    never_spam: bool = False
    trash: bool = False
    never_important: bool = False

    def __post_init__(self):
        object.__setattr__(self, "labels", tuple(sorted(self.labels)))

    def flags(self) -> Tuple[bool, bool, bool, bool, bool]:
        return (
            self.mark_as_read,
            self.archive,
            self.never_spam,
            self.trash,
            self.never_important,
        )

    def sort_key(self) -> Tuple:
        return (len(self.labels), self.labels, self.flags())

    def __lt__(self, other: "Actions") -> bool:
        if not isinstance(other, Actions):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def to_row(self) -> List[str]:
        return [",".join(self.labels)] + [bool_cell(flag) for flag in self.flags()]


@total_ordering
@dataclass(frozen=True)
class Filter:
    """One Gmail filter. Ordered by its actions first, then by its match."""

    match: Match = field(default_factory=Match)
    actions: Actions = field(default_factory=Actions)

    def sort_key(self) -> Tuple:
        return (self.actions.sort_key(), self.match.sort_key())

    def __lt__(self, other: "Filter") -> bool:
        if not isinstance(other, Filter):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def with_clause(self, clause: str) -> "Filter":
        """Copy of this filter whose hasWord holds only ``clause``."""
        return replace(self, match=replace(self.match, has_word=LogicExpression((clause,))))

    def to_row(self) -> List[str]:
        return self.match.to_row() + self.actions.to_row()

    def to_dict(self) -> Dict[str, Any]:
        """Structured form with unset fields left out, used for the YAML dump."""
        match = {
            'from': self.match.from_,
            'to': self.match.to,
            'subject': self.match.subject,
            'has': list(self.match.has_word.clauses) if self.match.has_word else [],
            'does_not_have': self.match.not_have_word,
        }
        actions = {
            'label': list(self.actions.labels),
            'read': self.actions.mark_as_read,
            'archive': self.actions.archive,
            'not_spam': self.actions.never_spam,
            'trash': self.actions.trash,
            'not_important': self.actions.never_important,
        }
        return {
            'match': {k: v for k, v in match.items() if v},
            'actions': {k: v for k, v in actions.items() if v},
        }


@dataclass(frozen=True)
class FilterSet:
    """An ordered collection of filters. Operations return new sets."""

    filters: Tuple[Filter, ...] = ()

    @classmethod
    def of(cls, filters: Iterable[Filter]) -> "FilterSet":
        return cls(tuple(filters))

    def __iter__(self) -> Iterator[Filter]:
        return iter(self.filters)

    def __len__(self) -> int:
        return len(self.filters)

    def __getitem__(self, index):
        return self.filters[index]

    def sorted(self) -> "FilterSet":
        return FilterSet(tuple(sorted(self.filters)))

    def expand(self) -> "FilterSet":
        """
        Split OR clauses of hasWord into separate filters.

        Splitting is only equivalent when hasWord is the only condition of the
        filter; filters with any other condition are kept as they are. A
        filter without any clause expands to nothing. The result is sorted.
        """
        expanded = []
        for f in self.filters:
            if not f.match.has_only_word_condition():
                expanded.append(f)
                continue
            for clause in f.match.has_word:
                expanded.append(f.with_clause(clause))
        return FilterSet.of(expanded).sorted()

    def compact(self) -> "FilterSet":
        """
        Reduce redundant filters in a sorted set.

        Not implemented yet: the set is returned unchanged.
        """
        return self

    def to_list(self) -> List[Dict[str, Any]]:
        return [f.to_dict() for f in self.filters]


def bool_cell(value: bool) -> str:
    return "TRUE" if value else "FALSE"
