#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Conversion between Gmail's property bags and the filter model.

Gmail exports each filter as an ordered list of name/value pairs. Conditions
and the label map onto Match and Actions fields, boolean actions must carry
the literal value "true", and the size properties Gmail always emits are
accepted and dropped.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, NamedTuple, Tuple

from .errors import GmailFilterError, UnexpectedValue, UnknownProperty
from .model import Actions, Filter, FilterSet, LogicExpression, Match

TRUE_VALUE = 'true'


class PropertyName(str, Enum):
    # Match
    FROM = 'from'
    TO = 'to'
    SUBJECT = 'subject'
    HAS_WORD = 'hasTheWord'
    NOT_HAVE_WORD = 'doesNotHaveTheWord'
    # Actions
    LABEL = 'label'
    MARK_AS_READ = 'shouldMarkAsRead'
    ARCHIVE = 'shouldArchive'
    NEVER_SPAM = 'shouldNeverSpam'
    TRASH = 'shouldTrash'
    NEVER_IMPORTANT = 'shouldNeverMarkAsImportant'
    # Ignored
    SIZE_OPERATOR = 'sizeOperator'
    SIZE_UNIT = 'sizeUnit'


class Property(NamedTuple):
    name: str
    value: str


@dataclass
class Entry:
    """One filter as it appears in the Atom feed."""

    properties: List[Property]
    id: str = ''


@dataclass
class Feed:
    """A Gmail filter export: a title and its entries, in document order."""

    title: str
    entries: List[Entry]


class _Builder:
    """Accumulates the fields of one filter while its properties are read."""

    def __init__(self):
        self.match: Dict[str, object] = {}
        self.labels: List[str] = []
        self.flags: Dict[str, bool] = {}

    def build(self) -> Filter:
        return Filter(Match(**self.match), Actions(labels=tuple(self.labels), **self.flags))


def _set_match(field_name: str) -> Callable[[_Builder, str, str], None]:
    def handler(builder, name, value):
        builder.match[field_name] = value
    return handler


def _set_has_word(builder, name, value):
    builder.match['has_word'] = LogicExpression.parse(value)


def _add_label(builder, name, value):
    builder.labels.append(value)


def _set_flag(field_name: str) -> Callable[[_Builder, str, str], None]:
    def handler(builder, name, value):
        if value != TRUE_VALUE:
            raise UnexpectedValue(name, value)
        builder.flags[field_name] = True
    return handler


def _ignore(builder, name, value):
    pass


_HANDLERS: Dict[PropertyName, Callable[[_Builder, str, str], None]] = {
    PropertyName.FROM: _set_match('from_'),
    PropertyName.TO: _set_match('to'),
    PropertyName.SUBJECT: _set_match('subject'),
    PropertyName.HAS_WORD: _set_has_word,
    PropertyName.NOT_HAVE_WORD: _set_match('not_have_word'),
    PropertyName.LABEL: _add_label,
    PropertyName.MARK_AS_READ: _set_flag('mark_as_read'),
    PropertyName.ARCHIVE: _set_flag('archive'),
    PropertyName.NEVER_SPAM: _set_flag('never_spam'),
    PropertyName.TRASH: _set_flag('trash'),
    PropertyName.NEVER_IMPORTANT: _set_flag('never_important'),
    PropertyName.SIZE_OPERATOR: _ignore,
    PropertyName.SIZE_UNIT: _ignore,
}


def filter_from_properties(properties: Iterable[Tuple[str, str]]) -> Filter:
    """
    Build a Filter from an ordered sequence of (name, value) pairs.

    Repeated condition properties overwrite each other, repeated labels
    accumulate. Raises UnknownProperty for unrecognized names and
    UnexpectedValue for boolean properties whose value is not "true".
    """
    builder = _Builder()
    for name, value in properties:
        try:
            handler = _HANDLERS[PropertyName(name)]
        except ValueError:
            raise UnknownProperty(name) from None
        handler(builder, name, value)
    return builder.build()


def filter_to_properties(f: Filter) -> List[Property]:
    """Inverse of filter_from_properties; empty and false fields are omitted."""
    properties = []

    def add(name: PropertyName, value: str):
        if value:
            properties.append(Property(name.value, value))

    add(PropertyName.FROM, f.match.from_)
    add(PropertyName.TO, f.match.to)
    add(PropertyName.SUBJECT, f.match.subject)
    add(PropertyName.HAS_WORD, f.match.has_word.render())
    add(PropertyName.NOT_HAVE_WORD, f.match.not_have_word)
    for label in f.actions.labels:
        add(PropertyName.LABEL, label)

    flag_names = (
        PropertyName.MARK_AS_READ,
        PropertyName.ARCHIVE,
        PropertyName.NEVER_SPAM,
        PropertyName.TRASH,
        PropertyName.NEVER_IMPORTANT,
    )
    for name, flag in zip(flag_names, f.actions.flags()):
        if flag:
            properties.append(Property(name.value, TRUE_VALUE))
    return properties


def filter_set_from_feed(feed: Feed) -> FilterSet:
    """Convert every entry of the feed, keeping document order."""
    filters = []
    for index, entry in enumerate(feed.entries):
        try:
            filters.append(filter_from_properties(entry.properties))
        except GmailFilterError as e:
            e.entry_index = index
            raise
    return FilterSet.of(filters)


def feed_from_filter_set(filter_set: FilterSet, title: str = 'Mail Filters') -> Feed:
    return Feed(
        title=title,
        entries=[Entry(filter_to_properties(f)) for f in filter_set],
    )
