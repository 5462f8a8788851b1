#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tabular (CSV) form of a filter set: one row per filter.
"""
import csv
from typing import Iterable, List, TextIO

from .errors import MalformedInput, UnexpectedValue
from .model import Actions, Filter, FilterSet, LogicExpression, Match

CSV_HEADER = (
    'From',
    'To',
    'Subject',
    'HasWord',
    'NotHaveWord',
    'Labels',
    'MarkAsRead',
    'Archive',
    'NeverSpam',
    'Trash',
    'NeverImportant',
)

_BOOL_CELLS = {'TRUE': True, 'FALSE': False}


def filter_to_row(f: Filter) -> List[str]:
    return f.to_row()


def write_csv(filter_set: FilterSet, stream: TextIO) -> int:
    """Write the header and one row per filter. Returns the number of rows."""
    writer = csv.writer(stream, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    for f in filter_set:
        writer.writerow(filter_to_row(f))
    return len(filter_set)


def _bool_from_cell(column: str, cell: str) -> bool:
    try:
        return _BOOL_CELLS[cell]
    except KeyError:
        raise UnexpectedValue(column, cell) from None


def filter_from_row(row: List[str]) -> Filter:
    """Rebuild a Filter from one data row of the table."""
    if len(row) != len(CSV_HEADER):
        raise MalformedInput(
            f"expected {len(CSV_HEADER)} columns, got {len(row)}"
        )
    from_, to, subject, has_word, not_have_word, labels = row[:6]
    match = Match(
        from_=from_,
        to=to,
        subject=subject,
        has_word=LogicExpression.parse(has_word) if has_word else LogicExpression(),
        not_have_word=not_have_word,
    )
    mark_as_read, archive, never_spam, trash, never_important = (
        _bool_from_cell(column, cell) for column, cell in zip(CSV_HEADER[6:], row[6:])
    )
    actions = Actions(
        labels=tuple(labels.split(',')) if labels else (),
        mark_as_read=mark_as_read,
        archive=archive,
        never_spam=never_spam,
        trash=trash,
        never_important=never_important,
    )
    return Filter(match, actions)


def read_csv(stream: Iterable[str]) -> FilterSet:
    """
    Read a table written by write_csv back into a FilterSet.

    Labels containing a comma cannot be told apart from two labels and are
    split.
    """
    reader = csv.reader(stream)
    try:
        header = next(reader)
    except StopIteration:
        raise MalformedInput("empty table") from None
    except csv.Error as e:
        raise MalformedInput(f"line {reader.line_num}: {e}") from e
    except UnicodeDecodeError as e:
        raise MalformedInput(f"not valid UTF-8: {e}") from e
    if tuple(header) != CSV_HEADER:
        raise MalformedInput(f"unexpected header {','.join(header)!r}")
    filters = []
    try:
        for row in reader:
            if not row:
                continue
            try:
                filters.append(filter_from_row(row))
            except MalformedInput as e:
                raise MalformedInput(f"line {reader.line_num}: {e}") from None
    except csv.Error as e:
        raise MalformedInput(f"line {reader.line_num}: {e}") from e
    except UnicodeDecodeError as e:
        raise MalformedInput(f"not valid UTF-8: {e}") from e
    return FilterSet.of(filters)
