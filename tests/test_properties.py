#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Tests for the property bag <-> filter conversion."""

import random

import pytest

from gmail_csv_filters.errors import UnexpectedValue, UnknownProperty
from gmail_csv_filters.model import Actions, Filter, LogicExpression, Match
from gmail_csv_filters.properties import (
    Entry,
    Feed,
    Property,
    feed_from_filter_set,
    filter_from_properties,
    filter_set_from_feed,
    filter_to_properties,
)


class TestFilterFromProperties:
    """Dispatch of property names onto Match and Actions."""

    def test_conditions(self):
        f = filter_from_properties([
            ('from', 'alice@example.com'),
            ('to', 'me@example.com'),
            ('subject', 'report'),
            ('hasTheWord', 'a OR b'),
            ('doesNotHaveTheWord', 'spam'),
        ])
        assert f.match == Match(
            from_='alice@example.com',
            to='me@example.com',
            subject='report',
            has_word=LogicExpression(('a', 'b')),
            not_have_word='spam',
        )
        assert f.actions == Actions()

    def test_last_condition_wins(self):
        f = filter_from_properties([('from', 'a'), ('from', 'b')])
        assert f.match.from_ == 'b'

    def test_labels_accumulate_sorted(self):
        f = filter_from_properties([('label', 'zeta'), ('label', 'alpha'), ('label', 'zeta')])
        assert f.actions.labels == ('alpha', 'zeta', 'zeta')

    def test_flags(self):
        f = filter_from_properties([
            ('shouldMarkAsRead', 'true'),
            ('shouldArchive', 'true'),
            ('shouldNeverSpam', 'true'),
            ('shouldTrash', 'true'),
            ('shouldNeverMarkAsImportant', 'true'),
        ])
        assert f.actions.flags() == (True, True, True, True, True)

    def test_size_properties_are_ignored(self):
        f = filter_from_properties([('sizeOperator', 's_sl'), ('sizeUnit', 's_smb')])
        assert f == Filter()

    def test_unknown_property(self):
        with pytest.raises(UnknownProperty) as excinfo:
            filter_from_properties([('from', 'a'), ('shouldStar', 'true')])
        assert excinfo.value.name == 'shouldStar'
        assert 'shouldStar' in str(excinfo.value)

    @pytest.mark.parametrize('value', ['false', 'TRUE', 'True', '', 'yes'])
    def test_flag_value_must_be_true(self, value):
        with pytest.raises(UnexpectedValue) as excinfo:
            filter_from_properties([('shouldArchive', value)])
        assert excinfo.value.name == 'shouldArchive'
        assert excinfo.value.value == value


class TestFilterToProperties:
    """Emission order and omission of empty fields."""

    def test_full_filter(self):
        f = Filter(
            Match(
                from_='f',
                to='t',
                subject='s',
                has_word=LogicExpression(('a', 'b')),
                not_have_word='n',
            ),
            Actions(
                labels=('y', 'x'),
                mark_as_read=True,
                archive=True,
                never_spam=True,
                trash=True,
                never_important=True,
            ),
        )
        assert filter_to_properties(f) == [
            Property('from', 'f'),
            Property('to', 't'),
            Property('subject', 's'),
            Property('hasTheWord', 'a OR b'),
            Property('doesNotHaveTheWord', 'n'),
            Property('label', 'x'),
            Property('label', 'y'),
            Property('shouldMarkAsRead', 'true'),
            Property('shouldArchive', 'true'),
            Property('shouldNeverSpam', 'true'),
            Property('shouldTrash', 'true'),
            Property('shouldNeverMarkAsImportant', 'true'),
        ]

    def test_empty_and_false_fields_are_omitted(self):
        f = Filter(Match(to='t'), Actions(never_spam=True))
        assert filter_to_properties(f) == [
            Property('to', 't'),
            Property('shouldNeverSpam', 'true'),
        ]

    def test_empty_filter(self):
        assert filter_to_properties(Filter()) == []

    @pytest.mark.parametrize('seed', range(5))
    def test_round_trip(self, seed):
        rng = random.Random(seed)
        words = ['', 'a', 'from:x', 'list:(y)', 'two words']
        for _ in range(50):
            clauses = tuple(rng.choice(words[1:]) for _ in range(rng.randint(0, 3)))
            f = Filter(
                Match(
                    from_=rng.choice(words),
                    to=rng.choice(words),
                    subject=rng.choice(words),
                    has_word=LogicExpression(clauses),
                    not_have_word=rng.choice(words),
                ),
                Actions(
                    labels=tuple(rng.choice(words[1:]) for _ in range(rng.randint(0, 3))),
                    mark_as_read=rng.random() < 0.5,
                    archive=rng.random() < 0.5,
                    never_spam=rng.random() < 0.5,
                    trash=rng.random() < 0.5,
                    never_important=rng.random() < 0.5,
                ),
            )
            assert filter_from_properties(filter_to_properties(f)) == f


class TestFeedConversion:

    def test_keeps_entry_order(self):
        feed = Feed('Mail Filters', [
            Entry([Property('to', 'b')], 'id-1'),
            Entry([Property('to', 'a')], 'id-2'),
        ])
        filter_set = filter_set_from_feed(feed)
        assert [f.match.to for f in filter_set] == ['b', 'a']

    def test_error_carries_entry_index(self):
        feed = Feed('Mail Filters', [
            Entry([Property('to', 'b')]),
            Entry([Property('bogus', 'x')]),
        ])
        with pytest.raises(UnknownProperty) as excinfo:
            filter_set_from_feed(feed)
        assert excinfo.value.entry_index == 1

    def test_feed_from_filter_set(self):
        filter_set = filter_set_from_feed(Feed('t', [Entry([Property('label', 'x')])]))
        feed = feed_from_filter_set(filter_set, title='Exported')
        assert feed.title == 'Exported'
        assert [e.properties for e in feed.entries] == [[Property('label', 'x')]]
