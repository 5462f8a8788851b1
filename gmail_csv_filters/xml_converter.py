#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Gmail XML filter export <-> filter model, with round-trip validation.
"""
import sys
from pathlib import Path
from typing import Dict, Union

from lxml import etree

from .errors import InputError, MalformedInput
from .model import FilterSet
from .properties import Entry, Feed, Property, feed_from_filter_set, filter_set_from_feed

ATOM_NS = 'http://www.w3.org/2005/Atom'
APPS_NS = 'http://schemas.google.com/apps/2006'


class GmailFilterConverter:
    """Reads and writes the Atom feed Gmail uses to export filters."""

    NAMESPACES = {'atom': ATOM_NS, 'apps': APPS_NS}

    DEFAULT_TITLE = 'Mail Filters'

    def __init__(self, verbose: bool = False):
        """
        Initialize the converter.

        Args:
            verbose: Print progress information to stderr
        """
        self.verbose = verbose
        self.stats = {
            'total_filters': 0,
            'round_trip_valid': None,
        }

    def _read(self, xml_input: Union[str, Path, bytes]) -> bytes:
        """Return the raw document from a path, XML text or bytes."""
        if isinstance(xml_input, bytes):
            return xml_input
        if isinstance(xml_input, str) and xml_input.lstrip().startswith('<'):
            return xml_input.encode('utf-8')
        try:
            with open(xml_input, 'rb') as f:
                return f.read()
        except OSError as e:
            raise InputError(f"cannot read {xml_input}: {e.strerror or e}") from e

    def parse_feed(self, xml_input: Union[str, Path, bytes]) -> Feed:
        """
        Parse a Gmail filter export.

        Args:
            xml_input: Path to XML file, XML string or bytes

        Returns:
            Feed with the title and every entry's properties in document order
        """
        xml_content = self._read(xml_input)
        try:
            root = etree.fromstring(xml_content)
        except etree.XMLSyntaxError as e:
            raise MalformedInput(f"invalid XML: {e}") from e

        if root.tag != f'{{{ATOM_NS}}}feed':
            raise MalformedInput(f"expected an Atom feed, got <{etree.QName(root).localname}>")

        title = root.findtext('atom:title', default='', namespaces=self.NAMESPACES)
        entries = []
        for entry in root.xpath('atom:entry', namespaces=self.NAMESPACES):
            properties = []
            for prop in entry.xpath('apps:property', namespaces=self.NAMESPACES):
                name = prop.get('name')
                if not name:
                    raise MalformedInput(f"property without a name in entry {len(entries) + 1}")
                properties.append(Property(name, prop.get('value', '')))
            entry_id = entry.findtext('atom:id', default='', namespaces=self.NAMESPACES)
            entries.append(Entry(properties, entry_id))

        if self.verbose:
            print(f"Read {len(entries)} filters from '{title}'", file=sys.stderr)
        return Feed(title, entries)

    def load_filters(self, xml_input: Union[str, Path, bytes]) -> FilterSet:
        """Parse a Gmail export straight into a FilterSet."""
        filter_set = filter_set_from_feed(self.parse_feed(xml_input))
        self.stats['total_filters'] = len(filter_set)
        return filter_set

    def feed_to_xml(self, feed: Feed) -> str:
        """Create Gmail XML from a Feed."""
        ns_map = {None: ATOM_NS, 'apps': APPS_NS}
        root = etree.Element('feed', nsmap=ns_map)

        try:
            self._add_entries(root, feed)
        except ValueError as e:
            # lxml rejects control characters and other non-XML text.
            raise MalformedInput(f"cannot write XML: {e}") from e

        xml_bytes = etree.tostring(
            root,
            encoding='utf-8',
            pretty_print=True,
            xml_declaration=True
        )
        return xml_bytes.decode('utf-8')

    def _add_entries(self, root, feed: Feed):
        title = etree.SubElement(root, 'title')
        title.text = feed.title

        for item in feed.entries:
            entry = etree.SubElement(root, 'entry')

            category = etree.SubElement(entry, 'category')
            category.set('term', 'filter')

            entry_title = etree.SubElement(entry, 'title')
            entry_title.text = 'Mail Filter'

            if item.id:
                entry_id = etree.SubElement(entry, 'id')
                entry_id.text = item.id

            etree.SubElement(entry, 'content')

            for name, value in item.properties:
                prop = etree.SubElement(entry, f'{{{APPS_NS}}}property')
                prop.set('name', name)
                prop.set('value', value)

    def filters_to_xml(self, filter_set: FilterSet, title: str = DEFAULT_TITLE) -> str:
        return self.feed_to_xml(feed_from_filter_set(filter_set, title))

    def validate_round_trip(self, xml_input: Union[str, Path, bytes]) -> bool:
        """
        Verify that XML -> filters -> XML -> filters preserves every filter.

        Args:
            xml_input: Path to XML file, XML string or bytes

        Returns:
            True if both filter sets are equal
        """
        original = self.load_filters(xml_input)
        restored = filter_set_from_feed(self.parse_feed(self.filters_to_xml(original)))

        is_valid = original == restored
        self.stats['round_trip_valid'] = is_valid

        if self.verbose:
            if is_valid:
                print("Round-trip validation passed", file=sys.stderr)
            else:
                print("Round-trip validation failed", file=sys.stderr)
                self._report_differences(original, restored)

        return is_valid

    def _report_differences(self, original: FilterSet, restored: FilterSet):
        print(f"Original filters: {len(original)}", file=sys.stderr)
        print(f"Restored filters: {len(restored)}", file=sys.stderr)
        for i, (o, r) in enumerate(zip(original, restored)):
            if o != r:
                print(f"\nFilter {i+1} differs:", file=sys.stderr)
                print(f"  {','.join(o.to_row())}", file=sys.stderr)
                print(f"  {','.join(r.to_row())}", file=sys.stderr)

    def get_stats(self) -> Dict:
        """Return conversion statistics."""
        return self.stats
