#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Gmail CSV Filters CLI.

Reads a Gmail filter export (mailFilters.xml) and prints one CSV row per
filter, with OR clauses expanded into separate rows and rows in a canonical
order. A table produced by this tool can be read back and regenerated as
Gmail XML.
"""
import argparse
import sys
from pathlib import Path

import yaml

from .errors import GmailFilterError, InputError, OutputError, UsageError
from .table import read_csv, write_csv
from .xml_converter import GmailFilterConverter

PROG = 'gmail-csv-filters'


class _ArgumentParser(argparse.ArgumentParser):
    """Raise on bad arguments instead of printing usage and exiting."""

    def error(self, message):
        raise UsageError(message)


def create_parser():
    """Create the argument parser."""
    parser = _ArgumentParser(
        prog=PROG,
        description='Flatten Gmail filters into a sorted CSV table',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the expanded table
  gmail-csv-filters mailFilters.xml > filters.csv

  # Regenerate Gmail XML from the expanded filters or from a table
  gmail-csv-filters mailFilters.xml -f xml -o expanded.xml
  gmail-csv-filters filters.csv -f xml

  # Inspect the structured filters
  gmail-csv-filters mailFilters.xml -f yaml --no-expand
        """
    )
    parser.add_argument(
        'input_file',
        help='Gmail XML export, or a CSV table written by this tool'
    )
    parser.add_argument(
        '-f', '--format',
        choices=['csv', 'xml', 'yaml'],
        default='csv',
        help='Output format (default: csv)'
    )
    parser.add_argument(
        '-o', '--output',
        help='Output file (default: stdout)'
    )
    parser.add_argument(
        '--no-expand',
        dest='expand',
        action='store_false',
        help='Keep OR clauses in a single filter and the input order'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show conversion information on stderr'
    )
    return parser


def detect_file_format(filepath):
    """Tables are recognized by their extension; anything else is XML."""
    if Path(filepath).suffix.lower() == '.csv':
        return 'csv'
    return 'xml'


def load_filters(input_file, converter):
    """Load a FilterSet from a Gmail export or a CSV table."""
    input_file = Path(input_file)
    if detect_file_format(input_file) == 'csv':
        try:
            with open(input_file, newline='', encoding='utf-8') as f:
                return read_csv(f)
        except OSError as e:
            raise InputError(f"cannot read {input_file}: {e.strerror or e}") from e
    return converter.load_filters(input_file)


def render(filter_set, output_format, converter, stream):
    """Write filter_set to stream in the requested format."""
    if output_format == 'csv':
        write_csv(filter_set, stream)
    elif output_format == 'xml':
        stream.write(converter.filters_to_xml(filter_set))
    else:
        yaml.dump(
            filter_set.to_list(),
            stream,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )


def cmd_convert(args):
    """Load, expand and write the filters."""
    converter = GmailFilterConverter(verbose=args.verbose)
    filter_set = load_filters(args.input_file, converter)

    if args.expand:
        expanded = filter_set.expand()
        if args.verbose:
            print(f"Expanded {len(filter_set)} filters into {len(expanded)} rows", file=sys.stderr)
        filter_set = expanded

    if args.output:
        try:
            with open(args.output, 'w', newline='', encoding='utf-8') as f:
                render(filter_set, args.format, converter, f)
        except OSError as e:
            raise OutputError(f"cannot write {args.output}: {e.strerror or e}") from e
        if args.verbose:
            print(f"Wrote {len(filter_set)} filters to {args.output}", file=sys.stderr)
    else:
        render(filter_set, args.format, converter, sys.stdout)


def main(argv=None):
    """Main entry point. Returns the process exit status."""
    try:
        args = create_parser().parse_args(argv)
        cmd_convert(args)
    except UsageError as e:
        print(f"{PROG}: {e}.", file=sys.stderr)
        return 2
    except GmailFilterError as e:
        index = getattr(e, "entry_index", None)
        where = f"entry {index + 1}: " if index is not None else ""
        print(f"{PROG}: {where}{e}.", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
