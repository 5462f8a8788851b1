#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Errors raised while converting Gmail filters.

Every error is fatal to a run: it propagates unchanged up to the command line
entry point, which prints it as a single diagnostic line.
"""


class GmailFilterError(Exception):
    """Base class for all conversion errors."""


class UsageError(GmailFilterError):
    """The command line was invoked with the wrong arguments."""


class InputError(GmailFilterError):
    """The input path could not be read."""


class OutputError(GmailFilterError):
    """The output path could not be written."""


class MalformedInput(GmailFilterError):
    """The input document is structurally invalid."""


class UnknownProperty(GmailFilterError):
    """An entry carries a property name that is not recognized."""

    def __init__(self, name: str):
        super().__init__(f"unknown property {name!r}")
        self.name = name


class UnexpectedValue(GmailFilterError):
    """A boolean property carries a value other than the expected literal."""

    def __init__(self, name: str, value: str):
        super().__init__(f"unexpected value {value!r} for {name!r}")
        self.name = name
        self.value = value
