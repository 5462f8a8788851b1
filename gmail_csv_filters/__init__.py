# -*- coding: utf-8 -*-
"""Flatten Gmail filter exports into sorted CSV tables and back."""
from .errors import (  # noqa: F401
    GmailFilterError,
    InputError,
    MalformedInput,
    OutputError,
    UnexpectedValue,
    UnknownProperty,
    UsageError,
)
from .model import Actions, Filter, FilterSet, LogicExpression, Match  # noqa: F401

__version__ = '0.1.0'
