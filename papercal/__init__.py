"""Printable calendars with recurring special days."""

__version__ = "0.1.0"
