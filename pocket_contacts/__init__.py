"""Pocket Contacts: a personal contacts manager backed by one JSON file per contact."""

__version__ = "0.1.0"
