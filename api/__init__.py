"""REST interface for Pocket Contacts."""
