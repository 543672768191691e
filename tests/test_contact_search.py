"""Tests for contact queries."""
from __future__ import annotations

import pytest

from pocket_contacts.contacts.search import (
    find_contact_by_name,
    find_contact_by_phone_number,
    search_contacts,
)
from pocket_contacts.contacts.store import load_all_contacts, save_contact
from pocket_contacts.contacts.types import Contact


@pytest.fixture
def stored_contacts(tmp_path, monkeypatch):
    """Store a small address book and return it."""
    monkeypatch.setenv("POCKET_CONTACTS_DIR", str(tmp_path / "contacts"))
    contacts = [
        Contact(id="id-anna", name="Anna", phone_number="5550001"),
        Contact(id="id-dana", name="Dana", phone_number="5550002"),
        Contact(id="id-bob", name="Bob Stone", phone_number="5550003"),
        Contact(id="id-zoe", name="Zoë", phone_number="5550004", photo="file:///z.png"),
    ]
    for contact in contacts:
        save_contact(contact)
    return contacts


class TestSearchContacts:
    """Tests for search_contacts."""

    def test_empty_term_returns_everything(self, stored_contacts):
        assert search_contacts("") == load_all_contacts()

    def test_whitespace_term_returns_everything(self, stored_contacts):
        assert search_contacts("   ") == load_all_contacts()

    def test_substring_match(self, stored_contacts):
        assert [c.name for c in search_contacts("an")] == ["Anna", "Dana"]

    def test_case_insensitive(self, stored_contacts):
        assert [c.name for c in search_contacts("STONE")] == ["Bob Stone"]

    def test_no_match(self, stored_contacts):
        assert search_contacts("xyz") == []

    def test_does_not_match_phone_numbers(self, stored_contacts):
        assert search_contacts("5550001") == []

    @pytest.mark.parametrize("term", ["a", "o", "N", "ë", " "])
    def test_results_contain_term(self, stored_contacts, term):
        results = search_contacts(term)
        if term.strip():
            assert all(term.lower() in c.name.lower() for c in results)
        # Same relative order as the full listing.
        assert results == [c for c in load_all_contacts() if c in results]


class TestFindContactByPhoneNumber:
    """Tests for find_contact_by_phone_number."""

    def test_exact_match(self, stored_contacts):
        contact = find_contact_by_phone_number("5550003")
        assert contact is not None
        assert contact.name == "Bob Stone"

    def test_formatted_number_does_not_match(self, stored_contacts):
        assert find_contact_by_phone_number("555 0003") is None

    def test_missing(self, stored_contacts):
        assert find_contact_by_phone_number("5559999") is None


class TestFindContactByName:
    """Tests for find_contact_by_name."""

    def test_trimmed_case_insensitive(self, stored_contacts):
        contact = find_contact_by_name("  bob stone ")
        assert contact is not None
        assert contact.id == "id-bob"

    def test_substring_is_not_a_match(self, stored_contacts):
        assert find_contact_by_name("Bob") is None

    def test_missing(self, stored_contacts):
        assert find_contact_by_name("Nobody") is None
