"""Tests for the create/edit boundary and the import batch loop."""
from __future__ import annotations

import pytest

from pocket_contacts.contacts import service
from pocket_contacts.contacts.service import (
    ContactNotFoundError,
    DuplicatePhoneNumberError,
    ValidationError,
    create_contact,
    edit_contact,
    save_imported_contacts,
    validate_contact_fields,
)
from pocket_contacts.contacts.store import load_all_contacts, load_contact_by_id, save_contact
from pocket_contacts.contacts.types import Contact


@pytest.fixture
def contacts_dir(tmp_path, monkeypatch):
    path = tmp_path / "contacts"
    monkeypatch.setenv("POCKET_CONTACTS_DIR", str(path))
    return path


class TestValidateContactFields:
    """Tests for validate_contact_fields."""

    def test_valid(self):
        validate_contact_fields("Jane", "555-1234")

    def test_blank_name(self):
        with pytest.raises(ValidationError, match="Name is required"):
            validate_contact_fields("   ", "5551234")

    def test_wrong_length_phone(self):
        with pytest.raises(ValidationError, match="exactly 7 digits"):
            validate_contact_fields("Jane", "555123")


class TestCreateContact:
    """Tests for create_contact."""

    def test_creates_and_persists(self, contacts_dir):
        contact = create_contact("  Jane Doe ", "(555) 123-4", "file:///jane.png")

        assert contact.name == "Jane Doe"
        assert contact.phone_number == "5551234"
        assert load_contact_by_id(contact.id) == contact

    def test_validation_blocks_store(self, contacts_dir):
        with pytest.raises(ValidationError):
            create_contact("", "5551234")
        assert load_all_contacts() == []

    def test_duplicate_phone_raises(self, contacts_dir):
        existing = create_contact("Jane Doe", "5551234")

        with pytest.raises(DuplicatePhoneNumberError) as excinfo:
            create_contact("Janey", "555 1234")

        assert excinfo.value.existing == existing
        assert excinfo.value.requested_name == "Janey"
        assert len(load_all_contacts()) == 1

    def test_rename_existing_keeps_photo(self, contacts_dir):
        existing = create_contact("Jane Doe", "5551234", "file:///jane.png")

        renamed = create_contact("Janey", "5551234", rename_existing=True)

        assert renamed.id == existing.id
        assert renamed.name == "Janey"
        assert renamed.photo == "file:///jane.png"
        assert load_all_contacts() == [renamed]

    def test_rename_existing_with_new_photo(self, contacts_dir):
        create_contact("Jane Doe", "5551234", "file:///old.png")

        renamed = create_contact(
            "Janey", "5551234", "file:///new.png", rename_existing=True
        )

        assert renamed.photo == "file:///new.png"
        assert sorted(p.name for p in contacts_dir.iterdir()) == [
            f"Janey-{renamed.id}.json"
        ]

    def test_rename_flag_without_duplicate_creates(self, contacts_dir):
        contact = create_contact("Jane", "5551234", rename_existing=True)
        assert load_all_contacts() == [contact]


class TestEditContact:
    """Tests for edit_contact."""

    def test_edit_name_and_phone(self, contacts_dir):
        contact = create_contact("Jane", "5551234", "file:///jane.png")

        updated = edit_contact(contact.id, name="Jane Smith", phone_number="555-9999")

        assert updated.name == "Jane Smith"
        assert updated.phone_number == "5559999"
        assert updated.photo == "file:///jane.png"
        assert load_all_contacts() == [updated]

    def test_remove_photo(self, contacts_dir):
        contact = create_contact("Jane", "5551234", "file:///jane.png")

        updated = edit_contact(contact.id, photo=None)

        assert updated.photo is None
        assert load_contact_by_id(contact.id).photo is None

    def test_missing_contact(self, contacts_dir):
        with pytest.raises(ContactNotFoundError):
            edit_contact("missing", name="X")

    def test_invalid_edit_leaves_contact(self, contacts_dir):
        contact = create_contact("Jane", "5551234")

        with pytest.raises(ValidationError):
            edit_contact(contact.id, phone_number="12")

        assert load_contact_by_id(contact.id) == contact


class TestSaveImportedContacts:
    """Tests for save_imported_contacts."""

    def test_skips_known_numbers(self, contacts_dir):
        save_contact(Contact(id="a1", name="Jane", phone_number="5551234"))
        batch = [
            Contact.new("Jane Again", "5551234"),
            Contact.new("Bob", "5559999"),
            Contact.new("Bob Twin", "5559999"),
        ]

        summary = save_imported_contacts(batch)

        assert [c.name for c in summary.imported] == ["Bob"]
        assert [c.name for c in summary.skipped_duplicates] == ["Jane Again", "Bob Twin"]
        assert summary.failed == []
        assert [c.name for c in load_all_contacts()] == ["Bob", "Jane"]

    def test_failure_does_not_stop_batch(self, contacts_dir, monkeypatch, caplog):
        real_save = service.save_contact

        def flaky_save(contact):
            if contact.name == "Broken":
                raise OSError("disk full")
            return real_save(contact)

        monkeypatch.setattr(service, "save_contact", flaky_save)
        batch = [
            Contact.new("Alpha", "5550001"),
            Contact.new("Broken", "5550002"),
            Contact.new("Gamma", "5550003"),
        ]

        with caplog.at_level("ERROR", logger=service.__name__):
            summary = save_imported_contacts(batch)

        assert [c.name for c in summary.imported] == ["Alpha", "Gamma"]
        assert [c.name for c in summary.failed] == ["Broken"]
        assert [c.name for c in load_all_contacts()] == ["Alpha", "Gamma"]
        assert "Broken" in caplog.text
