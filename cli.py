#!/usr/bin/env python3
"""Pocket Contacts CLI."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable

from pocket_contacts.config import ConfigError, load_settings
from pocket_contacts.contacts import (
    Contact,
    ContactNotFoundError,
    ContactParseError,
    DuplicatePhoneNumberError,
    PermissionDeniedError,
    ValidationError,
    VCardAddressBook,
    create_contact,
    delete_contact,
    edit_contact,
    format_phone_number,
    get_initials,
    import_device_contacts,
    load_contact_by_id,
    save_imported_contacts,
    search_contacts,
)
from pocket_contacts.contacts.service import KEEP


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pocket-contacts",
        description="Manage a personal address book stored as JSON files.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="List contacts sorted by name.",
    )
    list_parser.add_argument(
        "--search",
        default="",
        help="Only show contacts whose name contains this text (case-insensitive).",
    )

    show_parser = subparsers.add_parser("show", help="Show a single contact.")
    show_parser.add_argument("contact_id", help="Contact ID.")

    add_parser = subparsers.add_parser("add", help="Create a contact.")
    add_parser.add_argument("name", help="Contact name.")
    add_parser.add_argument("phone", help="Seven-digit phone number.")
    add_parser.add_argument("--photo", help="Photo URI.")
    add_parser.add_argument(
        "--rename-existing",
        action="store_true",
        help="If the phone number is already stored, rename that contact instead.",
    )

    edit_parser = subparsers.add_parser("edit", help="Edit a contact.")
    edit_parser.add_argument("contact_id", help="Contact ID.")
    edit_parser.add_argument("--name", help="New name.")
    edit_parser.add_argument("--phone", help="New seven-digit phone number.")
    photo_group = edit_parser.add_mutually_exclusive_group()
    photo_group.add_argument("--photo", help="New photo URI.")
    photo_group.add_argument(
        "--remove-photo",
        action="store_true",
        help="Remove the contact's photo.",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a contact.")
    delete_parser.add_argument("contact_id", help="Contact ID.")

    import_parser = subparsers.add_parser(
        "import",
        help="Import contacts from a vCard (.vcf) export.",
    )
    import_parser.add_argument("path", help="Path to the .vcf file.")

    return parser


def _format_contact_rows(contacts: Iterable[Contact]) -> str:
    rows = [
        f"{get_initials(c.name):<3} {c.name:<30} {format_phone_number(c.phone_number):<9} {c.id}"
        for c in contacts
    ]
    return "\n".join(rows)


def _print_contact(contact: Contact) -> None:
    print(f"{contact.name} ({get_initials(contact.name)})")
    print(f"Phone: {format_phone_number(contact.phone_number)}")
    print(f"Photo: {contact.photo or 'none'}")
    print(f"ID:    {contact.id}")


def _cmd_list(search: str) -> int:
    contacts = search_contacts(search)

    if not contacts:
        print("No contacts found." if search.strip() else "No contacts yet.")
        return 0

    print(_format_contact_rows(contacts))
    print(f"\n{len(contacts)} contact(s)")
    return 0


def _cmd_show(contact_id: str) -> int:
    contact = load_contact_by_id(contact_id)
    if contact is None:
        print(f"Contact {contact_id} not found.", file=sys.stderr)
        return 1
    _print_contact(contact)
    return 0


def _cmd_add(name: str, phone: str, photo: str | None, rename_existing: bool) -> int:
    try:
        contact = create_contact(name, phone, photo, rename_existing=rename_existing)
    except ValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except DuplicatePhoneNumberError as exc:
        print(
            f"A contact with phone number {format_phone_number(exc.existing.phone_number)} "
            f"already exists: {exc.existing.name} ({exc.existing.id}).",
            file=sys.stderr,
        )
        print(
            f"Re-run with --rename-existing to rename it to {exc.requested_name!r}.",
            file=sys.stderr,
        )
        return 1

    print("Contact saved.")
    _print_contact(contact)
    return 0


def _cmd_edit(
    contact_id: str,
    name: str | None,
    phone: str | None,
    photo: str | None,
    remove_photo: bool,
) -> int:
    if remove_photo:
        new_photo = None
    elif photo is not None:
        new_photo = photo
    else:
        new_photo = KEEP

    try:
        contact = edit_contact(contact_id, name=name, phone_number=phone, photo=new_photo)
    except ContactNotFoundError as exc:
        print(f"{exc}.", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("Contact updated.")
    _print_contact(contact)
    return 0


def _cmd_delete(contact_id: str) -> int:
    if not delete_contact(contact_id):
        print(f"Contact {contact_id} not found.", file=sys.stderr)
        return 1
    print(f"Deleted contact {contact_id}.")
    return 0


def _cmd_import(path: str) -> int:
    try:
        imported = import_device_contacts(VCardAddressBook(path))
    except PermissionDeniedError as exc:
        print(f"Import failed: {exc} ({path}).", file=sys.stderr)
        return 1

    if not imported:
        print("No valid contacts with 7-digit phone numbers found to import.")
        return 0

    summary = save_imported_contacts(imported)
    print(f"Imported {len(summary.imported)} contact(s).")
    if summary.skipped_duplicates:
        print(f"Skipped {len(summary.skipped_duplicates)} already stored phone number(s).")
    if summary.failed:
        print(f"Failed to save {len(summary.failed)} contact(s); see log.", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return _dispatch(parser, args)
    except ContactParseError as exc:
        print(f"Unable to load contacts: {exc}", file=sys.stderr)
        print(f"Fix or remove {exc.path} and try again.", file=sys.stderr)
        return 1


def _dispatch(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    if args.command == "list":
        return _cmd_list(search=args.search)
    if args.command == "show":
        return _cmd_show(args.contact_id)
    if args.command == "add":
        return _cmd_add(
            name=args.name,
            phone=args.phone,
            photo=args.photo,
            rename_existing=args.rename_existing,
        )
    if args.command == "edit":
        return _cmd_edit(
            contact_id=args.contact_id,
            name=args.name,
            phone=args.phone,
            photo=args.photo,
            remove_photo=args.remove_photo,
        )
    if args.command == "delete":
        return _cmd_delete(args.contact_id)
    if args.command == "import":
        return _cmd_import(args.path)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
