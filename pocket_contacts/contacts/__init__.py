"""Contact storage, search, import and formatting."""
from .device_import import (
    AddressBook,
    DeviceContact,
    DevicePhoneNumber,
    PermissionDeniedError,
    StaticAddressBook,
    VCardAddressBook,
    import_device_contacts,
)
from .formatters import (
    clean_phone_number,
    format_phone_number,
    get_initials,
    validate_phone_number,
)
from .search import (
    find_contact_by_name,
    find_contact_by_phone_number,
    search_contacts,
)
from .service import (
    ContactNotFoundError,
    DuplicatePhoneNumberError,
    ImportSummary,
    ValidationError,
    create_contact,
    edit_contact,
    save_imported_contacts,
    validate_contact_fields,
)
from .store import (
    ContactParseError,
    delete_contact,
    initialize_contacts_directory,
    load_all_contacts,
    load_contact_by_id,
    save_contact,
    update_contact,
)
from .types import Contact, generate_contact_id

__all__ = [
    # Model
    "Contact",
    "generate_contact_id",
    # Formatting
    "clean_phone_number",
    "format_phone_number",
    "get_initials",
    "validate_phone_number",
    # Storage
    "ContactParseError",
    "initialize_contacts_directory",
    "save_contact",
    "load_all_contacts",
    "load_contact_by_id",
    "update_contact",
    "delete_contact",
    # Queries
    "search_contacts",
    "find_contact_by_phone_number",
    "find_contact_by_name",
    # Import
    "AddressBook",
    "DeviceContact",
    "DevicePhoneNumber",
    "PermissionDeniedError",
    "StaticAddressBook",
    "VCardAddressBook",
    "import_device_contacts",
    # Service
    "ContactNotFoundError",
    "DuplicatePhoneNumberError",
    "ImportSummary",
    "ValidationError",
    "create_contact",
    "edit_contact",
    "save_imported_contacts",
    "validate_contact_fields",
]
