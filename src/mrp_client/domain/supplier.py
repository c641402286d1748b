"""Supplier domain object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Supplier:
    """Material supplier.

    Attributes:
        id: Backend identifier
        name: Company name
        tax_id: Tax registration number (RUC), empty when unset
        address: Postal address, empty when unset
        phone: Contact phone, empty when unset
        email: Contact email, empty when unset
        contact_person: Name of the contact person, empty when unset
        active: Whether purchases can be placed with the supplier
    """

    id: int
    name: str
    tax_id: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    contact_person: str = ""
    active: bool = True
