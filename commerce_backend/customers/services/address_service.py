# customers/services/address_service.py

"""
Customer address book.

- A customer's first address becomes the default.
- Creating an address with is_default clears the flag on the others.
- Deleting another customer's address is an access error, not a 404.
"""

from __future__ import annotations

from django.db import transaction

from common.exceptions import AccessDeniedError, NotFoundError
from customers.models import Address


class AddressNotFoundError(NotFoundError):
    pass


def list_addresses(customer):
    return Address.objects.filter(customer=customer).order_by("-is_default", "id")


@transaction.atomic
def create_address(customer, data: dict) -> Address:
    has_any = Address.objects.filter(customer=customer).exists()
    make_default = bool(data.get("is_default")) or not has_any

    if make_default:
        Address.objects.filter(customer=customer, is_default=True).update(is_default=False)

    return Address.objects.create(customer=customer, **{**data, "is_default": make_default})


@transaction.atomic
def delete_address(customer, address_id: int) -> None:
    address = Address.objects.filter(pk=address_id).first()
    if address is None:
        raise AddressNotFoundError(f"Address with ID {address_id} not found")
    if address.customer_id != customer.pk:
        raise AccessDeniedError("You do not have access to this address")

    was_default = address.is_default
    address.delete()

    if was_default:
        successor = Address.objects.filter(customer=customer).order_by("id").first()
        if successor is not None:
            successor.is_default = True
            successor.save(update_fields=["is_default"])
