"""Grouping of customers by phone number."""

from typing import Iterable

from champion_store.domain.models import CustomerDomain


def group_customers_by_phone(customers: Iterable[CustomerDomain]) -> dict[str, list[str]]:
    """
    Partition customers by phone.

    Customers without a phone are left out of every group. Within a group,
    IDs keep the input order and are not repeated. Phones are compared
    verbatim, no formatting normalization is applied.

    Args:
        customers: Customers of a single company

    Returns:
        dict: phone -> customer IDs sharing it
    """
    customers_by_phone: dict[str, list[str]] = {}

    for customer in customers:
        if not customer.has_phone:
            continue
        group = customers_by_phone.setdefault(customer.phone, [])
        if customer.id not in group:
            group.append(customer.id)

    return customers_by_phone
