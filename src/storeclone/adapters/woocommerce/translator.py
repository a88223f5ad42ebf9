"""Translate WooCommerce response schemas into port records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from storeclone.domain.ports import RemoteCustomer, RemoteOrder, RemoteTerm

if TYPE_CHECKING:
    from .schema import WooCustomerSummary, WooOrderSummary, WooTerm


def to_remote_term(term: WooTerm) -> RemoteTerm:
    return RemoteTerm(id=term.id, slug=term.slug, name=term.name)


def to_remote_customer(customer: WooCustomerSummary) -> RemoteCustomer:
    return RemoteCustomer(id=customer.id, email=customer.email, username=customer.username)


def to_remote_order(order: WooOrderSummary) -> RemoteOrder:
    number = str(order.number) if order.number is not None else None
    return RemoteOrder(id=order.id, number=number, order_key=order.order_key)
