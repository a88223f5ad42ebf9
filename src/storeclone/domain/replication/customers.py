"""Create or update customer accounts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from storeclone.domain.ports import TargetStoreError

from .payloads import AddressPayload, CustomerPayload, meta_payloads
from .report import Outcome, ReportKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from storeclone.domain.model import Customer

    from .context import ReplicationContext


def build_customer_payload(customer: Customer) -> CustomerPayload:
    return CustomerPayload(
        email=customer.email,
        first_name=customer.first_name,
        last_name=customer.last_name,
        username=customer.username,
        billing=AddressPayload.from_address(customer.billing),
        shipping=AddressPayload.from_address(customer.shipping),
        meta_data=meta_payloads(customer.meta_data),
    )


@dataclass(slots=True)
class CustomerReconciler:
    context: ReplicationContext

    async def reconcile_all(self, customers: Iterable[Customer]) -> None:
        for customer in customers:
            self.context.checkpoint(ReportKind.CUSTOMER.value)
            await self.reconcile(customer)

    async def reconcile(self, customer: Customer) -> int | None:
        """Upsert ``customer``; returns ``None`` when nothing could be imported."""

        payload = build_customer_payload(customer).to_json()
        if not payload:
            self.context.progress(f"Skipping customer '{customer.label}': no importable fields.")
            self.context.report.record(ReportKind.CUSTOMER, Outcome.SKIPPED)
            return None

        store = self.context.store
        existing = await self.find_existing(customer)
        if existing is not None:
            self.context.progress(f"Updating customer '{customer.label}' (ID {existing}).")
            target_id = await store.update_customer(existing, payload)
            self._remember(customer, target_id, Outcome.UPDATED)
            return target_id

        self.context.progress(f"Creating customer '{customer.label}'.")
        try:
            target_id = await store.create_customer(payload)
        except TargetStoreError as exc:
            if not exc.is_conflict:
                raise
            self.context.progress(
                f"Customer '{customer.label}' may already exist "
                f"({exc.status_code}). Retrying fetch."
            )
            existing = await self.find_existing(customer)
            if existing is None:
                raise
            await store.update_customer(existing, payload)
            self._remember(customer, existing, Outcome.UPDATED)
            return existing
        self._remember(customer, target_id, Outcome.CREATED)
        return target_id

    async def find_existing(self, customer: Customer) -> int | None:
        store = self.context.store
        if customer.email and customer.email.strip():
            by_email = await store.find_customer_by_email(customer.email)
            if by_email is not None:
                return by_email
        if customer.username and customer.username.strip():
            wanted = customer.username.casefold()
            for candidate in await store.search_customers(customer.username):
                if candidate.username is not None and candidate.username.casefold() == wanted:
                    return candidate.id
        return None

    def _remember(self, customer: Customer, target_id: int, outcome: Outcome) -> None:
        self.context.identity.customers.record(customer.id, target_id)
        self.context.report.record(ReportKind.CUSTOMER, outcome)
