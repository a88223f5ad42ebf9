"""Apply captured store settings, shipping zones and payment gateways."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from storeclone.domain.ports import TargetStoreError

from .payloads import (
    PaymentGatewayPayload,
    SettingUpdatePayload,
    ShippingMethodPayload,
    ShippingZonePayload,
    ZoneLocationPayload,
    settings_map,
)
from .report import Outcome, ReportKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from storeclone.domain.model import (
        PaymentGateway,
        ShippingMethod,
        ShippingZone,
        StoreConfiguration,
        StoreSetting,
    )

    from .context import ReplicationContext

log = logging.getLogger(__name__)


def group_settings(settings: Iterable[StoreSetting]) -> dict[str, list[StoreSetting]]:
    """Group settings by group id, case-insensitively; the first spelling names the group."""

    groups: dict[str, list[StoreSetting]] = {}
    names: dict[str, str] = {}
    for setting in settings:
        if not setting.id.strip() or not setting.group_id.strip():
            continue
        folded = setting.group_id.casefold()
        name = names.setdefault(folded, setting.group_id)
        groups.setdefault(name, []).append(setting)
    return groups


def _first_label(*candidates: str | None) -> str | None:
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate
    return None


@dataclass(slots=True)
class ConfigurationApplier:
    context: ReplicationContext

    async def apply(self, configuration: StoreConfiguration) -> None:
        if configuration.store_settings:
            await self.apply_settings(configuration.store_settings)
        if configuration.shipping_zones:
            await self.apply_shipping_zones(configuration.shipping_zones)
        if configuration.payment_gateways:
            await self.apply_payment_gateways(configuration.payment_gateways)

    async def apply_settings(self, settings: Iterable[StoreSetting]) -> None:
        for group_id, members in group_settings(settings).items():
            self.context.checkpoint(ReportKind.SETTINGS_GROUP.value)
            updates = [
                SettingUpdatePayload(id=setting.id, value=setting.value).to_json()
                for setting in members
            ]
            self.context.progress(
                f"Applying settings group '{group_id}' ({len(updates)} fields)…"
            )
            await self.context.store.update_settings_group(group_id, updates)
            self.context.report.record(ReportKind.SETTINGS_GROUP, Outcome.UPDATED)

    async def apply_shipping_zones(self, zones: Iterable[ShippingZone]) -> None:
        store = self.context.store
        for zone in zones:
            self.context.checkpoint(ReportKind.SHIPPING_ZONE.value)
            if zone.id <= 0:
                # zone 0 is the built-in "rest of the world" zone
                self.context.report.record(ReportKind.SHIPPING_ZONE, Outcome.SKIPPED)
                continue

            zone_label = _first_label(zone.name) or str(zone.id)
            zone_payload = ShippingZonePayload(name=zone.name, order=zone.order).to_json()
            if zone_payload:
                self.context.progress(f"Updating shipping zone '{zone_label}'…")
                await store.update_shipping_zone(zone.id, zone_payload)

            if zone.locations:
                self.context.progress(f"Updating shipping zone '{zone_label}' locations…")
                locations = [
                    ZoneLocationPayload(code=location.code, type=location.type).to_json()
                    for location in zone.locations
                ]
                await store.replace_shipping_zone_locations(zone.id, locations)
            self.context.report.record(ReportKind.SHIPPING_ZONE, Outcome.UPDATED)

            for method in zone.methods:
                self.context.checkpoint(ReportKind.SHIPPING_METHOD.value)
                await self.apply_shipping_method(zone.id, zone_label, method)

    async def apply_shipping_method(
        self, zone_id: int, zone_label: str, method: ShippingMethod
    ) -> None:
        """Update the method instance, creating it when the target does not know it."""

        type_id = method.type_id
        if method.instance_id <= 0 and type_id is None:
            log.debug("Shipping method without identifier in zone %s skipped", zone_id)
            self.context.report.record(ReportKind.SHIPPING_METHOD, Outcome.SKIPPED)
            return

        label = _first_label(method.title, method.method_title, method.id, method.method_id)
        label = label or str(method.instance_id)
        body = ShippingMethodPayload(
            title=method.title,
            order=method.order,
            enabled=method.enabled,
            settings=settings_map(method.settings),
        )
        store = self.context.store

        if method.instance_id > 0:
            self.context.progress(f"Updating shipping method '{label}' in zone '{zone_label}'…")
            try:
                await store.update_shipping_zone_method(zone_id, method.instance_id, body.to_json())
            except TargetStoreError as exc:
                if not exc.is_not_found:
                    raise
                log.info(
                    "Shipping method instance %s missing in zone %s", method.instance_id, zone_id
                )
            else:
                self.context.report.record(ReportKind.SHIPPING_METHOD, Outcome.UPDATED)
                return

        if type_id is None:
            self.context.report.record(ReportKind.SHIPPING_METHOD, Outcome.SKIPPED)
            return

        body.method_id = type_id
        self.context.progress(f"Creating shipping method '{label}' in zone '{zone_label}'…")
        await store.create_shipping_zone_method(zone_id, body.to_json())
        self.context.report.record(ReportKind.SHIPPING_METHOD, Outcome.CREATED)

    async def apply_payment_gateways(self, gateways: Iterable[PaymentGateway]) -> None:
        for gateway in gateways:
            self.context.checkpoint(ReportKind.PAYMENT_GATEWAY.value)
            if not gateway.id.strip():
                self.context.report.record(ReportKind.PAYMENT_GATEWAY, Outcome.SKIPPED)
                continue
            payload = PaymentGatewayPayload(
                title=gateway.title,
                description=gateway.description,
                order=gateway.order,
                enabled=gateway.enabled,
                settings=settings_map(gateway.settings),
            ).to_json()
            label = _first_label(gateway.title, gateway.method_title) or gateway.id
            self.context.progress(f"Updating payment gateway '{label}'…")
            await self.context.store.update_payment_gateway(gateway.id, payload)
            self.context.report.record(ReportKind.PAYMENT_GATEWAY, Outcome.UPDATED)
