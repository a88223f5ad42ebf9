"""Store configuration captured from the source storefront.

Setting values arrive as arbitrary JSON. They are held as an explicit tagged
union so that every outgoing settings field goes through ``to_json``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from storeclone.domain.model.primitives import json_number

if TYPE_CHECKING:
    from storeclone.domain.model.primitives import JsonValue


@dataclass(slots=True, frozen=True)
class TextSetting:
    value: str

    def to_json(self) -> JsonValue:
        return self.value


@dataclass(slots=True, frozen=True)
class NumberSetting:
    value: int | Decimal

    def to_json(self) -> JsonValue:
        return json_number(self.value)


@dataclass(slots=True, frozen=True)
class FlagSetting:
    value: bool

    def to_json(self) -> JsonValue:
        return self.value


@dataclass(slots=True, frozen=True)
class ListSetting:
    items: tuple[SettingValue, ...] = ()

    def to_json(self) -> JsonValue:
        return [item.to_json() for item in self.items]


@dataclass(slots=True, frozen=True)
class MappingSetting:
    entries: tuple[tuple[str, SettingValue], ...] = ()

    def to_json(self) -> JsonValue:
        return {key: value.to_json() for key, value in self.entries}


@dataclass(slots=True, frozen=True)
class NullSetting:
    def to_json(self) -> JsonValue:
        return None


type SettingValue = (
    TextSetting | NumberSetting | FlagSetting | ListSetting | MappingSetting | NullSetting
)


def setting_value_from_json(raw: object) -> SettingValue:  # noqa: PLR0911
    """Wrap a decoded JSON value in the matching ``SettingValue`` variant."""

    if raw is None:
        return NullSetting()
    # bool before int: bool is an int subclass
    if isinstance(raw, bool):
        return FlagSetting(raw)
    if isinstance(raw, int):
        return NumberSetting(raw)
    if isinstance(raw, float):
        return NumberSetting(Decimal(str(raw)))
    if isinstance(raw, Decimal):
        return NumberSetting(raw)
    if isinstance(raw, str):
        return TextSetting(raw)
    if isinstance(raw, list | tuple):
        return ListSetting(tuple(setting_value_from_json(item) for item in raw))  # pyright: ignore[reportUnknownVariableType, reportUnknownArgumentType]
    if isinstance(raw, dict):
        return MappingSetting(
            tuple((str(key), setting_value_from_json(value)) for key, value in raw.items())  # pyright: ignore[reportUnknownVariableType, reportUnknownArgumentType]
        )
    raise TypeError(f"Unsupported setting value type: {type(raw).__name__}")


@dataclass(slots=True, kw_only=True)
class StoreSetting:
    id: str
    group_id: str
    label: str | None = None
    value: SettingValue = field(default_factory=NullSetting)


@dataclass(slots=True, frozen=True)
class ShippingZoneLocation:
    code: str
    type: str


@dataclass(slots=True, kw_only=True)
class ShippingMethod:
    id: str | None = None
    instance_id: int = 0
    method_id: str | None = None
    title: str | None = None
    method_title: str | None = None
    order: int | None = None
    enabled: bool = False
    settings: dict[str, SettingValue] = field(default_factory=dict[str, "SettingValue"])

    @property
    def type_id(self) -> str | None:
        """Method type used when the method has to be created from scratch."""

        for candidate in (self.method_id, self.id):
            if candidate and candidate.strip():
                return candidate.strip()
        return None


@dataclass(slots=True, kw_only=True)
class ShippingZone:
    id: int
    name: str
    order: int = 0
    locations: list[ShippingZoneLocation] = field(default_factory=list["ShippingZoneLocation"])
    methods: list[ShippingMethod] = field(default_factory=list["ShippingMethod"])


@dataclass(slots=True, kw_only=True)
class PaymentGateway:
    id: str
    title: str | None = None
    description: str | None = None
    method_title: str | None = None
    order: int | None = None
    enabled: bool = False
    settings: dict[str, SettingValue] = field(default_factory=dict[str, "SettingValue"])


@dataclass(slots=True, kw_only=True)
class StoreConfiguration:
    store_settings: list[StoreSetting] = field(default_factory=list["StoreSetting"])
    shipping_zones: list[ShippingZone] = field(default_factory=list["ShippingZone"])
    payment_gateways: list[PaymentGateway] = field(default_factory=list["PaymentGateway"])

    @property
    def is_empty(self) -> bool:
        return not (self.store_settings or self.shipping_zones or self.payment_gateways)
