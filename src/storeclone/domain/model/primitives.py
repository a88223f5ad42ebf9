"""Primitive aliases and small value objects shared by snapshot entities."""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal

type JsonValue = str | int | float | Decimal | bool | None | list[JsonValue] | dict[str, JsonValue]
type SourceId = int
type TargetId = int


def json_number(value: int | Decimal) -> int | float:
    """Plain JSON number for ``value``; integral decimals stay integers."""

    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        return float(value)
    return value


@dataclass(slots=True, frozen=True)
class MetaEntry:
    """Free-form ``meta_data`` row attached to customers, coupons, orders and lines."""

    key: str | None
    value: JsonValue = None

    def value_as_string(self) -> str | None:
        value = self.value
        if value is None:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return value
        if isinstance(value, int | float | Decimal):
            return str(value)
        return json.dumps(value, separators=(",", ":"), default=str)


@dataclass(slots=True, frozen=True)
class Address:
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    address_1: str | None = None
    address_2: str | None = None
    city: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None
    email: str | None = None
    phone: str | None = None
