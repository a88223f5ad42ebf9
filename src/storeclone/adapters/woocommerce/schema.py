"""Response schemas for the WooCommerce and WordPress REST APIs.

Only the fields needed to match and reference entities are modeled; the
rest of each (large) response body is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, TypeAdapter


class WooBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class WooEntityRef(WooBaseModel):
    """Any created or updated entity; only its id is read back."""

    id: int


class WooTerm(WooEntityRef):
    """Category, tag, attribute definition or attribute term."""

    name: str | None = None
    slug: str | None = None


class WooCustomerSummary(WooEntityRef):
    email: str | None = None
    username: str | None = None


class WooOrderSummary(WooEntityRef):
    number: str | int | None = None
    order_key: str | None = None


class WooMedia(WooEntityRef):
    source_url: str | None = None
    mime_type: str | None = None


ENTITY_LIST = TypeAdapter(list[WooEntityRef])
TERM_LIST = TypeAdapter(list[WooTerm])
CUSTOMER_LIST = TypeAdapter(list[WooCustomerSummary])
ORDER_LIST = TypeAdapter(list[WooOrderSummary])
ENTITY = TypeAdapter(WooEntityRef)
MEDIA = TypeAdapter(WooMedia)
