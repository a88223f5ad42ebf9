"""Public interface for the WooCommerce target adapter."""

from __future__ import annotations

from .client import (
    MEDIA_PATH,
    WC_API,
    WooCommerceStore,
    default_client_factory,
    target_resilience,
)
from .schema import WooCustomerSummary, WooEntityRef, WooMedia, WooOrderSummary, WooTerm

__all__ = [
    "MEDIA_PATH",
    "WC_API",
    "WooCommerceStore",
    "WooCustomerSummary",
    "WooEntityRef",
    "WooMedia",
    "WooOrderSummary",
    "WooTerm",
    "default_client_factory",
    "target_resilience",
]
