"""Customer accounts captured from the source storefront."""

from __future__ import annotations

from dataclasses import dataclass, field

from storeclone.domain.model.primitives import Address, MetaEntry, SourceId  # noqa: TC001


@dataclass(slots=True, kw_only=True)
class Customer:
    id: SourceId = 0
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    billing: Address | None = None
    shipping: Address | None = None
    meta_data: list[MetaEntry] = field(default_factory=list["MetaEntry"])

    @property
    def label(self) -> str:
        if self.email and self.email.strip():
            return self.email
        if self.username and self.username.strip():
            return self.username
        return str(self.id) if self.id > 0 else "customer"
