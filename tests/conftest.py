from __future__ import annotations

import pytest

from storeclone.config import TargetStoreConfig
from storeclone.domain.replication import ReplicationContext
from tests.support.fake_store import FakeTargetStore


@pytest.fixture
def fake_store() -> FakeTargetStore:
    return FakeTargetStore()


@pytest.fixture
def progress_messages() -> list[str]:
    return []


@pytest.fixture
def context(fake_store: FakeTargetStore, progress_messages: list[str]) -> ReplicationContext:
    return ReplicationContext(store=fake_store, progress=progress_messages.append)


@pytest.fixture
def target_config() -> TargetStoreConfig:
    return TargetStoreConfig(
        base_url="https://shop.example.test/",
        consumer_key="ck_test",
        consumer_secret="cs_test",
    )
