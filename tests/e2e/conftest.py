"""Fixtures for end-to-end API tests."""

import pytest
from fastapi.testclient import TestClient

from gate.domain.repository import AccountDataClientFactory, ReconcilableInviteStore
from gate.interface.api.app import create_app
from tests.di import build_test_container
from tests.factories import (
    ADMIN,
    ADMIN_TOKEN,
    MEMBER,
    MEMBER_TOKEN,
    OUTSIDER,
    OUTSIDER_TOKEN,
)


@pytest.fixture
def client():
    """Create test client with test container.

    The container is only used from the client's event loop, the same
    loop the app resolves dependencies on.
    """
    container = build_test_container()
    app_instance = create_app(container, instrument=False)

    with TestClient(app_instance) as test_client:
        factory = test_client.portal.call(container.get, AccountDataClientFactory)
        factory.register(ADMIN_TOKEN, ADMIN)
        factory.register(MEMBER_TOKEN, MEMBER)
        factory.register(OUTSIDER_TOKEN, OUTSIDER)
        yield test_client
        test_client.portal.call(container.close)


def _resolve(client: TestClient, dependency):
    container = client.app.state.dishka_container
    return client.portal.call(container.get, dependency)


@pytest.fixture
def accounts(client):
    """The mock homeserver's account data."""
    return _resolve(client, AccountDataClientFactory)


@pytest.fixture
def local_store(client):
    """The local invite store the login check reads.

    Call its coroutines through `client.portal.call`.
    """
    return _resolve(client, ReconcilableInviteStore)
