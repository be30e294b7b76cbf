"""Mock Matrix providers for testing."""

from dishka import Scope, provide

from gate.adapter.matrix import MockAccountDataClientFactory
from gate.domain.repository import AccountDataClientFactory
from gate.util.di.infrastructure.matrix import MatrixProvider


class MockMatrixProvider(MatrixProvider):
    """Mock Matrix provider using in-memory account data.

    Tests register tokens on the factory:

        factory = await env.get(AccountDataClientFactory)
        factory.register("admin-token", "@admin:chat.example.com")
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_account_data_client_factory(self) -> AccountDataClientFactory:
        """Provide mock account-data client factory."""
        return MockAccountDataClientFactory()
