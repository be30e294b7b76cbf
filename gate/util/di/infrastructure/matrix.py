"""Matrix homeserver infrastructure providers."""

from dishka import Scope, provide

from gate.adapter.matrix import MatrixAccountDataClientFactory
from gate.config import MatrixSettings
from gate.domain.repository import AccountDataClientFactory
from gate.util.di.base import ProviderBase


class MatrixProvider(ProviderBase):
    """Matrix component base."""

    __mock_component__ = "matrix"


class ProdMatrixProvider(MatrixProvider):
    """Production Matrix provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_account_data_client_factory(
        self, matrix_settings: MatrixSettings
    ) -> AccountDataClientFactory:
        """Provide the account-data client factory for the configured homeserver."""
        return MatrixAccountDataClientFactory(matrix_settings)
