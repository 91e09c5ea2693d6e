import pytest
from unittest.mock import MagicMock

from app.domain.entities import TrustedProvider
from app.domain.errors import GatewayAPIError
from app.domain.services.trusted_provider_service import TrustedProviderService


def test_existing_provider_is_not_recreated():
    gw = MagicMock()
    gw.get_all_providers.return_value = [TrustedProvider("Other"), TrustedProvider("ImaginaryProvider", "abc")]

    svc = TrustedProviderService(gw)

    gw.get_or_create.assert_not_called()
    assert svc.provider_exists() is True
    assert svc.get_trusted_provider() == TrustedProvider("ImaginaryProvider", "abc")


def test_missing_provider_is_created():
    gw = MagicMock()
    gw.get_all_providers.return_value = []
    gw.get_or_create.return_value = TrustedProvider("Custom", "new")

    svc = TrustedProviderService(gw, provider_name="Custom")

    gw.get_or_create.assert_called_once_with("Custom")
    assert svc.provider_name == "Custom"


def test_create_returning_nothing_raises():
    gw = MagicMock()
    gw.get_all_providers.return_value = None
    gw.get_or_create.return_value = None

    with pytest.raises(RuntimeError, match="ImaginaryProvider"):
        TrustedProviderService(gw)


def test_gateway_errors_are_logged_not_raised():
    gw = MagicMock()
    gw.get_all_providers.side_effect = GatewayAPIError(500, "GET /trustedproviders -> HTTP 500")
    gw.get_or_create.side_effect = GatewayAPIError(500, "PUT /trustedproviders -> HTTP 500")

    svc = TrustedProviderService(gw)

    gw.get_or_create.assert_called_once_with("ImaginaryProvider")
    assert svc.get_trusted_provider() is None
