from typing import Optional
from urllib.parse import quote
from app.adapters.driven.gateway_http import gateway_call
from app.domain.entities import TrustedProvider
from app.domain.ports import TrustedProviderGateway


def _provider_from_json(data: dict) -> TrustedProvider:
    return TrustedProvider(name=data["name"], key=data.get("key"))


class HttpTrustedProviderGateway(TrustedProviderGateway):
    def get_all_providers(self) -> list[TrustedProvider]:
        data = gateway_call("GET", "/trustedproviders") or {}
        return [_provider_from_json(p) for p in data.get("trustedProviders") or []]

    def get_or_create(self, name: str) -> Optional[TrustedProvider]:
        data = gateway_call("PUT", f"/trustedproviders/{quote(name, safe='')}")
        return _provider_from_json(data) if data else None
