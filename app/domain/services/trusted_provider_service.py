import logging
from typing import Optional
from app.domain.entities import TrustedProvider
from app.domain.errors import GatewayAPIError
from app.domain.ports import TrustedProviderGateway

log = logging.getLogger(__name__)


class TrustedProviderService:
    """Makes sure the trusted provider our EIM backend uses exists at the gateway.

    Trusted providers may call a restricted subset of the gateway APIs with their
    key. Validation runs once, on construction.
    """

    def __init__(self, providers: TrustedProviderGateway, provider_name: str = "ImaginaryProvider"):
        self._providers = providers
        self.provider_name = provider_name
        self._validate_trusted_provider()

    def provider_exists(self) -> bool:
        return self.get_trusted_provider() is not None

    def get_trusted_provider(self) -> Optional[TrustedProvider]:
        try:
            providers = self._providers.get_all_providers()
        except GatewayAPIError as e:
            log.info("Failed to lookup trusted provider - %s", e.call_info)
            return None
        return next((p for p in providers or [] if p.name == self.provider_name), None)

    def _validate_trusted_provider(self) -> None:
        if self.provider_exists():
            log.info("The trusted provider %s already exists, no further action required", self.provider_name)
            return

        try:
            created = self._providers.get_or_create(self.provider_name)
        except GatewayAPIError as e:
            log.info("Trusted provider calls failed - %s", e.call_info)
            return

        if created is None:
            raise RuntimeError(f"Failed to create the trusted provider {self.provider_name}")
        log.info("The trusted provider %s was created", self.provider_name)
