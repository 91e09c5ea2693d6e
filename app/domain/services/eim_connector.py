import logging
from typing import Optional, TYPE_CHECKING
from app.domain import constants
from app.domain.entities import EIMConnector, SettingChange
from app.domain.services.component_context import ComponentContext
from app.domain.services.trusted_provider_service import TrustedProviderService

if TYPE_CHECKING:
    from app.domain.services.auth_handler import ConnectorAuthHandler

log = logging.getLogger(__name__)


class EIMConnectorService:
    """Lets the gateway route to our backing EIM service through one shared URL.

    The URL lives in a gateway setting (``connection_string_setting_key``) so an
    admin can change it; we keep the last value we were told about in memory.
    The connector also carries the trusted provider identity the backend uses and
    exposes the auth handler that decorates gateway auth responses.
    """

    name = constants.CONNECTOR_NAME
    version = constants.CONNECTOR_VERSION
    connection_string_setting_key = constants.CONNECTION_STRING_SETTING_KEY

    def __init__(self, context: ComponentContext, connection_string: Optional[str] = None):
        self._context = context
        self.connection_string = connection_string

    def on_setting_changed(self, change: SettingChange) -> None:
        log.info("EIM Connection URL was updated to %s", change.new_value)
        self.connection_string = change.new_value

    @property
    def trusted_provider_name(self) -> Optional[str]:
        provider_service = self._context.get(TrustedProviderService)
        return provider_service.provider_name if provider_service else None

    @property
    def trusted_provider_key(self) -> Optional[str]:
        provider_service = self._context.get(TrustedProviderService)
        if provider_service is None:
            return None
        provider = provider_service.get_trusted_provider()
        return provider.key if provider else None

    def register_trusted_provider_key(self, server_name: str, key: Optional[str]) -> bool:
        # no collaborating EIM backend is wired up to receive the key
        log.debug("Not forwarding trusted provider key for %s", server_name)
        return False

    @property
    def auth_handler(self) -> Optional["ConnectorAuthHandler"]:
        from app.domain.services.auth_handler import ConnectorAuthHandler
        return self._context.get(ConnectorAuthHandler)

    def on_update_connector(self, updated: Optional[EIMConnector] = None) -> bool:
        """An admin changed the connector, the trusted provider key may have been refreshed."""
        log.info("EIM connector %s was updated at the gateway", self.name)
        return self.register_trusted_provider_key(self.trusted_provider_name or "", self.trusted_provider_key)

    def to_registration(self) -> EIMConnector:
        return EIMConnector(
            name=self.name,
            version=self.version,
            connection_string=self.connection_string,
            connection_string_setting_key=self.connection_string_setting_key,
            trusted_provider_name=self.trusted_provider_name or "",
            trusted_provider_key=self.trusted_provider_key,
        )
