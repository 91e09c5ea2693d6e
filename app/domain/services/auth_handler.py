import logging
import uuid
from typing import Optional
from app.domain import constants
from app.domain.entities import AuthHandlerRegistration, AuthHandlerResult, Cookie
from app.domain.services.component_context import ComponentContext
from app.domain.services.eim_connector import EIMConnectorService

log = logging.getLogger(__name__)


class ConnectorAuthHandler:
    """Decorates auth responses issued by the gateway.

    For every auth request the gateway handles, we get to add a root cookie and
    extra response properties. Credentials and tokens would be checked against the
    EIM backend's login endpoint; this handler accepts them and only decorates.
    """

    name = "ConnectorAuthHandler"
    decorator = True
    resolve_usernames_via_otds = False
    otds_resource_id: Optional[str] = None

    def __init__(self, context: ComponentContext):
        self._context = context

    def auth_with_credentials(self, username: str, password: str,
                              headers: Optional[dict] = None,
                              client_data: Optional[dict] = None) -> AuthHandlerResult:
        auth_url = self.auth_url()
        log.debug("Credential auth for %s against %s", username, auth_url)
        return self._decorated_result(authed_by_creds=True)

    def auth_with_token(self, token: str, headers: Optional[dict] = None,
                        client_data: Optional[dict] = None) -> AuthHandlerResult:
        auth_url = self.auth_url()
        log.debug("Token auth against %s", auth_url)
        return self._decorated_result(authed_by_creds=False)

    def known_cookies(self) -> tuple[Cookie, ...]:
        # cleared on gateway logout via Set-Cookie
        return (Cookie(name=constants.AUTH_COOKIE_NAME, value="", path="/", http_only=True),)

    def auth_url(self) -> Optional[str]:
        connector = self._context.get(EIMConnectorService)
        if connector is None or not connector.connection_string:
            return None
        return f"{connector.connection_string.rstrip('/')}/login"

    def build_handler(self) -> AuthHandlerRegistration:
        return AuthHandlerRegistration(
            name=self.name,
            decorator=self.decorator,
            resolve_usernames_via_otds=self.resolve_usernames_via_otds,
            otds_resource_id=self.otds_resource_id,
            known_cookies=self.known_cookies(),
        )

    @staticmethod
    def _decorated_result(authed_by_creds: bool) -> AuthHandlerResult:
        return AuthHandlerResult(
            authenticated=True,
            root_cookies={constants.AUTH_COOKIE_NAME: str(uuid.uuid4())},
            additional_properties={constants.AUTHED_BY_CREDS: authed_by_creds},
        )
