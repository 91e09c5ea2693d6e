import logging
from dataclasses import dataclass, field
from typing import Callable, Optional
from app.domain.entities import DeploymentResult
from app.domain.errors import DeploymentReportError, GatewayAPIError
from app.domain.ports import (
    AuthGateway,
    MailComposer,
    MailGateway,
    NotificationsGateway,
    RuntimesGateway,
    ServiceGateway,
    SettingsGateway,
    TrustedProviderGateway,
)
from app.domain.services.auth_handler import ConnectorAuthHandler
from app.domain.services.component_context import ComponentContext
from app.domain.services.eim_connector import EIMConnectorService
from app.domain.services.lifecycle_manager import AppLifecycleManager
from app.domain.services.mailer_service import MailerService
from app.domain.services.push_notification_service import PushNotificationService
from app.domain.services.setting_handlers import CustomSettingsHandler, SettingChangeDispatcher
from app.domain.services.settings_service import SettingsService
from app.domain.services.trusted_provider_service import TrustedProviderService

log = logging.getLogger(__name__)


@dataclass
class GatewayClients:
    settings: SettingsGateway
    runtimes: RuntimesGateway
    notifications: NotificationsGateway
    trusted_providers: TrustedProviderGateway
    auth: AuthGateway
    service: ServiceGateway
    mail: MailGateway
    composer: MailComposer


@dataclass
class BootstrapOptions:
    service_name: str = "MyService"
    eim_connection_url: Optional[str] = None
    trusted_provider_name: str = "ImaginaryProvider"
    push_clients: tuple[str, ...] = ()
    push_users: tuple[str, ...] = ()
    push_groups: tuple[str, ...] = ()
    upgrade_notice_from: str = "admin@myservice.com"
    upgrade_notice_to: tuple[str, ...] = field(default_factory=tuple)
    upgrade_notice_recipient_count: int = 25


class ServiceBootstrapper:
    """Brings the service up against the gateway and reports the outcome.

    The sequence is fixed: register the gateway clients, create our settings,
    build the components, log the known runtimes, register the EIM connector and
    the auth handler, then tell the gateway the deployment completed.
    """

    def __init__(self, context: ComponentContext, clients_factory: Callable[[], GatewayClients],
                 options: Optional[BootstrapOptions] = None):
        self._context = context
        self._clients_factory = clients_factory
        self._options = options or BootstrapOptions()
        self.deployment: Optional[DeploymentResult] = None

    def on_start(self, app_name: str) -> DeploymentResult:
        log.info("Initializing service %s", app_name)
        clients: Optional[GatewayClients] = None
        try:
            clients = self._init_clients()
            self._initialise_service(app_name, clients)
            result = DeploymentResult(True)
            clients.service.complete_deployment(result)
            log.info("Service %s startup completed", app_name)
        except GatewayAPIError as e:
            log.error("Gateway call failed - %s", e.call_info)
            self.deployment = DeploymentResult(False, str(e))
            raise DeploymentReportError("Failed to report deployment outcome") from e
        except Exception as e:
            result = DeploymentResult(False, f"{self._options.service_name} deployment failed, {e}")
            log.error("%s deployment failed", app_name, exc_info=True)
            self.deployment = result
            if clients is None:
                raise DeploymentReportError("Failed to report deployment outcome") from e
            try:
                clients.service.complete_deployment(result)
            except GatewayAPIError as e1:
                raise DeploymentReportError("Failed to report deployment outcome") from e1
            return result

        self.deployment = result
        return result

    def on_stop(self, app_name: str) -> None:
        log.info("on_stop called for %s", app_name)

    def _init_clients(self) -> GatewayClients:
        clients = self._clients_factory()
        self._context.add(
            clients.settings, clients.runtimes, clients.notifications,
            clients.trusted_providers, clients.auth, clients.service,
            clients.mail, clients.composer,
        )
        return clients

    def _initialise_service(self, app_name: str, clients: GatewayClients) -> None:
        self._initialise_service_settings(app_name, clients)
        self._initialise_service_components(clients)
        self._list_known_runtimes(clients.runtimes)
        self._register_eim_connector(clients.service)
        self._register_auth_handler(clients.auth)

    def _initialise_service_settings(self, app_name: str, clients: GatewayClients) -> None:
        log.info("Starting SettingsService")
        settings_service = SettingsService(clients.settings, self._options.eim_connection_url)
        self._context.add(settings_service)
        settings_service.create_service_settings(app_name)

    def _initialise_service_components(self, clients: GatewayClients) -> None:
        opts = self._options

        log.info("Starting PushNotificationService")
        push = PushNotificationService(
            clients.notifications, clients.runtimes,
            service_name=opts.service_name,
            clients=opts.push_clients, users=opts.push_users, groups=opts.push_groups,
        )

        log.info("Starting MailerService")
        mailer = MailerService(clients.mail)

        log.info("Starting TrustedProviderService")
        trusted = TrustedProviderService(clients.trusted_providers, opts.trusted_provider_name)

        self._context.add(push, mailer, trusted)

        settings_service = self._context.require(SettingsService)
        connector = EIMConnectorService(self._context, self._current_connection_string(settings_service))
        auth_handler = ConnectorAuthHandler(self._context)

        dispatcher = SettingChangeDispatcher()
        settings_handler = CustomSettingsHandler(self._context, service_name=opts.service_name)
        settings_handler.register(dispatcher)
        dispatcher.add_handler(connector.connection_string_setting_key, connector.on_setting_changed)

        lifecycle = AppLifecycleManager(
            self._context, clients.composer,
            sender=opts.upgrade_notice_from,
            recipients=opts.upgrade_notice_to,
            recipient_count=opts.upgrade_notice_recipient_count,
        )
        self._context.add(connector, auth_handler, dispatcher, settings_handler, lifecycle)

    def _current_connection_string(self, settings_service: SettingsService) -> Optional[str]:
        setting = settings_service.get_setting(EIMConnectorService.connection_string_setting_key)
        if setting is not None and setting.value:
            return setting.value
        return self._options.eim_connection_url

    def _list_known_runtimes(self, runtimes: RuntimesGateway) -> None:
        try:
            known = runtimes.get_all_runtimes()
        except GatewayAPIError as e:
            log.error("Runtimes retrieval call failed - %s", e.call_info)
            return
        log.info("The gateway knows about %d Runtimes", len(known))
        for runtime in known:
            log.info("- %s", runtime.name)

    def _register_eim_connector(self, service: ServiceGateway) -> None:
        connector = self._context.get(EIMConnectorService)
        if connector is None:
            raise RuntimeError("Failed to register our EIM connector, it was not found in the component context")
        try:
            service.register_connector(connector.to_registration())
        except GatewayAPIError as e:
            raise RuntimeError(f"Failed to register our connector with the gateway - {e.call_info}") from e

    def _register_auth_handler(self, auth: AuthGateway) -> None:
        handler = self._context.get(ConnectorAuthHandler)
        if handler is None:
            raise RuntimeError("Failed to register our auth handler, it was not found in the component context")
        try:
            auth.register_auth_handlers([handler.build_handler()])
        except GatewayAPIError as e:
            raise RuntimeError(f"Failed to register our auth handler with the gateway - {e.call_info}") from e
