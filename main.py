import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.adapters.driven.auth_gateway_http import HttpAuthGateway
from app.adapters.driven.mail_composer_default import DefaultMailComposer
from app.adapters.driven.mail_gateway_smtp import SmtpMailGateway
from app.adapters.driven.notifications_gateway_http import HttpNotificationsGateway
from app.adapters.driven.runtimes_gateway_http import HttpRuntimesGateway
from app.adapters.driven.service_gateway_http import HttpServiceGateway
from app.adapters.driven.settings_gateway_http import HttpSettingsGateway
from app.adapters.driven.trusted_provider_gateway_http import HttpTrustedProviderGateway
from app.adapters.driver.controllers.auth_handler_controller import router as auth_handler_router
from app.adapters.driver.controllers.configuration_controller import router as configuration_router
from app.adapters.driver.controllers.gateway_callbacks_controller import router as callbacks_router
from app.adapters.driver.controllers.health_controller import router as health_router
from app.domain.services.bootstrap import BootstrapOptions, GatewayClients, ServiceBootstrapper
from app.domain.services.component_context import context
from infra.logging_config import configure_logging
from infra.settings import settings

log = logging.getLogger(__name__)


def http_gateway_clients() -> GatewayClients:
    return GatewayClients(
        settings=HttpSettingsGateway(),
        runtimes=HttpRuntimesGateway(),
        notifications=HttpNotificationsGateway(),
        trusted_providers=HttpTrustedProviderGateway(),
        auth=HttpAuthGateway(),
        service=HttpServiceGateway(),
        mail=SmtpMailGateway(),
        composer=DefaultMailComposer(),
    )


def bootstrap_options() -> BootstrapOptions:
    return BootstrapOptions(
        service_name=settings.SERVICE_NAME,
        eim_connection_url=settings.EIM_CONNECTION_URL,
        trusted_provider_name=settings.TRUSTED_PROVIDER_NAME,
        push_clients=settings.PUSH_TEST_CLIENTS,
        push_users=settings.PUSH_TEST_USERS,
        push_groups=settings.PUSH_TEST_GROUPS,
        upgrade_notice_from=settings.UPGRADE_NOTICE_FROM,
        upgrade_notice_to=settings.UPGRADE_NOTICE_TO,
        upgrade_notice_recipient_count=settings.UPGRADE_NOTICE_RECIPIENT_COUNT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    bootstrapper = ServiceBootstrapper(context, http_gateway_clients, bootstrap_options())
    context.add(bootstrapper)
    if settings.BOOTSTRAP_ON_STARTUP:
        bootstrapper.on_start(settings.APP_NAME)
    yield
    bootstrapper.on_stop(settings.APP_NAME)
    context.clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=f"{settings.SERVICE_NAME} Gateway Service", lifespan=lifespan)
    app.include_router(configuration_router, prefix="/api", tags=["configuration"])
    app.include_router(callbacks_router, prefix="/api", tags=["gateway-callbacks"])
    app.include_router(auth_handler_router, prefix="/api", tags=["auth-handler"])
    app.include_router(health_router)
    return app

app = create_app()
