import logging
from app.domain.entities import LifecycleEvent, MailRequest
from app.domain.ports import MailComposer
from app.domain.services.component_context import ComponentContext
from app.domain.services.mailer_service import MailerService

log = logging.getLogger(__name__)


def generate_recipients(count: int, domain: str = "yourcompany.com") -> tuple[str, ...]:
    return tuple(f"testRecipient{i}@{domain}" for i in range(count))


class AppLifecycleManager:
    """Handles the lifecycle messages the gateway sends for a managed deployment.

    An upgrade sends a notice mail through the ``MailerService``; the SMTP backend
    has to be configured for a real mail to go out.
    """

    def __init__(self, context: ComponentContext, composer: MailComposer,
                 sender: str, recipients: tuple[str, ...] = (), recipient_count: int = 25):
        self._context = context
        self._composer = composer
        self._sender = sender
        self._recipients = tuple(recipients) or generate_recipients(recipient_count)

    def handle(self, event: LifecycleEvent) -> None:
        handlers = {
            "install": self.on_install,
            "upgrade": self.on_change_version,
            "uninstall": self.on_uninstall,
        }
        handler = handlers.get(event.event)
        if handler is None:
            raise ValueError(f"Unknown lifecycle event: {event.event}")
        handler(event)

    def on_install(self, event: LifecycleEvent) -> None:
        log.info("Called onInstall for %s", event.app_name)

    def on_change_version(self, event: LifecycleEvent) -> None:
        log.info("Called onUpgrade for %s (version=%s)", event.app_name, event.version)
        self._send_upgrade_notice_email(event)

    def on_uninstall(self, event: LifecycleEvent) -> None:
        log.info("Called onUninstall for %s", event.app_name)

    def _send_upgrade_notice_email(self, event: LifecycleEvent) -> bool:
        mailer = self._context.require(MailerService)
        request: MailRequest = self._composer.compose_upgrade_notice(event, self._sender, self._recipients)
        return mailer.send_email(request)
