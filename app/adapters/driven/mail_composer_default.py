from app.domain.entities import LifecycleEvent, MailRequest
from app.domain.ports import MailComposer
from infra.settings import settings

class DefaultMailComposer(MailComposer):
    def compose_upgrade_notice(self, event: LifecycleEvent, sender: str, recipients: tuple[str, ...]) -> MailRequest:
        service = settings.SERVICE_NAME
        app_name = event.app_name
        version_txt = f" to version {event.version}" if event.version else ""

        subject = f"{service} Upgrade Alert"
        text = (
            f"{service} has been upgraded by the gateway admin.\n\n"
            f"Application {app_name} was upgraded{version_txt}.\n"
        )
        version_html = f" to version <strong>{event.version}</strong>" if event.version else ""
        html = (
            f"<p>{service} has been upgraded by the gateway admin.</p>"
            f"<p>Application <strong>{app_name}</strong> was upgraded{version_html}.</p>"
        )

        return MailRequest(
            from_addr=sender,
            to=tuple(recipients),
            subject=subject,
            text=text.strip(),
            html=html.strip(),
        )
