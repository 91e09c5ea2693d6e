import logging
from app.domain.entities import MailRequest
from app.domain.ports import MailGateway

log = logging.getLogger(__name__)


class MailerService:
    def __init__(self, mail: MailGateway):
        self._mail = mail

    def send_email(self, request: MailRequest) -> bool:
        """Send ``request`` and report whether the mail backend accepted it."""
        try:
            result = self._mail.send(request)
        except Exception as e:
            log.error("Failed to send email, exception: %s", e, exc_info=True)
            return False

        if result.success:
            log.info("Successfully sent email, MailResult message=%s", result.message)
        else:
            log.info("Failed to send email, MailResult message=%s", result.message)
        return result.success
