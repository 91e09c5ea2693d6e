import logging
import smtplib, socket, time
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional
from infra.settings import settings
from app.domain.entities import MailRequest, MailResult
from app.domain.ports import MailGateway

log = logging.getLogger(__name__)

_TRANSIENT = (
    smtplib.SMTPServerDisconnected, smtplib.SMTPConnectError, smtplib.SMTPHeloError,
    smtplib.SMTPDataError, smtplib.SMTPRecipientsRefused, socket.timeout,
)

_smtp_client: Optional[smtplib.SMTP] = None

def _connect() -> smtplib.SMTP:
    if settings.EMAIL_USE_SSL:
        client = smtplib.SMTP_SSL(settings.EMAIL_HOST, settings.EMAIL_PORT, timeout=settings.SMTP_CONNECT_TIMEOUT)
    else:
        client = smtplib.SMTP(settings.EMAIL_HOST, settings.EMAIL_PORT, timeout=settings.SMTP_CONNECT_TIMEOUT)
        if settings.EMAIL_USE_STARTTLS:
            client.ehlo()
            try:
                client.starttls(); client.ehlo()
            except Exception as e:
                log.warning("STARTTLS refused by %s, continuing in plain text: %s", settings.EMAIL_HOST, e)
    if settings.EMAIL_USER and settings.EMAIL_PASS:
        client.login(settings.EMAIL_USER, settings.EMAIL_PASS)
    client.timeout = settings.SMTP_OP_TIMEOUT
    log.info("SMTP connection opened to %s:%s", settings.EMAIL_HOST, settings.EMAIL_PORT)
    return client

def _get_client() -> smtplib.SMTP:
    global _smtp_client
    try:
        if _smtp_client is None:
            _smtp_client = _connect()
        else:
            _smtp_client.noop()
    except Exception:
        try:
            if _smtp_client: _smtp_client.quit()
        except Exception:
            pass
        _smtp_client = _connect()
    return _smtp_client

def _as_mime(request: MailRequest) -> MIMEMultipart:
    m = MIMEMultipart("alternative")
    m["Subject"] = request.subject
    m["From"] = request.from_addr or settings.EMAIL_FROM or settings.EMAIL_USER
    # recipients travel in the envelope only
    m["To"] = request.to[0] if len(request.to) == 1 else "undisclosed-recipients:;"
    m.attach(MIMEText(request.text, "plain", "utf-8"))
    if request.html:
        m.attach(MIMEText(request.html, "html", "utf-8"))
    return m

class SmtpMailGateway(MailGateway):
    def send(self, request: MailRequest) -> MailResult:
        if not request.to:
            raise ValueError("Mail request has no recipients")
        mime = _as_mime(request)
        last_exc: Optional[Exception] = None
        for attempt in range(1, settings.SMTP_MAX_RETRIES + 1):
            try:
                client = _get_client()
                refused = client.sendmail(mime["From"], list(request.to), mime.as_string())
                if refused:
                    return MailResult(False, f"Refused recipients: {', '.join(sorted(refused))}")
                return MailResult(True, f"Delivered to {len(request.to)} recipient(s)")
            except _TRANSIENT as e:
                last_exc = e
                log.warning("SMTP attempt %d/%d failed: %s", attempt, settings.SMTP_MAX_RETRIES, e)
                if attempt < settings.SMTP_MAX_RETRIES:
                    time.sleep(min(2 ** attempt, 8))
                try:
                    client.quit()
                except Exception:
                    pass
                finally:
                    globals()["_smtp_client"] = None
            except Exception as e:
                last_exc = e
                break
        raise RuntimeError(f"Failed to send mail: {last_exc}")
