import logging
from app.domain.entities import PushNotificationRequest
from app.domain.errors import GatewayAPIError
from app.domain.ports import NotificationsGateway, RuntimesGateway

log = logging.getLogger(__name__)


class PushNotificationService:
    def __init__(self, notifications: NotificationsGateway, runtimes: RuntimesGateway,
                 service_name: str = "MyService",
                 clients: tuple[str, ...] = (), users: tuple[str, ...] = (),
                 groups: tuple[str, ...] = ()):
        self._notifications = notifications
        self._runtimes = runtimes
        self._service_name = service_name
        self._clients = tuple(clients)
        self._users = tuple(users)
        self._groups = tuple(groups)

    def send_test_message(self, message: str) -> bool:
        try:
            runtimes = self._get_runtimes()
            for name in runtimes:
                log.info("Retrieved runtime %s", name)

            request = PushNotificationRequest(
                title=f"Push notification from {self._service_name}",
                summary=message,
                clients=self._clients,
                users=self._users,
                groups=self._groups,
                runtimes=runtimes,
                data={"message": message},
            )
            log.info("Sending test push notification - %s", request)

            sent = self._notifications.send_push_notification(request)
            log.info("Push notification sent successfully = %s", sent)
            return sent
        except GatewayAPIError as e:
            log.error("Failed to send test message, gateway call failed - %s", e.call_info)
            raise

    def _get_runtimes(self) -> tuple[str, ...]:
        names = sorted({r.name for r in self._runtimes.get_all_runtimes()})
        for name in names:
            log.info("Adding Runtime %s to the request", name)
        return tuple(names)
