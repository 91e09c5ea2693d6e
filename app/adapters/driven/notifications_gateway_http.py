from app.adapters.driven.gateway_http import gateway_call
from app.domain.entities import PushNotificationRequest
from app.domain.ports import NotificationsGateway


def _request_to_json(request: PushNotificationRequest) -> dict:
    return {
        "title": request.title,
        "summary": request.summary,
        "clients": list(request.clients),
        "users": list(request.users),
        "groups": list(request.groups),
        "runtimes": list(request.runtimes),
        "data": request.data,
    }


class HttpNotificationsGateway(NotificationsGateway):
    def send_push_notification(self, request: PushNotificationRequest) -> bool:
        data = gateway_call("POST", "/notifications/push", _request_to_json(request))
        return bool((data or {}).get("success", False))
