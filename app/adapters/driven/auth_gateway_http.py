# app/adapters/driven/auth_gateway_http.py
from dataclasses import dataclass
from app.adapters.driven.gateway_http import gateway_call
from app.domain.entities import AuthHandlerRegistration, Cookie, UserIdentity
from app.domain.ports import AuthGateway

@dataclass
class HttpAuthGateway(AuthGateway):
    def get_user_for_token(self, token: str) -> UserIdentity:
        if not token:
            raise ValueError("No session token supplied")
        data = gateway_call("GET", "/auth/user", headers={"otagtoken": token})

        username = (data or {}).get("userName") or (data or {}).get("username")
        if not username:
            raise ValueError("Gateway returned no user for the token")
        return UserIdentity(username=username, user_id=(data or {}).get("userId"))

    def register_auth_handlers(self, handlers: list[AuthHandlerRegistration]) -> None:
        body = {"handlers": [_handler_to_json(h) for h in handlers]}
        gateway_call("POST", "/auth/handlers", body)


def _handler_to_json(handler: AuthHandlerRegistration) -> dict:
    return {
        "handlerName": handler.name,
        "decorator": handler.decorator,
        "resolveUsernamesViaOtds": handler.resolve_usernames_via_otds,
        "otdsResourceId": handler.otds_resource_id,
        "knownCookies": [_cookie_to_json(c) for c in handler.known_cookies],
    }


def _cookie_to_json(cookie: Cookie) -> dict:
    return {"name": cookie.name, "value": cookie.value, "path": cookie.path, "httpOnly": cookie.http_only}
