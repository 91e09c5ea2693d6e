# app/adapters/driven/gateway_http.py
import http.client
import json
import logging
import urllib.request
from urllib.error import HTTPError, URLError
from typing import Any, Optional
from infra.settings import settings
from app.domain.errors import GatewayAPIError

log = logging.getLogger(__name__)


def gateway_call(method: str, path: str, payload: Any = None,
                 headers: Optional[dict] = None) -> Any:
    """Call the gateway REST API and decode its JSON answer.

    Any HTTP or transport failure surfaces as ``GatewayAPIError``. An empty body
    decodes to ``None``.
    """
    url = f"{settings.GATEWAY_URL.rstrip('/')}/{path.lstrip('/')}"
    data = json.dumps(payload).encode("utf-8") if payload is not None else None
    req_headers = {"Accept": "application/json"}
    if data is not None:
        req_headers["Content-Type"] = "application/json"
    if settings.GATEWAY_SERVICE_KEY:
        req_headers["X-Service-Key"] = settings.GATEWAY_SERVICE_KEY
    req_headers.update(headers or {})

    req = urllib.request.Request(url=url, data=data, method=method, headers=req_headers)
    log.debug("Gateway call %s %s", method, url)
    try:
        with urllib.request.urlopen(req, timeout=settings.GATEWAY_TIMEOUT) as r:
            status = getattr(r, "status", None)
            raw = r.read()
    except HTTPError as e:
        raise GatewayAPIError(e.code, f"{method} {url} -> HTTP {e.code}") from e
    except URLError as e:
        raise GatewayAPIError(None, f"{method} {url} -> {e.reason}") from e
    except (OSError, http.client.HTTPException) as e:
        raise GatewayAPIError(None, f"{method} {url} -> {e!r}") from e

    try:
        text = raw.decode("utf-8")
        return json.loads(text) if text.strip() else None
    except ValueError as e:
        raise GatewayAPIError(status, f"{method} {url} -> invalid JSON body: {e}") from e
