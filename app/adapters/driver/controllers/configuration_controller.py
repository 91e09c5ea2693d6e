import logging
from typing import Any
from fastapi import APIRouter, Header, HTTPException, Request
from pydantic import BaseModel, Field
from app.domain.errors import GatewayAPIError, ServiceNotInitialisedError
from app.domain.ports import AuthGateway, SettingsGateway
from app.domain.services.component_context import context
from app.domain.services.configuration_service import ConfigurationService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/configuration")

_context = context

class ConfigPayload(BaseModel):
    key: str | None = Field(None, description="Setting key, must match the path key")
    value: Any = Field(None, description="New setting value")

def _service() -> ConfigurationService:
    try:
        return ConfigurationService(_context.require(SettingsGateway), _context.get(AuthGateway))
    except ServiceNotInitialisedError as e:
        raise HTTPException(500, str(e))

def _list_config() -> list[dict]:
    service = _service()
    try:
        return [{"key": e.key, "value": e.value} for e in service.list_config()]
    except Exception as e:
        log.error("Failed to retrieve the configuration for this service - %s", e, exc_info=True)
        raise HTTPException(500, "Failed to retrieve the configuration")

@router.get("")
def get_service_config():
    return _list_config()

@router.get("/secure")
def get_service_config_securely(request: Request, otagtoken: str | None = Header(None)):
    service = _service()
    try:
        service.authorise(otagtoken)
    except Exception:
        host = request.client.host if request.client else "unknown"
        log.error("Rebuffed unauthorised access from I.P. %s", host)
        raise HTTPException(401, "Unauthorised")
    return _list_config()

@router.get("/{key}")
def get_config_by_key(key: str):
    service = _service()
    try:
        entry = service.get(key)
    except Exception as e:
        log.error("Failed to retrieve configuration setting for key %s - %s", key, e, exc_info=True)
        raise HTTPException(500, "Failed to retrieve configuration setting")
    if entry is None:
        raise HTTPException(404, f"Unknown setting {key}")
    return {"key": entry.key, "value": entry.value}

@router.put("/{key}")
def update_config_value(key: str, p: ConfigPayload | None = None):
    if p is None or p.key is None or p.key != key or p.value is None:
        raise HTTPException(400, "Body must carry the path key and a non-null value")

    service = _service()
    try:
        entry = service.update(key, p.value)
    except Exception as e:
        err_msg = f"Failed to update configuration setting for key {key} with new value {p.value}"
        if isinstance(e, GatewayAPIError):
            err_msg += f" - gateway error - {e.call_info}"
        log.error(err_msg, exc_info=True)
        raise HTTPException(500, "Failed to update configuration setting")
    if entry is None:
        raise HTTPException(404, f"Unknown setting {key}")
    return {"key": entry.key, "value": entry.value}
