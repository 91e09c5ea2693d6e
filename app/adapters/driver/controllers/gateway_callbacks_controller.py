import logging
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from app.domain.entities import LifecycleEvent, SettingChange
from app.domain.errors import ServiceNotInitialisedError
from app.domain.services.component_context import context
from app.domain.services.eim_connector import EIMConnectorService
from app.domain.services.lifecycle_manager import AppLifecycleManager
from app.domain.services.setting_handlers import SettingChangeDispatcher

log = logging.getLogger(__name__)

router = APIRouter()

_context = context

class LifecyclePayload(BaseModel):
    event: str = Field(..., pattern="^(install|upgrade|uninstall)$", description="install | upgrade | uninstall")
    app_name: str = Field(..., description="Name of the managed app")
    version: str | None = Field(None, description="New version (on upgrade)")

class SettingChangePayload(BaseModel):
    key: str = Field(..., description="Setting key")
    new_value: str | None = Field(None, description="Value after the change")
    old_value: str | None = Field(None, description="Value before the change")

def _require(cls):
    try:
        return _context.require(cls)
    except ServiceNotInitialisedError as e:
        raise HTTPException(503, str(e))

@router.post("/lifecycle")
def post_lifecycle(p: LifecyclePayload):
    manager = _require(AppLifecycleManager)
    try:
        manager.handle(LifecycleEvent(event=p.event, app_name=p.app_name, version=p.version))
    except ServiceNotInitialisedError as e:
        raise HTTPException(503, str(e))
    return {"ok": True}

@router.post("/settings/changes")
def post_setting_change(p: SettingChangePayload):
    dispatcher = _require(SettingChangeDispatcher)
    handled = dispatcher.handle(SettingChange(key=p.key, new_value=p.new_value, old_value=p.old_value))
    return {"handled": handled}

@router.post("/connector/updated")
def post_connector_updated():
    connector = _require(EIMConnectorService)
    connector.on_update_connector()
    return {"ok": True}
