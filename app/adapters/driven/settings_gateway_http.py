from dataclasses import asdict
from typing import Optional
from urllib.parse import quote
from app.adapters.driven.gateway_http import gateway_call
from app.domain.entities import Setting
from app.domain.ports import SettingsGateway


def _setting_to_json(setting: Setting) -> dict:
    body = asdict(setting)
    body["appName"] = body.pop("app_name")
    body["displayName"] = body.pop("display_name")
    body["defaultValue"] = body.pop("default_value")
    body["readOnly"] = body.pop("read_only")
    body["seqNo"] = body.pop("seq_no")
    return body


def _setting_from_json(data: dict) -> Setting:
    return Setting(
        key=data["key"],
        app_name=data.get("appName", ""),
        type=data.get("type", "string"),
        display_name=data.get("displayName") or data["key"],
        value=data.get("value"),
        default_value=data.get("defaultValue"),
        description=data.get("description"),
        read_only=bool(data.get("readOnly", False)),
        seq_no=data.get("seqNo"),
    )


class HttpSettingsGateway(SettingsGateway):
    def get_setting(self, key: str) -> Optional[Setting]:
        data = gateway_call("GET", f"/settings/{quote(key, safe='')}")
        return _setting_from_json(data) if data else None

    def create_setting(self, setting: Setting) -> None:
        gateway_call("POST", "/settings", _setting_to_json(setting))

    def update_setting(self, setting: Setting) -> None:
        gateway_call("PUT", f"/settings/{quote(setting.key, safe='')}", _setting_to_json(setting))
