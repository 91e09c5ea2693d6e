import json
import logging
from dataclasses import replace
from typing import Any, Callable, Optional
from app.domain import constants
from app.domain.entities import ConfigEntry, Setting, UserIdentity
from app.domain.errors import GatewayAPIError
from app.domain.ports import AuthGateway, SettingsGateway

log = logging.getLogger(__name__)

_CONVERTERS: dict[str, Callable[[str], Any]] = {
    constants.STRING_SETTING_KEY: lambda v: v,
    constants.NUMBER_SETTING_KEY: int,
    constants.BOOL_SETTING_KEY: lambda v: v.lower() == "true",
    constants.JSON_SETTING_KEY: lambda v: v,
}


def _as_setting_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


class ConfigurationService:
    """Reads and updates this service's settings the way the gateway admin UI does."""

    def __init__(self, settings_gateway: SettingsGateway, auth: Optional[AuthGateway] = None):
        self._settings = settings_gateway
        self._auth = auth

    def list_config(self) -> list[ConfigEntry]:
        entries = []
        for key, convert in _CONVERTERS.items():
            setting = self._fetch(key)
            if setting is not None and setting.value is not None:
                entries.append(ConfigEntry(key=key, value=convert(setting.value)))
        return entries

    def get(self, key: str) -> Optional[ConfigEntry]:
        try:
            setting = self._settings.get_setting(key)
        except GatewayAPIError as e:
            if e.not_found:
                return None
            raise
        if setting is None:
            return None
        return ConfigEntry(key=setting.key, value=setting.value)

    def update(self, key: str, value: Any) -> Optional[ConfigEntry]:
        try:
            setting = self._settings.get_setting(key)
        except GatewayAPIError as e:
            if e.not_found:
                setting = None
            else:
                raise
        if setting is None:
            log.error("Failed to find config setting for %s", key)
            return None

        updated = replace(setting, value=_as_setting_value(value))
        self._settings.update_setting(updated)
        return ConfigEntry(key=updated.key, value=updated.value)

    def authorise(self, token: Optional[str]) -> UserIdentity:
        if self._auth is None:
            raise RuntimeError("No auth gateway configured")
        return self._auth.get_user_for_token(token or "")

    def _fetch(self, key: str) -> Optional[Setting]:
        try:
            return self._settings.get_setting(key)
        except GatewayAPIError as e:
            if e.not_found:
                log.debug("Setting was not found for key %s", key)
            else:
                log.warning("Error retrieving setting - %s", e.call_info)
            return None
