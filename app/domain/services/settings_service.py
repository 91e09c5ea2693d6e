import logging
from typing import Optional
from app.domain import constants
from app.domain.entities import Setting, SettingType
from app.domain.errors import GatewayAPIError
from app.domain.ports import SettingsGateway

log = logging.getLogger(__name__)


class SettingsService:
    """Creates this service's settings at the gateway when missing and reads them back by key."""

    def __init__(self, settings_gateway: SettingsGateway, eim_connection_url: Optional[str] = None):
        self._settings = settings_gateway
        self._eim_connection_url = eim_connection_url

    def get_setting(self, key: str) -> Optional[Setting]:
        try:
            return self._settings.get_setting(key)
        except GatewayAPIError as e:
            if e.not_found:
                log.debug("Setting not found for key %s", key)
            else:
                log.error("We failed to find setting for key %s - %s", key, e.call_info)
            return None

    def create_service_settings(self, app_name: str) -> None:
        self._create_config_setting(app_name, constants.STRING_SETTING_KEY,
                                    constants.SETTING_TEXT, "A String Config", "string", "DEFAULT VALUE!!!")
        self._create_config_setting(app_name, constants.NUMBER_SETTING_KEY,
                                    "999", "A Numeric Config", "integer", "0")
        self._create_config_setting(app_name, constants.BOOL_SETTING_KEY,
                                    "true", "A Boolean Config", "bool", "false")
        self._create_config_setting(app_name, constants.JSON_SETTING_KEY,
                                    constants.SOME_JSON_CONTENT, "A JSON Config", "json",
                                    constants.SOME_JSON_CONTENT)
        if self._eim_connection_url:
            self._create_config_setting(app_name, constants.CONNECTION_STRING_SETTING_KEY,
                                        self._eim_connection_url, "EIM Connector URL", "string",
                                        self._eim_connection_url)

    def _create_config_setting(self, app_name: str, key: str, value: str, label: str,
                               type_: SettingType, default_value: str) -> None:
        retrieved = self.get_setting(key)
        if retrieved is not None:
            log.info("Setting already existed we wont add it again - %s", retrieved)
            return

        setting = Setting(
            key=key,
            app_name=app_name,
            type=type_,
            display_name=label,
            value=value,
            default_value=default_value,
            description=label,
            read_only=False,
        )
        log.info("Creating new Setting - %s", setting)
        try:
            self._settings.create_setting(setting)
        except GatewayAPIError as e:
            log.error("We failed to create setting for key %s - %s", key, e.call_info)
