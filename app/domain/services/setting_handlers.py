import logging
from typing import Callable
from app.domain import constants
from app.domain.entities import SettingChange
from app.domain.errors import GatewayAPIError
from app.domain.services.component_context import ComponentContext
from app.domain.services.push_notification_service import PushNotificationService
from app.domain.services.settings_service import SettingsService

log = logging.getLogger(__name__)

SettingChangeHandler = Callable[[SettingChange], None]


class SettingChangeDispatcher:
    """Routes gateway setting-change callbacks to the handlers registered per key."""

    def __init__(self):
        self._handlers: dict[str, list[SettingChangeHandler]] = {}

    def add_handler(self, key: str, handler: SettingChangeHandler) -> None:
        self._handlers.setdefault(key, []).append(handler)

    @property
    def setting_keys(self) -> set[str]:
        return set(self._handlers)

    def handle(self, change: SettingChange) -> bool:
        handlers = self._handlers.get(change.key)
        if not handlers:
            log.debug("No handler registered for setting %s", change.key)
            return False
        for handler in handlers:
            handler(change)
        return True


class CustomSettingsHandler:
    """Reacts to admin changes on the example settings.

    Each change triggers a push notification and a read-back of the stored value.
    """

    setting_keys = frozenset(constants.CONFIG_SETTING_KEYS)

    def __init__(self, context: ComponentContext, service_name: str = "MyService"):
        self._context = context
        self._service_name = service_name

    def register(self, dispatcher: SettingChangeDispatcher) -> None:
        for key in sorted(self.setting_keys):
            dispatcher.add_handler(key, self.on_setting_changed)

    def on_setting_changed(self, change: SettingChange) -> None:
        log.info("New %s value=%s", change.key, change.new_value)
        try:
            self._send_notification_regarding_change(change)
            self._verify_setting_update(change)
        except GatewayAPIError as e:
            log.warning("We failed to send notification regarding setting update - %s", e.call_info)

    def _send_notification_regarding_change(self, change: SettingChange) -> None:
        push = self._context.get(PushNotificationService)
        if push is None:
            log.warning("Unable to send push notification, PushNotificationService is not available")
            return
        push.send_test_message(f"{self._service_name} Setting {change.key} was updated to {change.new_value}")

    def _verify_setting_update(self, change: SettingChange) -> None:
        settings_service = self._context.get(SettingsService)
        if settings_service is None:
            log.warning("Unable to verify setting change, SettingsService is not available")
            return
        setting = settings_service.get_setting(change.key)
        if setting is not None:
            log.info("Actual value was %s", setting.value)
