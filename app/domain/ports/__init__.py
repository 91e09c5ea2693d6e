from abc import ABC, abstractmethod
from typing import Optional
from app.domain.entities import (
    AuthHandlerRegistration,
    DeploymentResult,
    EIMConnector,
    LifecycleEvent,
    MailRequest,
    MailResult,
    PushNotificationRequest,
    Runtime,
    Setting,
    TrustedProvider,
    UserIdentity,
)

class SettingsGateway(ABC):
    @abstractmethod
    def get_setting(self, key: str) -> Optional[Setting]:
        ...

    @abstractmethod
    def create_setting(self, setting: Setting) -> None:
        ...

    @abstractmethod
    def update_setting(self, setting: Setting) -> None:
        ...

class RuntimesGateway(ABC):
    @abstractmethod
    def get_all_runtimes(self) -> list[Runtime]:
        ...

class NotificationsGateway(ABC):
    @abstractmethod
    def send_push_notification(self, request: PushNotificationRequest) -> bool:
        ...

class TrustedProviderGateway(ABC):
    @abstractmethod
    def get_all_providers(self) -> list[TrustedProvider]:
        ...

    @abstractmethod
    def get_or_create(self, name: str) -> Optional[TrustedProvider]:
        ...

class AuthGateway(ABC):
    @abstractmethod
    def get_user_for_token(self, token: str) -> UserIdentity:
        ...

    @abstractmethod
    def register_auth_handlers(self, handlers: list[AuthHandlerRegistration]) -> None:
        ...

class ServiceGateway(ABC):
    @abstractmethod
    def register_connector(self, connector: EIMConnector) -> None:
        ...

    @abstractmethod
    def complete_deployment(self, result: DeploymentResult) -> None:
        ...

class MailGateway(ABC):
    @abstractmethod
    def send(self, request: MailRequest) -> MailResult:
        ...

class MailComposer(ABC):
    @abstractmethod
    def compose_upgrade_notice(self, event: LifecycleEvent, sender: str, recipients: tuple[str, ...]) -> MailRequest:
        ...
