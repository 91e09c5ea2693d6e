from dataclasses import dataclass, field
from typing import Any, Optional, Literal

SettingType = Literal["string", "integer", "bool", "json"]
LifecycleEventType = Literal["install", "upgrade", "uninstall"]

@dataclass(frozen=True)
class Setting:
    key: str
    app_name: str
    type: SettingType
    display_name: str
    value: Optional[str]
    default_value: Optional[str] = None
    description: Optional[str] = None
    read_only: bool = False
    seq_no: Optional[int] = None

@dataclass(frozen=True)
class ConfigEntry:
    key: str
    value: Any

@dataclass(frozen=True)
class SettingChange:
    key: str
    new_value: Optional[str]
    old_value: Optional[str] = None

@dataclass(frozen=True)
class LifecycleEvent:
    event: LifecycleEventType
    app_name: str
    version: Optional[str] = None

@dataclass(frozen=True)
class MailRequest:
    from_addr: str
    to: tuple[str, ...]
    subject: str
    text: str
    html: Optional[str] = None

@dataclass(frozen=True)
class MailResult:
    success: bool
    message: str = ""

@dataclass(frozen=True)
class Runtime:
    name: str
    description: Optional[str] = None

@dataclass(frozen=True)
class PushNotificationRequest:
    title: str
    summary: str
    clients: tuple[str, ...] = ()
    users: tuple[str, ...] = ()
    groups: tuple[str, ...] = ()
    runtimes: tuple[str, ...] = ()
    data: dict = field(default_factory=dict, hash=False, compare=False)

@dataclass(frozen=True)
class TrustedProvider:
    name: str
    key: Optional[str] = None

@dataclass(frozen=True)
class UserIdentity:
    username: str
    user_id: Optional[str] = None

@dataclass(frozen=True)
class Cookie:
    name: str
    value: str = ""
    path: str = "/"
    http_only: bool = False

@dataclass(frozen=True)
class AuthHandlerResult:
    authenticated: bool
    root_cookies: dict = field(default_factory=dict, hash=False)
    additional_properties: dict = field(default_factory=dict, hash=False)

@dataclass(frozen=True)
class AuthHandlerRegistration:
    name: str
    decorator: bool
    resolve_usernames_via_otds: bool
    otds_resource_id: Optional[str]
    known_cookies: tuple[Cookie, ...] = ()

@dataclass(frozen=True)
class EIMConnector:
    name: str
    version: str
    connection_string: Optional[str]
    connection_string_setting_key: str
    trusted_provider_name: str
    trusted_provider_key: Optional[str] = None

@dataclass(frozen=True)
class DeploymentResult:
    success: bool
    message: Optional[str] = None
