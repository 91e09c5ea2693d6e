import pytest
from app.domain.ports import (
    AuthGateway,
    MailComposer,
    MailGateway,
    NotificationsGateway,
    RuntimesGateway,
    ServiceGateway,
    SettingsGateway,
    TrustedProviderGateway,
)
from app.domain.entities import (
    LifecycleEvent,
    MailRequest,
    MailResult,
    Runtime,
    Setting,
    UserIdentity,
)


def test_abstract_classes_cannot_be_instantiated():
    for port in (SettingsGateway, RuntimesGateway, NotificationsGateway, TrustedProviderGateway,
                 AuthGateway, ServiceGateway, MailGateway, MailComposer):
        with pytest.raises(TypeError):
            port()


class DummySettings(SettingsGateway):
    def __init__(self):
        self.store = {}

    def get_setting(self, key):
        return self.store.get(key)

    def create_setting(self, setting: Setting) -> None:
        self.store[setting.key] = setting

    def update_setting(self, setting: Setting) -> None:
        self.store[setting.key] = setting


class DummyRuntimes(RuntimesGateway):
    def get_all_runtimes(self):
        return [Runtime(name="AppWorks"), Runtime(name="Desktop")]


class DummyMail(MailGateway):
    def __init__(self):
        self.sent = []

    def send(self, request: MailRequest) -> MailResult:
        self.sent.append(request)
        return MailResult(True, "ok")


class DummyComposer(MailComposer):
    def compose_upgrade_notice(self, event, sender, recipients):
        return MailRequest(
            from_addr=sender,
            to=tuple(recipients),
            subject=f"{event.event}:{event.app_name}",
            text=f"upgraded to {event.version}",
        )


class DummyAuth(AuthGateway):
    def get_user_for_token(self, token):
        return UserIdentity(username=f"user-{token}")

    def register_auth_handlers(self, handlers):
        self.handlers = list(handlers)


def test_concrete_settings_gateway_roundtrip():
    gw = DummySettings()
    s = Setting(key="k", app_name="svc", type="string", display_name="K", value="v")
    assert gw.get_setting("k") is None
    gw.create_setting(s)
    assert gw.get_setting("k") is s


def test_concrete_runtimes_gateway():
    names = [r.name for r in DummyRuntimes().get_all_runtimes()]
    assert names == ["AppWorks", "Desktop"]


def test_concrete_mail_gateway_and_composer():
    comp = DummyComposer()
    req = comp.compose_upgrade_notice(
        LifecycleEvent(event="upgrade", app_name="svc", version="2.0"), "a@b.com", ("x@y.com",)
    )
    assert req.subject == "upgrade:svc"
    assert req.to == ("x@y.com",)

    gw = DummyMail()
    assert gw.send(req) == MailResult(True, "ok")
    assert gw.sent == [req]


def test_concrete_auth_gateway():
    gw = DummyAuth()
    assert gw.get_user_for_token("abc") == UserIdentity(username="user-abc")
    gw.register_auth_handlers([])
    assert gw.handlers == []
