STRING_SETTING_KEY = "our.setting.key"
NUMBER_SETTING_KEY = "our.number.setting.key"
BOOL_SETTING_KEY = "our.boolean.setting.key"
JSON_SETTING_KEY = "our.json.setting.key"

CONFIG_SETTING_KEYS = (
    STRING_SETTING_KEY,
    NUMBER_SETTING_KEY,
    BOOL_SETTING_KEY,
    JSON_SETTING_KEY,
)

SETTING_TEXT = "This is a test Setting provided by our example service on startup"
SOME_JSON_CONTENT = '{"somefield": "Some value"}'

# must stay unique across the gateway, a duplicate name is rejected on registration
CONNECTOR_NAME = "OurFakeEIMConnector"
CONNECTOR_VERSION = "1.0.0"
CONNECTION_STRING_SETTING_KEY = "myService.eimconnectorurl"

AUTH_COOKIE_NAME = "my-http-only-service-cookie"
AUTHED_BY_CREDS = "authedByCreds"
