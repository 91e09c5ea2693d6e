from app.adapters.driven.gateway_http import gateway_call
from app.domain.entities import DeploymentResult, EIMConnector
from app.domain.ports import ServiceGateway


class HttpServiceGateway(ServiceGateway):
    def register_connector(self, connector: EIMConnector) -> None:
        gateway_call("POST", "/services/connectors", {
            "connectorName": connector.name,
            "connectorVersion": connector.version,
            "connectionUrl": connector.connection_string,
            "connectionStringSettingKey": connector.connection_string_setting_key,
            "trustedProviderName": connector.trusted_provider_name,
            "trustedProviderKey": connector.trusted_provider_key,
        })

    def complete_deployment(self, result: DeploymentResult) -> None:
        gateway_call("POST", "/services/deployment", {
            "success": result.success,
            "message": result.message,
        })
