from app.adapters.driven.gateway_http import gateway_call
from app.domain.entities import Runtime
from app.domain.ports import RuntimesGateway


class HttpRuntimesGateway(RuntimesGateway):
    def get_all_runtimes(self) -> list[Runtime]:
        data = gateway_call("GET", "/runtimes") or {}
        return [
            Runtime(name=r["name"], description=r.get("description"))
            for r in data.get("runtimes") or []
            if r.get("name")
        ]
