from dataclasses import asdict
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from app.domain.entities import AuthHandlerResult
from app.domain.errors import ServiceNotInitialisedError
from app.domain.services.auth_handler import ConnectorAuthHandler
from app.domain.services.component_context import context

router = APIRouter(prefix="/auth")

_context = context

class CredentialsPayload(BaseModel):
    username: str = Field(..., description="User name")
    password: str = Field(..., description="Password")
    headers: dict = Field(default_factory=dict, description="Forwarded request headers")
    client_data: dict = Field(default_factory=dict, description="Client data sent to the gateway")

class TokenPayload(BaseModel):
    token: str = Field(..., description="Token to validate")
    headers: dict = Field(default_factory=dict, description="Forwarded request headers")
    client_data: dict = Field(default_factory=dict, description="Client data sent to the gateway")

def _handler() -> ConnectorAuthHandler:
    try:
        return _context.require(ConnectorAuthHandler)
    except ServiceNotInitialisedError as e:
        raise HTTPException(503, str(e))

def _as_json(result: AuthHandlerResult) -> dict:
    return {
        "authenticated": result.authenticated,
        "rootCookies": result.root_cookies,
        "additionalProperties": result.additional_properties,
    }

@router.post("/credentials")
def post_auth_credentials(p: CredentialsPayload):
    result = _handler().auth_with_credentials(p.username, p.password, p.headers, p.client_data)
    return _as_json(result)

@router.post("/token")
def post_auth_token(p: TokenPayload):
    result = _handler().auth_with_token(p.token, p.headers, p.client_data)
    return _as_json(result)

@router.get("/cookies")
def get_known_cookies():
    return [asdict(c) for c in _handler().known_cookies()]
