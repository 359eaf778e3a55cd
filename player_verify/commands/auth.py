from __future__ import annotations

from ..config import Settings
from ..providers.roblox import (
    AuthorizationRequest,
    IdentityClaim,
    IdentityProviderError,
    RobloxIdentityProvider,
)
from .output import emit_json


def build_provider(settings: Settings) -> RobloxIdentityProvider:
    if not settings.identity.client_id:
        raise IdentityProviderError("identity.client_id is not configured")
    return RobloxIdentityProvider(settings.identity)


def run(settings: Settings, name: str, json_output: bool = False) -> AuthorizationRequest:
    """Start an authorization for NAME and print where to send the player."""
    provider = build_provider(settings)
    request = AuthorizationRequest.create(name)
    url = provider.authorization_url(request)
    if json_output:
        emit_json(
            {"url": url, "state": request.state, "expected_username": request.expected_username}
        )
    else:
        print(f"Authorize: {url}")
        print(f"State: {request.state}")
    return request


def complete(
    settings: Settings,
    name: str,
    *,
    code: str,
    returned_state: str,
    expected_state: str,
) -> IdentityClaim:
    provider = build_provider(settings)
    request = AuthorizationRequest(state=expected_state, expected_username=name)
    return provider.complete(request, code, returned_state)
