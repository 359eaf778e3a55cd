from __future__ import annotations

import hmac
import json
import logging
import secrets
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Optional

from ..config import IdentitySettings

logger = logging.getLogger(__name__)


class IdentityProviderError(RuntimeError):
    """The identity provider could not confirm who the player is."""


class StateMismatchError(IdentityProviderError):
    """The callback state does not belong to the pending authorization request."""


@dataclass(frozen=True, slots=True)
class IdentityClaim:
    user_id: str
    username: str


@dataclass(frozen=True, slots=True)
class AuthorizationRequest:
    """
    Correlates an authorization redirect with its callback.

    The caller keeps this value between the redirect and the callback; the
    provider echoes `state` back and nothing else needs to be stored.
    """

    state: str
    expected_username: str

    @classmethod
    def create(cls, expected_username: str) -> "AuthorizationRequest":
        return cls(state=secrets.token_urlsafe(16), expected_username=expected_username)

    def verify_state(self, returned_state: Optional[str]) -> bool:
        if not returned_state:
            return False
        return hmac.compare_digest(self.state, returned_state)


def usernames_match(claimed: Optional[str], provider_username: Optional[str]) -> bool:
    """Case-insensitive exact comparison of two system-of-record names."""
    if not claimed or not provider_username:
        return False
    return claimed.casefold() == provider_username.casefold()


class RobloxIdentityProvider:
    def __init__(self, settings: IdentitySettings) -> None:
        if not settings.client_id:
            raise ValueError("Roblox client_id required")
        self.settings = settings

    def authorization_url(self, request: AuthorizationRequest) -> str:
        params = {
            "client_id": self.settings.client_id,
            "redirect_uri": self.settings.redirect_uri,
            "scope": self.settings.scope,
            "response_type": "code",
            "state": request.state,
        }
        return f"{self.settings.authorize_url}?{urllib.parse.urlencode(params)}"

    def exchange_code(self, code: str) -> str:
        if not code:
            raise IdentityProviderError("authorization code missing")
        form = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": self.settings.client_id,
            "redirect_uri": self.settings.redirect_uri,
        }
        if self.settings.client_secret:
            form["client_secret"] = self.settings.client_secret
        body = urllib.parse.urlencode(form).encode("utf-8")
        req = urllib.request.Request(
            self.settings.token_url,
            data=body,
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "User-Agent": self.settings.useragent,
            },
            method="POST",
        )
        payload = self._request(req, "token exchange")
        token = payload.get("access_token")
        if not token:
            raise IdentityProviderError("token response missing access_token")
        return token

    def fetch_identity(self, access_token: str) -> IdentityClaim:
        req = urllib.request.Request(
            self.settings.userinfo_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "User-Agent": self.settings.useragent,
            },
        )
        payload = self._request(req, "userinfo")
        user_id = payload.get("sub")
        username = payload.get("preferred_username")
        if not user_id or not username:
            raise IdentityProviderError("userinfo response missing sub or preferred_username")
        return IdentityClaim(user_id=str(user_id), username=str(username))

    def complete(
        self, request: AuthorizationRequest, code: str, returned_state: Optional[str]
    ) -> IdentityClaim:
        if not request.verify_state(returned_state):
            raise StateMismatchError("authorization state does not match the pending request")
        token = self.exchange_code(code)
        claim = self.fetch_identity(token)
        logger.info("Identity provider confirmed user %s (%s)", claim.username, claim.user_id)
        if not usernames_match(request.expected_username, claim.username):
            logger.warning(
                "Authorized as %s but the request was started for %s",
                claim.username,
                request.expected_username,
            )
        return claim

    def _request(self, req: urllib.request.Request, label: str) -> dict:
        try:
            with urllib.request.urlopen(req, timeout=self.settings.timeout_seconds) as resp:
                payload = json.load(resp)
        except urllib.error.HTTPError as exc:
            logger.debug("Roblox %s HTTP error %s: %s", label, exc.code, exc)
            raise IdentityProviderError(f"Roblox {label} failed with HTTP {exc.code}") from exc
        except urllib.error.URLError as exc:
            logger.warning("Roblox %s request failed: %s", label, exc)
            raise IdentityProviderError(f"unable to reach Roblox for {label}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise IdentityProviderError(f"Roblox {label} returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise IdentityProviderError(f"Roblox {label} returned unexpected payload")
        return payload
