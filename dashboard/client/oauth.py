# dashboard/client/oauth.py
"""
Google sign-in helpers (OAuth 2.0 implicit grant).

Flow:
  1. send the browser to `build_authorization_url(...)`
  2. Google redirects back with the access token in the URL fragment;
     `parse_redirect(url)` turns it into a dict
  3. `GoogleIdentity.fetch_profile(token)` reads userinfo and the People
     API (gender, birthday) and returns the payload /storeAuthInfo expects
  4. `GoogleIdentity.revoke(token)` on sign-out
"""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit

import requests

from dashboard.core.config import Settings

logger = logging.getLogger(__name__)

AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
REVOKE_ENDPOINT = "https://accounts.google.com/o/oauth2/revoke"
USERINFO_ENDPOINT = "https://www.googleapis.com/oauth2/v1/userinfo"
PEOPLE_ENDPOINT = "https://people.googleapis.com/v1/people/me"

SCOPES = (
    "https://www.googleapis.com/auth/userinfo.profile",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/user.birthday.read",
    "https://www.googleapis.com/auth/user.gender.read",
)

# Google sign-in gives no password; the dashboard stores this placeholder.
DEFAULT_PASSWORD = "YourDefaultPassword"


def build_authorization_url(settings: Settings, state: str = "pass-through-value") -> str:
    """Google authorization URL asking for an access token in the fragment."""
    params = {
        "client_id": settings.GOOGLE_CLIENT_ID,
        "redirect_uri": settings.OAUTH_REDIRECT_URI,
        "response_type": "token",
        "scope": " ".join(SCOPES),
        "include_granted_scopes": "true",
        "state": state,
    }
    return f"{AUTHORIZATION_ENDPOINT}?{urlencode(params)}"


def parse_redirect(url: str) -> dict[str, str]:
    """
    Collect the query and fragment parameters of the redirect URL.

    Fragment values win over query values with the same name.
    """
    parts = urlsplit(url)
    params = dict(parse_qsl(parts.query))
    params.update(parse_qsl(parts.fragment))
    return params


def format_birthday(birthday: dict[str, Any] | None) -> str:
    """People API date ({year, month, day}) -> 'YYYY-MM-DD', or '' if unknown."""
    if not birthday or not birthday.get("year"):
        return ""
    return f"{birthday['year']}-{int(birthday.get('month', 1)):02d}-{int(birthday.get('day', 1)):02d}"


class GoogleIdentity:
    """Calls to Google made on behalf of a signed-in user."""

    def __init__(self, http: requests.Session | None = None):
        self.http = http or requests.Session()

    def _get_json(self, url: str, token: str, params: dict | None = None) -> dict:
        response = self.http.get(
            url,
            params=params,
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
        return response.json()

    def fetch_profile(self, access_token: str) -> dict[str, Any]:
        """
        Build the sign-in payload for /storeAuthInfo.

        Missing gender becomes "N/A"; a missing or partial birthday becomes
        "" (the backend then rejects the sign-in with 400).

        Raises:
            requests.HTTPError: if Google rejects the token.
        """
        user_info = self._get_json(USERINFO_ENDPOINT, access_token)
        extra = self._get_json(
            PEOPLE_ENDPOINT,
            access_token,
            params={"personFields": "genders,birthdays"},
        )

        genders = extra.get("genders") or []
        birthdays = extra.get("birthdays") or []

        profile = dict(user_info)
        profile["gender"] = genders[0].get("value", "N/A") if genders else "N/A"
        profile["birthday"] = format_birthday(birthdays[0].get("date") if birthdays else None)
        profile["profilepicture"] = user_info.get("picture")
        profile["password"] = DEFAULT_PASSWORD
        return profile

    def revoke(self, token: str) -> bool:
        """
        Revoke an access token.

        Returns True on 2xx. Any other outcome is logged and returns False;
        callers sign out anyway.
        """
        try:
            response = self.http.post(
                REVOKE_ENDPOINT,
                params={"token": token},
                headers={"Content-type": "application/x-www-form-urlencoded"},
            )
        except requests.RequestException as exc:
            logger.error("Error revoking token: %s", exc)
            return False

        if not 200 <= response.status_code < 300:
            logger.error("Error revoking token: %s", response.status_code)
            return False
        return True
