# dashboard/client/api.py
"""
Python client for the dashboard API.

Mirrors what the browser dashboard does: every call takes the explicit
`ClientSession` it acts for.
"""
from __future__ import annotations

import secrets
import string
from typing import Any
from urllib.parse import quote

import requests

from dashboard.client.oauth import GoogleIdentity
from dashboard.client.session import ClientSession


TOKEN_LENGTH = 10
TOKEN_ALPHABET = string.ascii_letters + string.digits


def generate_token(length: int = TOKEN_LENGTH) -> str:
    """Random alphanumeric API token."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


class DashboardClient:
    """
    One method per API route.

    Non-2xx answers raise `requests.HTTPError`, except the lookups that
    treat 404 as "nothing stored" (`fetch_token`, `fetch_company_info`).
    """

    def __init__(self, base_url: str, http: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _post(self, path: str, body: dict[str, Any]) -> requests.Response:
        response = self.http.post(self._url(path), json=body)
        response.raise_for_status()
        return response

    # ----- Sign-in -----

    def check_user(self, email: str) -> dict[str, Any]:
        return self._post("/checkUser", {"email": email}).json()

    def store_auth_info(self, auth_info: dict[str, Any]) -> str:
        return self._post("/storeAuthInfo", auth_info).json()["message"]

    def sign_in(self, session: ClientSession, profile: dict[str, Any]) -> dict[str, Any]:
        """
        Register the Google profile with the backend.

        Existing users get their stored record back; new users are stored
        from `profile`. Either way the session is filled in and the user
        record is returned.
        """
        session.email = profile.get("email") or session.email
        session.profile_picture = profile.get("picture") or session.profile_picture

        result = self.check_user(session.email)
        if result.get("exists"):
            session.profile = result["userInfo"]
        else:
            self.store_auth_info(profile)
            session.profile = profile
        return session.profile

    def sign_out(self, session: ClientSession, identity: GoogleIdentity) -> bool:
        """Revoke the access token and clear the session, even if revoking fails."""
        revoked = False
        if session.access_token:
            revoked = identity.revoke(session.access_token)
        session.clear()
        return revoked

    # ----- Profile / company -----

    def update_profile(self, session: ClientSession, profile: dict[str, Any]) -> str:
        body = dict(profile)
        body.setdefault("email", session.email)
        message = self._post("/updateProfile", body).json()["message"]
        session.profile.update(body)
        return message

    def update_company_info(self, session: ClientSession, org_name: str, position: str) -> str:
        body = {"email": session.email, "orgName": org_name, "position": position}
        return self._post("/updateCompanyInfo", body).json()["message"]

    def fetch_company_info(self, session: ClientSession) -> dict[str, Any]:
        """Empty defaults when the backend has no company info."""
        response = self.http.get(self._url(f"/fetchCompanyInfo/{quote(session.email)}"))
        if response.status_code == 404:
            return {"orgName": "", "position": ""}
        response.raise_for_status()
        return response.json()

    # ----- API token -----

    def store_token(self, session: ClientSession, token: str) -> str:
        return self._post("/storeToken", {"token": token, "email": session.email}).json()["message"]

    def generate_token(self, session: ClientSession) -> str:
        """Create a new token and store it for the session's user."""
        token = generate_token()
        self.store_token(session, token)
        return token

    def fetch_token(self, session: ClientSession) -> str | None:
        response = self.http.get(self._url(f"/fetchToken/{quote(session.email)}"))
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()["token"]

    def update_token(self, session: ClientSession, token: str) -> str:
        """
        Replace the stored token.

        Raises:
            LookupError: if there is no token to update yet.
        """
        if not self.fetch_token(session):
            raise LookupError("No token found in database. Please generate a new token.")
        response = self.http.put(
            self._url(f"/updateToken/{quote(session.email)}"),
            json={"token": token},
        )
        response.raise_for_status()
        return response.json()["message"]

    # ----- Misc -----

    def fetch_logs(self) -> list[dict[str, Any]]:
        response = self.http.get(self._url("/logs"))
        response.raise_for_status()
        return response.json()

    def save_device(self, session: ClientSession, device_id: str, device_count: int = 1) -> dict[str, Any]:
        """
        Register a device for the session's user.

        Raises:
            ValueError: for an empty device id or a count below 1.
        """
        if not device_id or device_count < 1:
            raise ValueError("Please enter a valid Device ID and count.")
        body = {"email": session.email, "deviceId": device_id, "deviceCount": device_count}
        return self._post("/saveDeviceData", body).json()
