# dashboard/client/session.py
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ClientSession:
    """
    State of one signed-in browser session.

    Passed explicitly to every client call instead of living in module
    globals. `auth_params` holds what came back on the redirect
    (access_token, state, expires_in, ...).
    """

    auth_params: dict[str, str] = field(default_factory=dict)
    email: str = ""
    profile_picture: str = ""
    profile: dict[str, Any] = field(default_factory=dict)

    @property
    def access_token(self) -> str | None:
        return self.auth_params.get("access_token")

    @property
    def signed_in(self) -> bool:
        return bool(self.access_token)

    def clear(self) -> None:
        """Forget everything (sign-out)."""
        self.auth_params = {}
        self.email = ""
        self.profile_picture = ""
        self.profile = {}
