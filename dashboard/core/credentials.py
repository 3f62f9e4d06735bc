# dashboard/core/credentials.py
"""
Password storage seam.

The dashboard stores the password exactly as the client sends it. Every
write of the `password` column goes through `encode_password`, so moving to
a hashed scheme only means changing this function (and the comparison side,
which does not exist yet).
"""


def encode_password(raw: str | None) -> str | None:
    """Return the value persisted in users.password (currently plaintext)."""
    return raw
