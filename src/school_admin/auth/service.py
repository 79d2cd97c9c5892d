from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    username: str
    role: Role


class AuthService:
    """Use case: authenticate the single configured administrator."""

    def __init__(self, username: str, password_hash: str):
        self._username = username
        self._password_hash = password_hash

    @classmethod
    def from_plain_password(cls, username: str, password: str) -> "AuthService":
        return cls(username, generate_password_hash(password))

    def authenticate(self, username: str, password: str) -> SessionUser:
        if (username or "").strip() != self._username:
            raise AuthenticationError("Invalid Credentials")

        try:
            ok = check_password_hash(self._password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid Credentials")

        return SessionUser(username=self._username, role=Role.ADMIN)
