"""Authenticated caller identity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    """Caller identity taken from a verified Firebase ID token."""

    uid: str
    email: str | None = None

    @property
    def display_name(self) -> str:
        """Email local part, the name the app shows for a user."""
        if self.email:
            return self.email.split("@")[0]
        return self.uid
