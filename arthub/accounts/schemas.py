"""Pydantic schemas for accounts."""

from pydantic import BaseModel, EmailStr

from .models import Account, Role


class RegisterAccountRequest(BaseModel):
    """Request to register the caller's role."""

    role: Role
    email: EmailStr | None = None


class AccountResponse(BaseModel):
    """Resolved account of a user."""

    uid: str
    email: str
    role: Role

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(uid=account.uid, email=account.email, role=account.role)
