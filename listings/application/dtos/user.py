"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UserResult:
    """Public user projection (cached as ``user:<id>``). No password."""

    id: str
    email: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserResult":
        return cls(id=data["id"], email=data["email"], name=data["name"])


@dataclass(frozen=True)
class AuthResult:
    """Result of register/login: the user projection and a bearer token."""

    user: UserResult
    token: str
