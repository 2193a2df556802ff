from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_TOKEN_EXPIRE_MINUTES, MIN_PASSWORD_LENGTH, TOKEN_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class TokenIdentity:
    """Caller identity carried by a bearer token."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: User

    def to_dict(self) -> dict:
        return {
            "message": "Login successful",
            "token": self.token,
            "user": {
                "userId": self.user.username,
                "role": self.user.role.value,
                "_id": self.user.user_id,
                "name": self.user.name,
            },
        }


class AuthService:
    """Use case: authenticate user (login) and verify bearer tokens."""

    def __init__(
        self,
        users: UserRepository,
        *,
        secret_key: str,
        expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES,
    ):
        self._users = users
        self._secret_key = secret_key
        self._expire_minutes = int(expire_minutes)

    def authenticate(self, username: str, password: str) -> AuthResult:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            raise NotFoundError("User not found")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except Exception:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid password")

        return AuthResult(token=self.issue_token(user), user=user)

    def issue_token(self, user: User) -> str:
        now = now_local().astimezone()
        payload = {
            "sub": str(user.user_id),
            "role": user.role.value,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=self._expire_minutes)).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=TOKEN_ALGORITHM)

    def decode_token(self, token: str) -> TokenIdentity:
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[TOKEN_ALGORITHM])
            return TokenIdentity(user_id=int(claims["sub"]), role=Role(claims["role"]))
        except (JWTError, KeyError, ValueError):
            raise AuthenticationError("Invalid or expired token")


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(self, *, username: str, password: str, name: str, role: Optional[str] = None) -> int:
        username = require_non_empty(username, "userId")
        name = require_non_empty(name, "name")

        if self._users.get_by_username(username):
            raise ValidationError("User already exists")

        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        try:
            role_value = Role(role or Role.USER.value)
        except ValueError:
            raise ValidationError("Invalid role")

        return self._users.create_user(
            username=username,
            name=name,
            password_hash=generate_password_hash(password),
            role=role_value,
        )

    def list_users(self) -> list[dict]:
        return [{"_id": u.user_id, "name": u.name} for u in self._users.list_all()]

    def delete_user(self, user_id: int) -> None:
        if not self._users.delete_by_id(user_id):
            raise NotFoundError("User not found")
