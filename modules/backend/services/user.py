"""
User Service.

Registration, login, token resolution and role administration.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.config import get_app_config
from modules.backend.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ValidationError,
)
from modules.backend.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from modules.backend.models.user import ROLE_USER, VALID_ROLES, User
from modules.backend.repositories.user import UserRepository
from modules.backend.schemas.user import UserLogin, UserRegister
from modules.backend.services.base import BaseService


def issue_token(user: User) -> str:
    """Mint an access token identifying the user."""
    return create_access_token({"sub": user.id, "role": user.role})


class UserService(BaseService):
    """Service for account management and identity resolution."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)

    async def register(self, data: UserRegister) -> User:
        """
        Create a new account with the ``user`` role.

        Raises:
            ValidationError: If a field is blank or the password is too short
            ConflictError: If the username or email is already registered
        """
        username = data.username.strip()
        self._validate_required({"username": username}, ["username"])
        self._validate_string_length(
            data.password,
            "password",
            min_length=get_app_config().security.password.min_length,
        )

        taken = await self._execute_db_operation(
            "check_user_exists",
            self.repo.exists_by_username_or_email(username, data.email),
        )
        if taken:
            raise ConflictError("Username or email already registered")

        self._log_operation("Registering user", username=username)

        return await self._execute_db_operation(
            "register_user",
            self.repo.create(
                username=username,
                email=data.email.lower(),
                hashed_password=hash_password(data.password),
                role=ROLE_USER,
            ),
        )

    async def authenticate(self, data: UserLogin) -> User:
        """
        Check credentials.

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        user = await self._execute_db_operation(
            "find_user_by_email",
            self.repo.get_by_email(data.email),
        )
        if user is None or not verify_password(data.password, user.hashed_password):
            self._log_debug("Login rejected", email=data.email)
            raise AuthenticationError("Invalid email or password")

        self._log_operation("User logged in", user_id=user.id)
        return user

    async def resolve_token(self, token: str) -> User:
        """
        Turn a bearer token into the user it was issued for.

        Raises:
            AuthenticationError: If the token is invalid or the user no longer exists
        """
        payload = decode_token(token)
        user = await self._execute_db_operation(
            "resolve_token_user",
            self.repo.get_by_id_or_none(payload["sub"]),
        )
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        return user

    async def update_role(self, user_id: str, role: str) -> User:
        """
        Change a user's role.

        Raises:
            ValidationError: If the role is not ``user`` or ``admin``
            NotFoundError: If the user does not exist
        """
        if role not in VALID_ROLES:
            raise ValidationError(
                "Invalid role",
                details={"role": f"Must be one of: {', '.join(sorted(VALID_ROLES))}"},
            )

        user = await self._execute_db_operation("get_user", self.repo.get_by_id(user_id))

        self._log_operation("Updating user role", user_id=user_id, role=role)

        return await self._execute_db_operation(
            "update_role",
            self.repo.update(user, role=role),
        )

    async def list_users(self) -> list[User]:
        """Every user, newest first."""
        return await self._execute_db_operation(
            "list_users",
            self.repo.get_all_newest_first(),
        )
