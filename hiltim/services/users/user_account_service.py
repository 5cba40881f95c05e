"""
User account service: registration, lookup and profile updates.

There are no credentials; ``sign_in`` only resolves an email address to
an account.
"""

from datetime import date
from typing import Any, Callable, Mapping, Optional, Union
from uuid import uuid4

from hiltim.core.exceptions import DuplicateEntryError, UserNotFoundError
from hiltim.repositories.user.user_repository import UserRepository
from hiltim.schemas.user.user_base import UserAccount, UserCreate, UserUpdate
from hiltim.services.base.base_service import BaseService
from hiltim.services.base.service_result import ErrorCode, ServiceResult
from hiltim.utils.date_utils import today_utc

GUEST_FIRST_NAME = "Guest"
EMAIL_TAKEN_MESSAGE = "User with this email already exists"


def generate_user_id() -> str:
    return f"user{uuid4().hex[:12]}"


class UserAccountService(BaseService[UserAccount, UserRepository]):
    """Accounts stored in the user record store, unique by email."""

    def __init__(self, repository: UserRepository, clock: Optional[Callable[[], date]] = None):
        super().__init__(repository)
        self.clock = clock or today_utc

    def register(self, data: Union[UserCreate, Mapping[str, Any]]) -> ServiceResult[UserAccount]:
        """Create an account; an email already in use is a conflict."""
        try:
            payload = data if isinstance(data, UserCreate) else UserCreate.model_validate(data)

            try:
                self.repository.ensure_email_available(payload.email)
            except DuplicateEntryError as e:
                return ServiceResult.conflict(EMAIL_TAKEN_MESSAGE, details=e.details)

            user = UserAccount(
                id=generate_user_id(),
                date_created=self.clock(),
                **payload.model_dump(),
            )
            self.repository.save(self.repository.get_all() + [user])
            self._log_operation("User registered", user.id, {"user_id": user.id})
            return ServiceResult.success(user, message="Account created successfully")
        except Exception as e:
            return self._handle_exception(e, "register user")

    def get_user(self, user_id: str) -> ServiceResult[UserAccount]:
        return self.get_by_id(user_id)

    def get_user_by_email(self, email: str) -> ServiceResult[UserAccount]:
        try:
            user = self.repository.get_by_email(email)
            if user is None:
                return ServiceResult.not_found("User", email)
            return ServiceResult.success(user)
        except Exception as e:
            return self._handle_exception(e, "get user by email", email)

    def update_profile(
        self,
        user_id: str,
        patch: Union[UserUpdate, Mapping[str, Any]],
    ) -> ServiceResult[UserAccount]:
        """Apply provided fields; a new email must not belong to another account."""
        try:
            if not isinstance(patch, UserUpdate):
                patch = UserUpdate.model_validate(patch)
            changes = {k: v for k, v in patch.model_dump(exclude_unset=True).items() if v is not None}

            try:
                index = self.repository.index_of(user_id)
                if "email" in changes:
                    self.repository.ensure_email_available(changes["email"], exclude_id=user_id)
            except UserNotFoundError:
                return ServiceResult.not_found("User", user_id)
            except DuplicateEntryError as e:
                return ServiceResult.conflict(EMAIL_TAKEN_MESSAGE, details=e.details)
            users = self.repository.get_all()

            updated = UserAccount.model_validate({**users[index].model_dump(), **changes})
            users[index] = updated
            self.repository.save(users)
            self._log_operation("User profile updated", user_id, {"user_id": user_id})
            return ServiceResult.success(updated, message="Profile updated successfully")
        except Exception as e:
            return self._handle_exception(e, "update user profile", user_id)

    def sign_in(self, email: str) -> ServiceResult[UserAccount]:
        """
        Resolve an email to an account, creating a guest account on first
        sign-in. No credential is checked.
        """
        existing = self.get_user_by_email(email)
        if existing.is_success:
            existing.message = "Signed in successfully"
            return existing
        if existing.error_code != ErrorCode.NOT_FOUND:
            return existing
        return self.register({"email": email, "first_name": GUEST_FIRST_NAME})
