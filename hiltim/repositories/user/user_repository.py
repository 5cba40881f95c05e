"""
User account repository persisted as its own CSV blob.
"""

from datetime import date
from typing import List, Optional

from hiltim.core.constants import USER_CSV_HEADERS
from hiltim.core.exceptions import DuplicateEntryError, UserNotFoundError
from hiltim.repositories.base.base_repository import CsvRecordRepository
from hiltim.schemas.user.user_base import UserAccount
from hiltim.utils.csv_utils import CsvCodec


class UserRepository(CsvRecordRepository[UserAccount]):
    """User accounts keyed by id, looked up by email."""

    model = UserAccount
    codec = CsvCodec(USER_CSV_HEADERS)
    resource_name = "User"

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        needle = (email or "").strip().lower()
        return next((u for u in self.get_all() if u.email == needle), None)

    def ensure_email_available(self, email: str, exclude_id: Optional[str] = None) -> None:
        """
        Raises:
            DuplicateEntryError: If another account already uses the email
        """
        existing = self.get_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEntryError("email", existing.email)

    def not_found(self, record_id: str) -> UserNotFoundError:
        return UserNotFoundError(record_id)

    def sample_records(self) -> List[UserAccount]:
        return [
            UserAccount(
                id="user123",
                email="john.doe@email.com",
                first_name="John",
                last_name="Doe",
                phone="+1-555-0123",
                date_created=date(2025, 9, 10),
                preferences="Ocean views, late checkout",
            )
        ]
