from hiltim.services.users.user_account_service import UserAccountService

__all__ = ["UserAccountService"]
