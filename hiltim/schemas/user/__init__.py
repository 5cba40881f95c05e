from hiltim.schemas.user.user_base import UserAccount, UserCreate, UserSignIn, UserUpdate

__all__ = ["UserAccount", "UserCreate", "UserSignIn", "UserUpdate"]
