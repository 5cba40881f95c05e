from hiltim.services.base.service_result import ErrorCode
from hiltim.services.users.user_account_service import GUEST_FIRST_NAME


def test_register_and_lookup(user_service, today):
    result = user_service.register({
        "email": "Mia@Example.com",
        "firstName": "Mia",
        "lastName": "Wong",
        "phone": "+1-555-0100",
    })

    user = result.data
    assert result.is_success
    assert user.id.startswith("user")
    assert user.email == "mia@example.com"
    assert user.date_created == today
    assert user_service.get_user(user.id).data == user
    assert user_service.get_user_by_email("MIA@example.com").data.id == user.id


def test_duplicate_email_is_a_conflict(user_service):
    result = user_service.register({"email": "john.doe@email.com", "firstName": "John"})

    assert result.error_code == ErrorCode.CONFLICT


def test_invalid_registration(user_service):
    result = user_service.register({"email": "not-an-email", "firstName": ""})

    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert len(result.errors) == 2


def test_unknown_user(user_service):
    assert user_service.get_user("ghost").error_code == ErrorCode.NOT_FOUND
    assert user_service.get_user_by_email("ghost@example.com").error_code == ErrorCode.NOT_FOUND


def test_update_profile(user_service):
    result = user_service.update_profile("user123", {"phone": "+1-555-9999", "preferences": "Ground floor"})

    assert result.data.phone == "+1-555-9999"
    assert result.data.preferences == "Ground floor"
    assert result.data.first_name == "John"
    assert user_service.get_user("user123").data.phone == "+1-555-9999"


def test_update_profile_email_conflict(user_service):
    other = user_service.register({"email": "mia@example.com", "firstName": "Mia"}).data

    result = user_service.update_profile(other.id, {"email": "john.doe@email.com"})

    assert result.error_code == ErrorCode.CONFLICT


def test_sign_in_existing_account(user_service):
    result = user_service.sign_in("john.doe@email.com")

    assert result.data.id == "user123"


def test_sign_in_creates_guest_account(user_service):
    result = user_service.sign_in("new.guest@example.com")

    assert result.is_success
    assert result.data.first_name == GUEST_FIRST_NAME
    assert user_service.sign_in("new.guest@example.com").data.id == result.data.id
