import pytest

from src.app.use_cases.auth.password_policy import check_new_password, password_errors


@pytest.mark.parametrize("password", ["Secret12", "Abcdefgh1234", "aB3aB3aB3"])
def test_accepted_passwords(password):
    assert password_errors(password) == []
    assert check_new_password(password, password) is None


@pytest.mark.parametrize(
    "password, fragment",
    [
        ("Sh0rt", "between 8 and 12"),
        ("Abcdefgh12345", "between 8 and 12"),
        ("secret123", "uppercase"),
        ("SECRET123", "lowercase"),
        ("SecretPass", "digit"),
        ("Secret12!", "only contain letters and digits"),
        ("Secret 123", "only contain letters and digits"),
    ],
)
def test_rejected_passwords(password, fragment):
    error = check_new_password(password, password)

    assert error.code == "INVALID_PASSWORD"
    assert fragment in error.message


def test_empty_password():
    assert password_errors("") == ["Password is required."]


def test_confirmation_must_match():
    error = check_new_password("Secret123", "Secret124")

    assert error.message == "Password confirmation does not match."


def test_symbol_is_the_only_complaint_for_otherwise_valid_password():
    assert password_errors("Secret12!") == ["Password may only contain letters and digits."]
