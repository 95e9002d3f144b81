"""Tests for the shared validators module."""

import pytest
from pydantic import ValidationError

from src.features.auth.schemas import RegisterRequest
from src.shared.validators.password import validate_password_strength


class TestPasswordValidation:
    """Test password strength validation."""

    def test_valid_password_with_all_requirements(self):
        """Test password with all requirements passes validation."""
        assert validate_password_strength("Secure@Pass123") == "Secure@Pass123"

    def test_valid_short_example_password(self):
        assert validate_password_strength("Bb1!bbbb") == "Bb1!bbbb"

    def test_password_without_uppercase_fails(self):
        with pytest.raises(ValueError, match="uppercase letter"):
            validate_password_strength("secure@pass123")

    def test_password_without_lowercase_fails(self):
        with pytest.raises(ValueError, match="lowercase letter"):
            validate_password_strength("SECURE@PASS123")

    def test_password_without_digit_fails(self):
        with pytest.raises(ValueError, match="digit"):
            validate_password_strength("Secure@Pass")

    def test_password_without_special_character_fails(self):
        with pytest.raises(ValueError, match="special character"):
            validate_password_strength("SecurePass123")


class TestRegisterRequestValidation:
    """Test the registration schema wires the validator in."""

    def test_accepts_camel_case_names(self):
        data = RegisterRequest.model_validate(
            {"email": "bob@example.com", "password": "Bb1!bbbb", "firstName": "Bob", "lastName": "Putter"}
        )
        assert data.first_name == "Bob"
        assert data.last_name == "Putter"

    def test_rejects_weak_password(self):
        with pytest.raises(ValidationError):
            RegisterRequest.model_validate(
                {"email": "bob@example.com", "password": "bbbbbbbb", "firstName": "Bob", "lastName": "Putter"}
            )

    def test_rejects_too_long_password(self):
        with pytest.raises(ValidationError):
            RegisterRequest.model_validate(
                {"email": "bob@example.com", "password": "Bb1!" + "b" * 125, "firstName": "Bob", "lastName": "P"}
            )

    def test_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            RegisterRequest.model_validate(
                {"email": "not-an-email", "password": "Bb1!bbbb", "firstName": "Bob", "lastName": "Putter"}
            )
