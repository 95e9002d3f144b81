"""Password validation functions."""

SPECIAL_CHARACTERS = "@$!%*?&"


def validate_password_strength(password: str) -> str:
    """Validate password strength requirements.

    Requirements:
    - 8 to 128 characters (should be enforced by Field min_length/max_length)
    - At least one lowercase letter (a-z)
    - At least one uppercase letter (A-Z)
    - At least one digit (0-9)
    - At least one special character from ``@$!%*?&``

    Args:
        password: Password string to validate

    Returns:
        The validated password string

    Raises:
        ValueError: If password doesn't meet strength requirements

    Examples:
        >>> validate_password_strength("Secure@Pass123")
        'Secure@Pass123'
        >>> validate_password_strength("weakpass")
        Traceback (most recent call last):
        ...
        ValueError: Password must contain at least one uppercase letter

    """
    if not any(c.isupper() for c in password):
        raise ValueError("Password must contain at least one uppercase letter")
    if not any(c.islower() for c in password):
        raise ValueError("Password must contain at least one lowercase letter")
    if not any(c.isdigit() for c in password):
        raise ValueError("Password must contain at least one digit")
    if not any(c in SPECIAL_CHARACTERS for c in password):
        raise ValueError(f"Password must contain at least one special character ({SPECIAL_CHARACTERS})")
    return password
