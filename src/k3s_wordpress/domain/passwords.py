#!/usr/bin/env python3
"""
Password generation for site credentials.
"""

import secrets
import string

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "passwords",
        "description": "Cryptographically random password generation",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


PASSWORD_LENGTH = 25
PASSWORD_ALPHABET = string.ascii_letters + string.digits


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    """Generate a random alphanumeric password.

    Args:
        length: Number of characters (default: 25)

    Returns:
        Password string
    """
    if length < 1:
        raise ValueError(f"Password length must be positive, got {length}")
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def generate_password_pair(length: int = PASSWORD_LENGTH) -> tuple[str, str]:
    """Generate the database and admin passwords for one site.

    Returns:
        Tuple of (db_password, wp_password), guaranteed to differ
    """
    db_password = generate_password(length)
    wp_password = generate_password(length)
    while wp_password == db_password:
        wp_password = generate_password(length)
    return db_password, wp_password


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
