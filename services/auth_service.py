# services/auth_service.py
from typing import Optional

from config import APP_PASSWORD, APP_USERNAME

INVALID_LOGIN_MESSAGE = "Invalid username or password"


def check_credentials(
        username: Optional[str],
        password: Optional[str],
        expected_username: str = APP_USERNAME,
        expected_password: str = APP_PASSWORD,
) -> bool:
    """
    Gate that hides the form from casual visitors. Not access control.
    """
    return (
        (username or "").strip() == expected_username
        and (password or "").strip() == expected_password
    )
