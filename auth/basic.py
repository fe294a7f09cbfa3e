import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from config import Settings, get_settings

logger = logging.getLogger("myday_api.auth")

# auto_error is off so missing credentials get the same 403 as wrong ones
basic_scheme = HTTPBasic(auto_error=False)


def credentials_match(settings: Settings, username: str, password: str) -> bool:
    """Check a username/password pair against the configured users in constant time"""
    for user in settings.USER_CONFIGS:
        username_ok = secrets.compare_digest(user.username.encode("utf-8"), username.encode("utf-8"))
        password_ok = secrets.compare_digest(user.password.encode("utf-8"), password.encode("utf-8"))
        if username_ok and password_ok:
            return True
    return False


def get_current_username(
    credentials: HTTPBasicCredentials = Depends(basic_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    """Resolve the request to a trusted username or reject it"""
    if credentials is not None and credentials_match(settings, credentials.username, credentials.password):
        logger.info(f"Access granted to {credentials.username}")
        return credentials.username

    logger.warning("Access denied")
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Forbidden"
    )
