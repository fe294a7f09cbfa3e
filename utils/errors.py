class FormatError(ValueError):
    """Raised when a date or request body is not in the expected format"""


class RatingValidationError(ValueError):
    """Raised when a rating carries a feeling outside the allowed set"""


class ConflictError(Exception):
    """Raised when a user record already exists for a username"""

    def __init__(self, username: str):
        super().__init__(f"User data already exists for {username}")
        self.username = username


class NotFoundError(Exception):
    """Raised when no user record exists for a username"""

    def __init__(self, username: str):
        super().__init__(f"No user data found for {username}")
        self.username = username


class DocumentDecodeError(ValueError):
    """Raised when a stored document cannot be turned back into a user record"""


class StoreError(Exception):
    """Raised on any I/O failure or timeout against the document store"""

    def __init__(self, message: str, timeout: bool = False):
        super().__init__(message)
        self.timeout = timeout
