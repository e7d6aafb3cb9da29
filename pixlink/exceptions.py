"""
Domain errors raised by the service layer.
"""


class PixlinkError(Exception):
    """Base class for service-level failures."""


class UserNotFoundError(PixlinkError):
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class UniquenessViolationError(PixlinkError):
    """A username, email or short URL collided at insert time."""


class ShortUrlExhaustedError(PixlinkError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Unable to generate unique short URL after {attempts} attempts")
