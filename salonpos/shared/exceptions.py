"""Domain error taxonomy, rendered by main.py as ``{"error": message}``"""


class DomainError(Exception):
    """Base class for errors that map to a client-facing HTTP status"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Missing or malformed input"""

    status_code = 400


class NotFound(DomainError):
    """A referenced id does not exist"""

    status_code = 404


class Conflict(DomainError):
    """A uniqueness rule would be violated"""

    status_code = 409


class InternalError(DomainError):
    """Store failure or unexpected condition; message stays generic"""

    status_code = 500
