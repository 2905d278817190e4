"""Domain exceptions mapped to HTTP status codes by the API layer."""


class OrElseError(Exception):
    """Base class for expected request failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAuthenticatedError(OrElseError):
    """Raised when a request carries no usable identity."""

    status_code = 401

    def __init__(self, message: str = "Not authenticated or user ID missing"):
        super().__init__(message)


class NotFoundError(OrElseError):
    """Raised when a referenced goal or suggestion does not exist."""

    status_code = 404

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found.")
        self.entity = entity


class ForbiddenError(OrElseError):
    """Raised when the caller has the wrong relationship to a goal."""

    status_code = 403


class GoalNotActiveError(OrElseError):
    """Raised when a goal is not in the status an operation requires."""

    status_code = 400


class DuplicateVoteError(OrElseError):
    """Raised when a user votes twice for the same suggestion."""

    status_code = 409

    def __init__(self):
        super().__init__("You have already voted for this suggestion.")
