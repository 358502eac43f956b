"""Custom exception classes for the application.

Every failure raised by the services belongs to one stable kind
(``NotFound``, ``Forbidden``, ``Conflict``, ``InvalidArgument``,
``AlreadyProcessed``) so the HTTP mapping in ``error_handlers`` stays
deterministic. ``code`` names the specific condition.
"""

NOT_FOUND = "NotFound"
FORBIDDEN = "Forbidden"
CONFLICT = "Conflict"
INVALID_ARGUMENT = "InvalidArgument"
ALREADY_PROCESSED = "AlreadyProcessed"
UNAVAILABLE = "Unavailable"


class AppError(Exception):
    """Base application error class."""

    kind = "Internal"
    code = "Internal"
    default_message = "An unexpected error occurred."

    def __init__(self, message=None, status_code=400):
        """Initialize the error."""
        message = message or self.default_message
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def to_dict(self):
        """Serialize the error for an API response body."""
        return {"kind": self.kind, "code": self.code, "message": self.message}


class ValidationError(AppError):
    """Raised when an argument is invalid (self-reference, oversize, bad role)."""

    kind = INVALID_ARGUMENT
    code = INVALID_ARGUMENT
    default_message = "Validation failed."

    def __init__(self, message=None):
        """Initialize the error."""
        super().__init__(message, 400)


class NotFoundError(AppError):
    """Raised when a referenced user, request, group or chat is absent."""

    kind = NOT_FOUND
    code = NOT_FOUND
    default_message = "Resource not found."

    def __init__(self, message=None):
        """Initialize the error."""
        super().__init__(message, 404)


class ForbiddenError(AppError):
    """Raised when the acting user lacks the required role or ownership."""

    kind = FORBIDDEN
    code = FORBIDDEN
    default_message = "You do not have permission to perform this action."

    def __init__(self, message=None):
        """Initialize the error."""
        super().__init__(message, 403)


class ConflictError(AppError):
    """Raised for duplicate edges, requests or roles and exhausted capacity."""

    kind = CONFLICT
    code = CONFLICT
    default_message = "Resource already exists."

    def __init__(self, message=None):
        """Initialize the error."""
        super().__init__(message, 409)


class AlreadyProcessedError(AppError):
    """Raised when a request in a terminal state is acted upon again."""

    kind = ALREADY_PROCESSED
    code = ALREADY_PROCESSED
    default_message = "This request has already been processed."

    def __init__(self, message=None):
        """Initialize the error."""
        super().__init__(message, 409)


class StoreError(AppError):
    """Raised when the document store rejects or fails a call."""

    kind = UNAVAILABLE
    code = "StoreUnavailable"
    default_message = "The data store is unavailable. Please try again later."

    def __init__(self, message=None):
        """Initialize the error."""
        super().__init__(message, 503)


# Friendship


class SelfRequest(ValidationError):
    code = "SelfRequest"
    default_message = "You cannot target yourself with this action."


class MessageTooLong(ValidationError):
    code = "MessageTooLong"
    default_message = "Message cannot exceed 300 characters."


class AlreadyFriends(ConflictError):
    code = "AlreadyFriends"
    default_message = "You are already friends with this user."


class RequestExists(ConflictError):
    code = "RequestExists"
    default_message = "Friend request already sent."


class ReverseRequestExists(ConflictError):
    code = "ReverseRequestExists"
    default_message = (
        "This user has already sent you a friend request. "
        "Please accept their request instead."
    )


class AlreadyBlocked(ConflictError):
    code = "AlreadyBlocked"
    default_message = "You have already blocked this user."


class Blocked(ForbiddenError):
    code = "Blocked"
    default_message = "This action is not available between these users."


# Groups


class NotMember(NotFoundError):
    code = "NotMember"
    default_message = "User is not a member of this group."


class AlreadyMember(ConflictError):
    code = "AlreadyMember"
    default_message = "User is already a member of this group."


class AllAlreadyMembers(ConflictError):
    code = "AllAlreadyMembers"
    default_message = "All of these users are already members of this group."


class AlreadyPending(ConflictError):
    code = "AlreadyPending"
    default_message = "A join request for this group is already pending."


class AlreadySubAdmin(ConflictError):
    code = "AlreadySubAdmin"
    default_message = "User is already a sub-admin of this group."


class GroupFull(ConflictError):
    code = "GroupFull"
    default_message = "This group has reached its member limit."


class SelfRoleChange(ValidationError):
    code = "SelfRoleChange"
    default_message = "You cannot change your own role."


class InvalidRole(ValidationError):
    code = "InvalidRole"
    default_message = "Unknown group role."


# Pinned content


class AlreadyPinned(ConflictError):
    code = "AlreadyPinned"
    default_message = "This message is already pinned."


class NotPinned(NotFoundError):
    code = "NotPinned"
    default_message = "This message is not pinned."
