class JournalError(RuntimeError):
    """Base class for errors raised by the journal core."""


class MissingTenantError(JournalError):
    """Raised when a request carries no family token."""


class InputValidationError(JournalError):
    """Raised when a write is missing required fields or carries invalid ones."""


class ProfileNotFoundError(JournalError):
    """Raised when no profile exists for the requested family."""


class MediaNotFoundError(JournalError):
    """Raised when a media key is malformed or names no stored object."""


class PersistenceError(JournalError):
    """Raised when the database or the media store fails underneath an operation."""


class AdviceUnavailableError(JournalError):
    """Raised when the text-generation capability is unconfigured or failed."""


class FamilyNotFoundError(JournalError):
    """Raised when a write names a family token that was never registered."""
