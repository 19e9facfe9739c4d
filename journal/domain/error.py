"""Domain layer errors."""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable machine-readable failure codes."""

    INVALID_CREDENTIALS = "invalid_credentials"
    NO_PASSWORD_SET = "no_password_set"
    ALREADY_REGISTERED = "already_registered"
    PASSWORD_ALREADY_SET = "password_already_set"
    PASSWORD_MISMATCH = "password_mismatch"
    PASSWORD_TOO_SHORT = "password_too_short"
    WRONG_CURRENT_PASSWORD = "wrong_current_password"
    LAST_AUTH_METHOD = "last_auth_method"
    PROVIDER_NOT_LINKED = "provider_not_linked"
    PROFILE_INCOMPLETE = "profile_incomplete"
    PROVIDER_ERROR = "provider_error"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    NOT_FOUND = "not_found"
    NOT_AUTHORIZED = "not_authorized"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    RATE_LIMITED = "rate_limited"
    STORE_UNAVAILABLE = "store_unavailable"


class DomainError(Exception):
    """Base domain error."""

    code: ErrorCode = ErrorCode.VALIDATION


class ValidationError(DomainError):
    """Domain validation error."""

    code = ErrorCode.VALIDATION


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    code = ErrorCode.NOT_AUTHORIZED

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """A uniqueness constraint was violated by a concurrent writer."""

    code = ErrorCode.CONFLICT

    def __init__(self, resource: str, detail: str = ""):
        self.resource = resource
        super().__init__(f"Conflicting {resource}{': ' + detail if detail else ''}")


# ============================================================================
# Authentication errors
# ============================================================================


class AuthError(DomainError):
    """Expected authentication or account-management failure."""

    code = ErrorCode.INVALID_CREDENTIALS
    message = "Authentication failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidCredentialsError(AuthError):
    code = ErrorCode.INVALID_CREDENTIALS
    message = "Invalid email or password"


class NoPasswordSetError(AuthError):
    """Account exists but only signs in through OAuth providers."""

    code = ErrorCode.NO_PASSWORD_SET
    message = "No password is set for this account"

    def __init__(self, available_providers: list[str]):
        self.available_providers = available_providers
        super().__init__(
            f"{self.message}; sign in with: {', '.join(available_providers)}"
        )


class AlreadyRegisteredError(AuthError):
    code = ErrorCode.ALREADY_REGISTERED
    message = "This email is already registered"


class PasswordAlreadySetError(AuthError):
    code = ErrorCode.PASSWORD_ALREADY_SET
    message = "A password is already set for this account"


class PasswordMismatchError(AuthError):
    code = ErrorCode.PASSWORD_MISMATCH
    message = "Passwords do not match"


class PasswordTooShortError(AuthError):
    code = ErrorCode.PASSWORD_TOO_SHORT

    def __init__(self, min_length: int):
        self.min_length = min_length
        super().__init__(f"Password must be at least {min_length} characters")


class WrongCurrentPasswordError(AuthError):
    code = ErrorCode.WRONG_CURRENT_PASSWORD
    message = "Current password is incorrect"


class LastAuthMethodError(AuthError):
    code = ErrorCode.LAST_AUTH_METHOD
    message = "Cannot remove the last remaining sign-in method"


class ProviderNotLinkedError(AuthError):
    code = ErrorCode.PROVIDER_NOT_LINKED

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Provider {provider} is not linked to this account")


class ProfileIncompleteError(AuthError):
    code = ErrorCode.PROFILE_INCOMPLETE

    def __init__(self, provider: str, missing: str = "email"):
        self.provider = provider
        super().__init__(f"{provider} profile did not include {missing}")
