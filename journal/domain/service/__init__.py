"""Domain services."""

from .auth_method_service import AuthMethodService
from .auth_service import AuthService, OAuthClient
from .base import Service
from .credential_service import CredentialService
from .identity_service import IdentityService, MergeOutcome
from .password_hasher import PasswordHasher
from .profile_normalizer import ProfileNormalizer
from .session_service import SessionService
from .unit_service import UnitService
from .user_service import UserService

__all__ = [
    "AuthMethodService",
    "AuthService",
    "CredentialService",
    "IdentityService",
    "MergeOutcome",
    "OAuthClient",
    "PasswordHasher",
    "ProfileNormalizer",
    "Service",
    "SessionService",
    "UnitService",
    "UserService",
]
