"""Account management use cases."""

from .change_password import ChangePasswordUseCase
from .check_password import CheckPasswordUseCase
from .set_password import SetPasswordUseCase
from .unlink_provider import UnlinkProviderUseCase

__all__ = [
    "ChangePasswordUseCase",
    "CheckPasswordUseCase",
    "SetPasswordUseCase",
    "UnlinkProviderUseCase",
]
