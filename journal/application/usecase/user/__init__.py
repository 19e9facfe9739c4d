"""User profile use cases."""

from .get_profile import GetProfileUseCase
from .update_profile import UpdateProfileUseCase

__all__ = [
    "GetProfileUseCase",
    "UpdateProfileUseCase",
]
