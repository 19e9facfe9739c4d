"""Authentication use cases."""

from .get_session import GetSessionUseCase
from .oauth_callback import OAuthCallbackUseCase
from .register import RegisterUseCase
from .sign_in import SignInUseCase

__all__ = [
    "GetSessionUseCase",
    "OAuthCallbackUseCase",
    "RegisterUseCase",
    "SignInUseCase",
]
