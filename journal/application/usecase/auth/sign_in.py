"""Sign-in use case.

Runs one sign-in attempt through the whole pipeline: credentials are
verified or a provider profile is normalised, the result is merged into
the user store and a session token is issued.
"""

import logfire
from pydantic import BaseModel

from journal.application.usecase.base import BaseUseCase
from journal.application.usecase.result import Result, Success, failure_from
from journal.domain.error import DomainError, InvalidCredentialsError
from journal.domain.model import User
from journal.domain.service import (
    CredentialService,
    IdentityService,
    ProfileNormalizer,
    SessionService,
)
from journal.domain.value import (
    AuthMethod,
    CredentialsAttempt,
    OAuthAccount,
    OAuthProfile,
    SignInAttempt,
)
from journal.util.error import StoreUnavailableError


class SignInResponse(BaseModel):
    """Session issued for a signed-in user."""

    token: str
    user_id: str
    email: str
    name: str | None
    image: str | None
    primary_auth_method: AuthMethod
    user_created: bool = False
    account_linked: bool = False


class SignInUseCase(BaseUseCase):
    """Use case for credentials and OAuth sign-in."""

    def __init__(
        self,
        credential_service: CredentialService,
        profile_normalizer: ProfileNormalizer,
        identity_service: IdentityService,
        session_service: SessionService,
    ) -> None:
        """Initialize sign-in use case.

        Args:
            credential_service: Credential verification service
            profile_normalizer: OAuth profile normalizer
            identity_service: Identity merging service
            session_service: Session token service
        """
        self.credential_service = credential_service
        self.profile_normalizer = profile_normalizer
        self.identity_service = identity_service
        self.session_service = session_service

    async def execute(self, attempt: SignInAttempt) -> Result[SignInResponse]:
        """Execute a sign-in attempt.

        Args:
            attempt: Credentials or OAuth attempt

        Returns:
            Success with the session token, or Failure with
            ``invalid_credentials``, ``no_password_set`` (listing the linked
            providers), ``profile_incomplete``, ``conflict`` or
            ``store_unavailable``
        """
        with logfire.span("sign_in", kind=attempt.kind):
            try:
                subject: User | OAuthProfile
                account: OAuthAccount | None = None
                if isinstance(attempt, CredentialsAttempt):
                    user = await self.credential_service.verify(
                        attempt.email, attempt.password
                    )
                    if user is None:
                        raise InvalidCredentialsError()
                    subject = user
                else:
                    subject = self.profile_normalizer.normalize(attempt.profile)
                    account = attempt.account

                outcome = await self.identity_service.merge_sign_in(subject, account)
            except (DomainError, StoreUnavailableError) as e:
                failure = failure_from(e)
                logfire.info(
                    "Sign-in failed", kind=attempt.kind, code=failure.code.value
                )
                return failure

            token = self.session_service.issue_for(
                outcome.user, outcome.primary_auth_method
            )
            logfire.info(
                "User signed in",
                user_id=str(outcome.user.id),
                primary_auth_method=outcome.primary_auth_method.value,
                user_created=outcome.user_created,
                account_linked=outcome.account_linked,
            )

        return Success(
            value=SignInResponse(
                token=token,
                user_id=str(outcome.user.id),
                email=outcome.user.email,
                name=outcome.user.name,
                image=outcome.user.image,
                primary_auth_method=outcome.primary_auth_method,
                user_created=outcome.user_created,
                account_linked=outcome.account_linked,
            )
        )
