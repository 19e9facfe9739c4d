"""Application layer DI providers."""

from dishka import Scope, provide

from journal.application.usecase.account import (
    ChangePasswordUseCase,
    CheckPasswordUseCase,
    SetPasswordUseCase,
    UnlinkProviderUseCase,
)
from journal.application.usecase.auth import (
    GetSessionUseCase,
    OAuthCallbackUseCase,
    RegisterUseCase,
    SignInUseCase,
)
from journal.application.usecase.unit import (
    CreateLogUseCase,
    CreateUnitUseCase,
    DeleteLogUseCase,
    DeleteUnitUseCase,
    GetUnitUseCase,
    ListUnitsUseCase,
    UpdateLogUseCase,
    UpdateUnitUseCase,
)
from journal.application.usecase.user import GetProfileUseCase, UpdateProfileUseCase
from journal.domain.service import (
    AuthMethodService,
    AuthService,
    CredentialService,
    IdentityService,
    ProfileNormalizer,
    SessionService,
    UnitService,
    UserService,
)
from journal.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self, credential_service: CredentialService
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(credential_service=credential_service)

    @provide(scope=Scope.REQUEST)
    def get_sign_in_use_case(
        self,
        credential_service: CredentialService,
        profile_normalizer: ProfileNormalizer,
        identity_service: IdentityService,
        session_service: SessionService,
    ) -> SignInUseCase:
        """Provide sign-in use case."""
        return SignInUseCase(
            credential_service=credential_service,
            profile_normalizer=profile_normalizer,
            identity_service=identity_service,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_oauth_callback_use_case(
        self, auth_service: AuthService, sign_in: SignInUseCase
    ) -> OAuthCallbackUseCase:
        """Provide OAuth callback use case."""
        return OAuthCallbackUseCase(auth_service=auth_service, sign_in=sign_in)

    @provide(scope=Scope.REQUEST)
    def get_get_session_use_case(
        self, session_service: SessionService
    ) -> GetSessionUseCase:
        """Provide get session use case."""
        return GetSessionUseCase(session_service=session_service)

    # Account use cases
    @provide(scope=Scope.REQUEST)
    def get_set_password_use_case(
        self, auth_method_service: AuthMethodService, session_service: SessionService
    ) -> SetPasswordUseCase:
        """Provide set password use case."""
        return SetPasswordUseCase(
            auth_method_service=auth_method_service, session_service=session_service
        )

    @provide(scope=Scope.REQUEST)
    def get_change_password_use_case(
        self, auth_method_service: AuthMethodService, session_service: SessionService
    ) -> ChangePasswordUseCase:
        """Provide change password use case."""
        return ChangePasswordUseCase(
            auth_method_service=auth_method_service, session_service=session_service
        )

    @provide(scope=Scope.REQUEST)
    def get_unlink_provider_use_case(
        self, auth_method_service: AuthMethodService, session_service: SessionService
    ) -> UnlinkProviderUseCase:
        """Provide unlink provider use case."""
        return UnlinkProviderUseCase(
            auth_method_service=auth_method_service, session_service=session_service
        )

    @provide(scope=Scope.REQUEST)
    def get_check_password_use_case(
        self, user_service: UserService, auth_method_service: AuthMethodService
    ) -> CheckPasswordUseCase:
        """Provide check password use case."""
        return CheckPasswordUseCase(
            user_service=user_service, auth_method_service=auth_method_service
        )

    # Unit use cases
    @provide(scope=Scope.REQUEST)
    def get_create_unit_use_case(self, unit_service: UnitService) -> CreateUnitUseCase:
        """Provide create unit use case."""
        return CreateUnitUseCase(unit_service=unit_service)

    @provide(scope=Scope.REQUEST)
    def get_update_unit_use_case(self, unit_service: UnitService) -> UpdateUnitUseCase:
        """Provide update unit use case."""
        return UpdateUnitUseCase(unit_service=unit_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_unit_use_case(self, unit_service: UnitService) -> DeleteUnitUseCase:
        """Provide delete unit use case."""
        return DeleteUnitUseCase(unit_service=unit_service)

    @provide(scope=Scope.REQUEST)
    def get_create_log_use_case(self, unit_service: UnitService) -> CreateLogUseCase:
        """Provide create log use case."""
        return CreateLogUseCase(unit_service=unit_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_log_use_case(self, unit_service: UnitService) -> DeleteLogUseCase:
        """Provide delete log use case."""
        return DeleteLogUseCase(unit_service=unit_service)

    @provide(scope=Scope.REQUEST)
    def get_get_unit_use_case(self, unit_service: UnitService) -> GetUnitUseCase:
        """Provide get unit use case."""
        return GetUnitUseCase(unit_service=unit_service)

    @provide(scope=Scope.REQUEST)
    def get_list_units_use_case(self, unit_service: UnitService) -> ListUnitsUseCase:
        """Provide list units use case."""
        return ListUnitsUseCase(unit_service=unit_service)

    @provide(scope=Scope.REQUEST)
    def get_update_log_use_case(self, unit_service: UnitService) -> UpdateLogUseCase:
        """Provide update log use case."""
        return UpdateLogUseCase(unit_service=unit_service)

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_get_profile_use_case(self, user_service: UserService) -> GetProfileUseCase:
        """Provide get profile use case."""
        return GetProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, user_service: UserService
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(user_service=user_service)
