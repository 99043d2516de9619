from typing import Optional

from loguru import logger

from skillsage.auth.identity import IdentityProvider, InvalidCredential
from skillsage.auth.principal import Principal, VerifiedIdentity
from skillsage.core.config import Settings
from skillsage.core.errors import Forbidden, ProviderUnavailable, Unauthenticated
from skillsage.core.policy import FailurePolicy, policy_for
from skillsage.core.roles import Role
from skillsage.storage.base import Storage

BEARER_PREFIX = "Bearer "


class IdentityVerifier:
    """Turns an Authorization header into a Principal.

    With no provider configured the verifier either attaches a fixed
    development admin (``bypass=True``) or rejects every request with 503.
    Only ``from_settings`` decides which, and it allows the bypass solely
    in the development environment.

    Rejected tokens always yield 403. Any other provider error follows the
    identity failure policy: ``FAIL_FAST`` answers 503, ``DEGRADE`` treats
    the token as rejected.
    """

    def __init__(
        self,
        provider: Optional[IdentityProvider],
        storage: Storage,
        bypass: bool = False,
        dev_principal: Optional[Principal] = None,
        policy: Optional[FailurePolicy] = None,
    ):
        if bypass and provider is not None:
            raise ValueError("Identity bypass cannot be combined with a configured provider")
        self.provider = provider
        self.storage = storage
        self.bypass = bypass
        self.dev_principal = dev_principal or Principal(uid="dev-user", email="dev@skillsage.dev", role=Role.ADMIN)
        self.policy = policy or policy_for("identity")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        provider: Optional[IdentityProvider],
        storage: Storage,
    ) -> "IdentityVerifier":
        bypass = provider is None and settings.is_development
        if bypass:
            logger.warning(
                "Identity provider not configured; every request runs as development admin "
                f"'{settings.DEV_PRINCIPAL_UID}'"
            )
        elif provider is None:
            logger.warning("Identity provider not configured; authenticated routes will return 503")
        dev_principal = Principal(
            uid=settings.DEV_PRINCIPAL_UID,
            email=settings.DEV_PRINCIPAL_EMAIL,
            role=Role.ADMIN,
            name="Developer",
        )
        return cls(provider, storage, bypass=bypass, dev_principal=dev_principal)

    async def verify_token(self, authorization: Optional[str]) -> VerifiedIdentity:
        if self.provider is None:
            raise ProviderUnavailable("Identity provider is not configured")
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise Unauthenticated()
        token = authorization[len(BEARER_PREFIX):].strip()
        if not token:
            raise Unauthenticated()
        try:
            return await self.provider.verify(token)
        except InvalidCredential as e:
            logger.warning(f"Token verification failed: {str(e)}")
            raise Forbidden("Forbidden: Invalid token")
        except Exception as e:
            logger.error(f"Identity provider error: {type(e).__name__}: {str(e)}")
            if self.policy == FailurePolicy.FAIL_FAST:
                raise ProviderUnavailable("Identity provider failed") from e
            raise Forbidden("Forbidden: Invalid token")

    async def resolve(self, authorization: Optional[str]) -> Principal:
        if self.bypass:
            return self.dev_principal

        identity = await self.verify_token(authorization)
        user = await self.storage.get_user(identity.uid)
        if user is not None and not user.is_active:
            logger.warning(f"Rejected request from deactivated user {identity.uid}")
            raise Forbidden("Forbidden: Account is deactivated")

        # Unknown subjects get the least privileged role until bootstrapped
        return Principal(
            uid=identity.uid,
            email=identity.email or (user.email if user else None),
            role=user.role if user else Role.USER,
            name=identity.name or (user.name if user else None),
            picture=identity.picture or (user.photo_url if user else None),
        )
