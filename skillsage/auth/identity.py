import json
from abc import ABC, abstractmethod
from typing import Optional

import firebase_admin
from firebase_admin import auth as fb_auth
from firebase_admin import credentials
from loguru import logger
from starlette.concurrency import run_in_threadpool

from skillsage.auth.principal import VerifiedIdentity
from skillsage.core.config import Settings

FIREBASE_APP_NAME = "skillsage"


class InvalidCredential(Exception):
    """The provider rejected the bearer token."""


class IdentityProvider(ABC):
    @abstractmethod
    async def verify(self, token: str) -> VerifiedIdentity:
        """Return the token's claims or raise InvalidCredential."""


class FirebaseIdentityProvider(IdentityProvider):
    def __init__(self, service_account_key: str):
        try:
            cred = credentials.Certificate(json.loads(service_account_key))
        except (ValueError, TypeError) as e:
            raise ValueError(f"Invalid Firebase service account key: {str(e)}") from e
        try:
            self.app = firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            self.app = firebase_admin.initialize_app(cred, name=FIREBASE_APP_NAME)
        logger.info("Firebase identity provider initialized")

    async def verify(self, token: str) -> VerifiedIdentity:
        try:
            decoded = await run_in_threadpool(fb_auth.verify_id_token, token, self.app)
        except (fb_auth.InvalidIdTokenError, fb_auth.UserDisabledError, ValueError) as e:
            raise InvalidCredential(str(e)) from e
        return VerifiedIdentity(
            uid=decoded["uid"],
            email=decoded.get("email"),
            name=decoded.get("name"),
            picture=decoded.get("picture"),
        )


def build_identity_provider(settings: Settings) -> Optional[IdentityProvider]:
    """Firebase provider when a service account is configured, otherwise None."""
    if not settings.identity_configured:
        return None
    return FirebaseIdentityProvider(settings.FIREBASE_SERVICE_ACCOUNT_KEY)
