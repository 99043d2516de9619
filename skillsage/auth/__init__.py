from skillsage.auth.identity import (
    FirebaseIdentityProvider,
    IdentityProvider,
    InvalidCredential,
    build_identity_provider,
)
from skillsage.auth.principal import Principal, VerifiedIdentity
from skillsage.auth.verification import IdentityVerifier

__all__ = [
    "FirebaseIdentityProvider",
    "IdentityProvider",
    "IdentityVerifier",
    "InvalidCredential",
    "Principal",
    "VerifiedIdentity",
    "build_identity_provider",
]
