"""Error taxonomy shared by the auth, storage-facing handlers and AI gateway."""

from typing import Any, Dict, Iterable, Optional


def _value(item: Any) -> str:
    return getattr(item, "value", item)


class SkillSageError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class Unauthenticated(SkillSageError):
    status_code = 401
    default_message = "Unauthorized: No token provided"


class Forbidden(SkillSageError):
    status_code = 403
    default_message = "Forbidden"

    def __init__(
        self,
        message: Optional[str] = None,
        required: Optional[Iterable[str]] = None,
        current: Optional[str] = None,
    ):
        super().__init__(message)
        self.required = sorted(_value(r) for r in required) if required is not None else None
        self.current = _value(current) if current is not None else None

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.required is not None:
            body["required"] = self.required
            body["current"] = self.current
        return body


class NotFound(SkillSageError):
    status_code = 404
    default_message = "Not found"


class InvalidRequest(SkillSageError):
    status_code = 400
    default_message = "Invalid request"


class ProviderUnavailable(SkillSageError):
    status_code = 503
    default_message = "Upstream provider unavailable"


class IntegrityViolation(SkillSageError):
    status_code = 409
    default_message = "Request conflicts with stored data"
