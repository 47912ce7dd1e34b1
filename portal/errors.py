"""
NirmaanTech Portal - Rejection taxonomy

Every core operation either succeeds or raises one of these.
Mutations validate before touching a repository, so a rejection
never leaves a collection half-updated.
"""


class PortalError(Exception):
    """Base class for caller-visible rejections"""
    code = "error"

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_dict(self) -> dict:
        return {"success": False, "error": self.code, "detail": self.message}


class ValidationError(PortalError):
    """Caller-correctable input problem"""
    code = "validation_error"


class AuthenticationError(ValidationError):
    code = "invalid_credentials"


class TrialExpiredError(ValidationError):
    """Basic-plan franchise trial is over: login refused"""
    code = "franchise_expired"


class UploadLimitError(ValidationError):
    """Basic-plan vendor reached the product cap"""
    code = "upload_limit"


class NotFoundError(PortalError):
    """Referenced lead/product/user/order/script no longer exists"""
    code = "not_found"
