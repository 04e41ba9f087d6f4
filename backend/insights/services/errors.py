"""Domain failures raised by the service layer.

The HTTP layer maps each class to a status code; services never build
responses themselves.
"""


class ServiceError(Exception):
    status_code = 500
    code = "internal_error"

    def __init__(self, code: str | None = None):
        if code is not None:
            self.code = code
        super().__init__(self.code)

    def payload(self) -> dict:
        return {"error": self.code}


class ValidationFailed(ServiceError):
    status_code = 400
    code = "validation_failed"

    def __init__(self, errors: dict[str, str] | None = None, code: str | None = None):
        super().__init__(code)
        self.errors = dict(errors or {})

    def payload(self) -> dict:
        out = {"error": self.code}
        if self.errors:
            out["fields"] = self.errors
        return out


class Unauthorized(ServiceError):
    status_code = 401
    code = "unauthorized"


class NotFound(ServiceError):
    status_code = 404
    code = "not_found"


class Conflict(ServiceError):
    status_code = 409
    code = "conflict"
