class AppError(Exception):
    status_code = 500
    detail = "Internal error"

    def __init__(self, detail: str = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidCredentials(AppError):
    status_code = 401
    detail = "Invalid credentials"


class Unauthorized(AppError):
    status_code = 401
    detail = "Unauthorized"


class Forbidden(AppError):
    status_code = 403
    detail = "Forbidden"


class NotFound(AppError):
    status_code = 404
    detail = "Not found"


class UploadError(AppError):
    status_code = 400
    detail = "Invalid upload"
