class ClubError(Exception):
    """Base class for domain errors raised by the services layer."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ClubError):
    status_code = 404


class PermissionDeniedError(ClubError):
    status_code = 403


class MalformedInputError(ClubError):
    status_code = 422


class ConflictError(ClubError):
    status_code = 400
