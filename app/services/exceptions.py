"""Business-rule failures raised by the service layer.

Routers translate these to HTTP responses using ``status_code``.
"""


class ServiceError(ValueError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class PermissionDeniedError(ServiceError):
    status_code = 403


class ConflictError(ServiceError):
    status_code = 409
