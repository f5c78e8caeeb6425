"""
Domain errors raised by the feed, ledger and auth layers.

Each carries a short, user-facing message. The HTTP mapping lives in
jobswipe.main; UpstreamServiceError never reaches a caller because the
feed converts it into a fallback verdict.
"""


class JobSwipeError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(JobSwipeError):
    status_code = 401


class PreconditionError(JobSwipeError):
    status_code = 412


class NotFoundError(JobSwipeError):
    status_code = 404


class UpstreamServiceError(JobSwipeError):
    status_code = 502


class StorageError(JobSwipeError):
    status_code = 500


class ConflictError(JobSwipeError):
    status_code = 409
