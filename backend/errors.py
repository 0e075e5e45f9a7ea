"""Error taxonomy shared by the indexing utilities, upstream services and routes.

Every error carries the HTTP status the API layer answers with.
"""


class QuranServiceError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(QuranServiceError):
    status_code = 400


class OutOfRange(InvalidInput):
    pass


class InvalidVerseKey(InvalidInput):
    pass


class InvalidUnitNumber(InvalidInput):
    pass


class NotFound(QuranServiceError):
    status_code = 404


class DisallowedHost(QuranServiceError):
    status_code = 403


class UpstreamFailure(QuranServiceError):
    status_code = 500


class AudioUnavailable(UpstreamFailure):
    status_code = 503


class InternalConsistencyFault(QuranServiceError):
    status_code = 500


class VerseNotFound(InternalConsistencyFault):
    pass
