"""
Errors raised while talking to the survey API.
Views catch SurveyApiError, log it and show the message to the admin.
"""


class SurveyApiError(Exception):
    """Base class for every failure coming from the survey API."""

    default_message = "Something went wrong. Try again."

    def __init__(self, message=None, status_code=None, payload=None):
        self.message = message or self.default_message
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(self.message)


class SurveyApiUnavailable(SurveyApiError):
    """Network failure, timeout or a body that is not JSON."""

    default_message = "The survey service is unreachable. Try again later."


class SurveyApiRejected(SurveyApiError):
    """The API answered but refused the operation (HTTP >= 400 or success=false)."""

    default_message = "The request was rejected by the survey service."
