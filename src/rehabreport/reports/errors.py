"""Domain errors raised by the report engine.

Each error carries the HTTP status the API layer should answer with.
"""


class ReportError(Exception):
    """Base class for report engine errors."""

    status_code: int = 500


class NotFoundError(ReportError):
    """A referenced user, summary, medication or plan item does not exist."""

    status_code = 404


class InvalidRequestError(ReportError):
    """Unsupported range token or period filter."""

    status_code = 400
