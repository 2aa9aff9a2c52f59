from typing import Optional

from pydantic import BaseModel


class QueryResult(BaseModel):
    """Structured outcome of a query at the client boundary.

    Attributes:
        response: Final answer text on success; may be an empty string.
        error: Error message when the query failed.
        error_type: Name of the exception class that aborted the query.
    """

    response: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
