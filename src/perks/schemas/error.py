"""Error response schema.

Every error response has the same body: {"message": "..."}.
Exception handlers in main.py build it from domain exceptions.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned by all 4xx and 5xx responses."""

    message: str
