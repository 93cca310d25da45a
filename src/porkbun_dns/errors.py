"""
Error families raised by the Porkbun codec and API wrapper.

- EncodeError: an outgoing value could not be represented as JSON
- DecodeError: a response did not match the expected schema (one subclass per cause)
- ApiStatusError: the server answered, but its status envelope was not SUCCESS

Transport failures (non-2xx HTTP) live in `http_client.ServerError`; the two
channels are never merged.
"""
from __future__ import annotations
from typing import Optional

class EncodeError(ValueError):
    pass

class DecodeError(ValueError):

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

class MalformedJSONError(DecodeError):
    def __init__(self, detail: str):
        super().__init__(f"malformed JSON envelope: {detail}")

class MissingFieldError(DecodeError):
    def __init__(self, field: str):
        super().__init__(f"missing required field `{field}`", field)

class FieldTypeError(DecodeError):
    def __init__(self, field: str, expected: str):
        super().__init__(f"field `{field}` is not a {expected}", field)

class BooleanFieldError(DecodeError):
    def __init__(self, field: str):
        # securityLock -> "SecurityLock response not a boolean"
        super().__init__(f"{field[:1].upper()}{field[1:]} response not a boolean", field)

class DateFieldError(DecodeError):
    def __init__(self, field: str, value: str):
        super().__init__(f"field `{field}` failed date parse: {value!r}", field)

class ApiStatusError(Exception):
    """Non-SUCCESS status envelope returned by the API."""

    def __init__(self, status: str, message: str = ""):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
