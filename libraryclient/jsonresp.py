from http import HTTPStatus
from typing import Optional

import orjson


class JSONError(Exception):
    """Structured error carried in a non-success response body.

    The server wraps errors as ``{"error": {"code": 404, "message": "..."}}``.
    """

    def __init__(self, code: int, message: str):
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self):
        try:
            reason = HTTPStatus(self.code).phrase
        except ValueError:
            return f'{self.message} ({self.code})'
        return f'{self.message} ({self.code} {reason})'


def read_error(body: bytes) -> Optional[JSONError]:
    if not body:
        return None
    try:
        doc = orjson.loads(body)
    except orjson.JSONDecodeError:
        return None
    if not isinstance(doc, dict):
        return None
    error = doc.get('error')
    if not isinstance(error, dict):
        return None
    code = error.get('code')
    message = error.get('message')
    if not isinstance(code, int) or not isinstance(message, str):
        return None
    return JSONError(code, message)
