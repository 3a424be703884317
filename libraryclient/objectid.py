import re

from .exceptions import InvalidObjectIDError

OBJECT_ID_LENGTH = 12
OBJECT_ID_REGEX = re.compile(f'[0-9a-fA-F]{{{2 * OBJECT_ID_LENGTH}}}')


class ObjectID:
    """A backend object identifier: exactly 12 bytes, written as 24 hex characters."""

    @staticmethod
    def from_hex(value: str) -> 'ObjectID':
        if not isinstance(value, str) or OBJECT_ID_REGEX.fullmatch(value) is None:
            raise InvalidObjectIDError(value)
        return ObjectID(bytes.fromhex(value))

    def __init__(self, raw: bytes):
        if len(raw) != OBJECT_ID_LENGTH:
            raise InvalidObjectIDError(raw.hex())
        self._raw = raw

    @property
    def raw(self) -> bytes:
        return self._raw

    def hex(self) -> str:
        return self._raw.hex()

    def __str__(self):
        return self.hex()

    def __repr__(self):
        return f'ObjectID({self.hex()!r})'

    def __eq__(self, other):
        if not isinstance(other, ObjectID):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self):
        return hash(self._raw)


def canonical_object_id(value: str) -> str:
    return ObjectID.from_hex(value).hex()
