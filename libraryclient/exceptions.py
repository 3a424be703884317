from typing import Optional


class LibraryError(Exception):
    pass


class InvalidObjectIDError(LibraryError, ValueError):
    def __init__(self, value):
        super().__init__(value)
        self.value = value

    def __str__(self):
        return f'invalid object id {self.value!r}: expected 24 hexadecimal characters'


class LibraryConfigError(LibraryError, ValueError):
    pass


class LibraryRequestError(LibraryError):
    pass


class LibraryConnectionError(LibraryError):
    pass


class LibraryDecodeError(LibraryError):
    pass


class LibraryResponseError(LibraryError):
    def __init__(self, status: int, message: str, code: Optional[int] = None):
        super().__init__(status, message, code)
        self.status = status
        self.message = message
        self.code = code

    def __str__(self):
        return self.message
