import abc
from typing import Dict


class Credentials(abc.ABC):
    @abc.abstractmethod
    async def auth_headers(self) -> Dict[str, str]:
        raise NotImplementedError

    async def close(self):
        pass


class TokenCredentials(Credentials):
    def __init__(self, token: str):
        self._token = token

    async def auth_headers(self) -> Dict[str, str]:
        return {'Authorization': f'Bearer {self._token}'}


class AnonymousCredentials(Credentials):
    async def auth_headers(self) -> Dict[str, str]:
        return {}
