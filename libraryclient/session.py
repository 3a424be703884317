from contextlib import AsyncExitStack
from typing import Any, Dict, Optional, Union

import aiohttp
import orjson
import yarl

from .config import ConfigVariable, configuration_of
from .credentials import Credentials
from .exceptions import LibraryConfigError

DEFAULT_TIMEOUT_IN_SECONDS = 30


def client_timeout(timeout: Union[aiohttp.ClientTimeout, float, int, None]) -> aiohttp.ClientTimeout:
    name = ConfigVariable.HTTP_TIMEOUT_IN_SECONDS.value
    value = configuration_of(ConfigVariable.HTTP_TIMEOUT_IN_SECONDS, timeout, DEFAULT_TIMEOUT_IN_SECONDS)
    if isinstance(value, aiohttp.ClientTimeout):
        return value
    try:
        seconds = float(value)
    except ValueError as e:
        raise LibraryConfigError(f'invalid {name} {value!r}: not a number') from e
    if seconds <= 0:
        raise LibraryConfigError(f'invalid {name} {value!r}: must be positive')
    return aiohttp.ClientTimeout(total=seconds)


class Session:
    """An aiohttp session that authenticates every request.

    ``json`` bodies are encoded with orjson when the request is built, so an
    unencodable body fails before any connection is made.
    """

    def __init__(
        self,
        *,
        credentials: Credentials,
        http_session: Optional[aiohttp.ClientSession] = None,
        timeout: Union[aiohttp.ClientTimeout, float, int, None] = None,
    ):
        self._credentials = credentials
        if http_session is not None:
            self._owns_http_session = False
            self._http_session = http_session
        else:
            self._owns_http_session = True
            self._http_session = aiohttp.ClientSession(timeout=client_timeout(timeout), raise_for_status=False)

    def request(
        self, method: str, url: yarl.URL, *, json: Any = None, headers: Optional[Dict[str, str]] = None
    ) -> aiohttp.client._RequestContextManager:
        data = None
        if json is not None:
            data = aiohttp.BytesPayload(orjson.dumps(json), encoding='utf-8', content_type='application/json')
        return aiohttp.client._RequestContextManager(self._request_with_authn(method, url, data, headers or {}))

    async def _request_with_authn(
        self, method: str, url: yarl.URL, data: Optional[aiohttp.BytesPayload], headers: Dict[str, str]
    ) -> aiohttp.ClientResponse:
        auth_headers = await self._credentials.auth_headers()
        return await self._http_session.request(method, url, data=data, headers={**headers, **auth_headers})

    async def close(self) -> None:
        async with AsyncExitStack() as stack:
            if self._owns_http_session:
                stack.push_async_callback(self._http_session.close)
            stack.push_async_callback(self._credentials.close)
