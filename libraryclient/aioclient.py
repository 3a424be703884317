from typing import Any, Dict, Iterable, Optional, Tuple, Union, cast
from urllib.parse import quote, urlsplit
import asyncio
import logging

import aiohttp
import orjson
import yarl

from . import jsonresp
from .config import DEFAULT_REMOTE_URL, ConfigVariable, configuration_of
from .credentials import AnonymousCredentials, Credentials, TokenCredentials
from .exceptions import (
    LibraryConnectionError,
    LibraryDecodeError,
    LibraryRequestError,
    LibraryResponseError,
)
from .objectid import canonical_object_id
from .session import Session
from .types import (
    Collection,
    CollectionResponse,
    Container,
    ContainerResponse,
    Entity,
    EntityResponse,
    Image,
    ImageResponse,
    ImageTag,
    SearchResponse,
    SearchResults,
    TagMap,
    TagsResponse,
)

log = logging.getLogger('libraryclient.aioclient')

NO_DESCRIPTION = 'No description'


def decode_envelope(body: bytes, what: str) -> Dict[str, Any]:
    try:
        res = orjson.loads(body)
    except orjson.JSONDecodeError as e:
        raise LibraryDecodeError(f'error decoding {what}: {e}') from e
    if not isinstance(res, dict) or 'data' not in res:
        raise LibraryDecodeError(f'error decoding {what}: response has no data envelope')
    return res


def response_error(status: int, body: bytes, operation: str) -> LibraryResponseError:
    err = jsonresp.read_error(body)
    if err is not None:
        return LibraryResponseError(status, f'{operation} did not succeed: {err}', code=err.code)
    return LibraryResponseError(status, f'{operation} did not succeed: unexpected http status code: {status}')


class LibraryClient:
    @staticmethod
    async def create(
        url: Optional[str] = None,
        token: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Union[aiohttp.ClientTimeout, float, int, None] = None,
    ) -> 'LibraryClient':
        url = configuration_of(ConfigVariable.REMOTE_URL, url, DEFAULT_REMOTE_URL)
        token = configuration_of(ConfigVariable.REMOTE_TOKEN, token, None)
        if headers is None:
            headers = {}
        credentials: Credentials
        if token:
            credentials = TokenCredentials(token)
        else:
            credentials = AnonymousCredentials()
        return LibraryClient(
            url=url,
            session=Session(credentials=credentials, http_session=session, timeout=timeout),
            headers=headers,
        )

    def __init__(self, url: str, session: Session, headers: Dict[str, str]):
        self.url = url.rstrip('/')
        self._session: Session = session
        self._headers = headers

    def _request_url(self, path: str, raw_query: str = '') -> yarl.URL:
        url = self.url + quote(path, safe="/:@!$&'()*+,;=")
        if raw_query:
            url += '?' + raw_query
        try:
            return yarl.URL(url, encoded=True)
        except ValueError as e:
            raise LibraryRequestError(f'error creating request to server: {e}') from e

    async def _request(self, method: str, url: yarl.URL, json: Any = None) -> Tuple[int, bytes]:
        try:
            async with self._session.request(method, url, json=json, headers=self._headers) as resp:
                status, body = resp.status, await resp.read()
        except orjson.JSONEncodeError as e:
            raise LibraryRequestError(f'error encoding object to JSON: {e}') from e
        except aiohttp.InvalidURL as e:
            raise LibraryRequestError(f'error creating request to server: {e}') from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise LibraryConnectionError(f'error making request to server: {e!r}') from e
        log.debug(f'{method} {url.path} {status}', extra={'method': method, 'url': str(url), 'status': status})
        return status, body

    async def _api_get(self, path: str) -> Tuple[bytes, bool]:
        log.debug(f'apiGet calling {path}', extra={'path': path})

        # the request url takes the path and the raw query separately
        try:
            u = urlsplit(path)
        except ValueError as e:
            raise LibraryRequestError(f'error parsing url: {e}') from e

        status, body = await self._request('GET', self._request_url(u.path, u.query))
        if status == 404:
            return b'', False
        if status == 200:
            return body, True
        raise response_error(status, body, 'get')

    async def _api_create(self, path: str, obj: Any) -> bytes:
        log.debug(f'apiCreate calling {path}', extra={'path': path})
        status, body = await self._request('POST', self._request_url(path), json=obj)
        if status not in (200, 201):
            raise response_error(status, body, 'creation')
        return body

    async def _get_envelope(self, path: str, what: str) -> Optional[Dict[str, Any]]:
        body, found = await self._api_get(path)
        if not found:
            return None
        envelope = decode_envelope(body, what)
        if envelope['data'] is None:
            raise LibraryDecodeError(f'error decoding {what}: response data is null')
        return envelope

    async def _create_envelope(self, path: str, obj: Any, what: str) -> Dict[str, Any]:
        envelope = decode_envelope(await self._api_create(path, obj), what)
        if envelope['data'] is None:
            raise LibraryDecodeError(f'error decoding {what}: response data is null')
        return envelope

    async def get_entity(self, entity_ref: str) -> Optional[Entity]:
        envelope = await self._get_envelope(f'/v1/entities/{entity_ref}', 'entity')
        return None if envelope is None else cast(EntityResponse, envelope)['data']

    async def get_collection(self, collection_ref: str) -> Optional[Collection]:
        envelope = await self._get_envelope(f'/v1/collections/{collection_ref}', 'collection')
        return None if envelope is None else cast(CollectionResponse, envelope)['data']

    async def get_container(self, container_ref: str) -> Optional[Container]:
        envelope = await self._get_envelope(f'/v1/containers/{container_ref}', 'container')
        return None if envelope is None else cast(ContainerResponse, envelope)['data']

    async def get_image(self, image_ref: str) -> Optional[Image]:
        envelope = await self._get_envelope(f'/v1/images/{image_ref}', 'image')
        return None if envelope is None else cast(ImageResponse, envelope)['data']

    async def create_entity(self, name: str, description: str = NO_DESCRIPTION) -> Entity:
        entity = Entity(name=name, description=description)
        envelope = await self._create_envelope('/v1/entities', entity, 'entity')
        return cast(EntityResponse, envelope)['data']

    async def create_collection(self, name: str, entity_id: str, description: str = NO_DESCRIPTION) -> Collection:
        collection = Collection(name=name, description=description, entity=canonical_object_id(entity_id))
        envelope = await self._create_envelope('/v1/collections', collection, 'collection')
        return cast(CollectionResponse, envelope)['data']

    async def create_container(self, name: str, collection_id: str, description: str = NO_DESCRIPTION) -> Container:
        container = Container(name=name, description=description, collection=canonical_object_id(collection_id))
        envelope = await self._create_envelope('/v1/containers', container, 'container')
        return cast(ContainerResponse, envelope)['data']

    async def create_image(self, hash: str, container_id: str, description: str = NO_DESCRIPTION) -> Image:
        image = Image(hash=hash, description=description, container=canonical_object_id(container_id))
        envelope = await self._create_envelope('/v1/images', image, 'image')
        return cast(ImageResponse, envelope)['data']

    async def get_tags(self, container_id: str) -> TagMap:
        path = f'/v1/tags/{container_id}'
        log.debug(f'getTags calling {path}', extra={'path': path, 'container_id': container_id})
        status, body = await self._request('GET', self._request_url(path))
        if status != 200:
            raise response_error(status, body, 'get tags')
        tags = cast(TagsResponse, decode_envelope(body, 'tags'))['data']
        if tags is None:
            return {}
        if not isinstance(tags, dict):
            raise LibraryDecodeError(f'error decoding tags: expected an object, got {type(tags).__name__}')
        return tags

    async def set_tag(self, container_id: str, image_tag: ImageTag) -> None:
        path = f'/v1/tags/{container_id}'
        log.debug(f'setTag calling {path}', extra={'path': path, 'container_id': container_id})
        status, body = await self._request('POST', self._request_url(path), json=image_tag)
        if status != 200:
            raise response_error(status, body, 'set tag')

    async def set_tags(self, container_id: str, image_id: str, tags: Iterable[str]) -> None:
        # tags already applied stay applied if a later one fails
        image_id = canonical_object_id(image_id)
        existing_tags = await self.get_tags(container_id)

        for tag in tags:
            context = {'container_id': container_id, 'image_id': image_id, 'tag': tag}
            log.info(f'setting tag {tag}', extra=context)
            if tag in existing_tags:
                context['replaced_image_id'] = existing_tags[tag]
                log.warning(f'{tag} replaces an existing tag', extra=context)
            await self.set_tag(container_id, ImageTag(tag=tag, imageID=image_id))

    async def search(self, value: str) -> SearchResults:
        """Search the library by name.

        Returns any matching entities, collections, containers and images.
        """
        body, _ = await self._api_get(f'/v1/search?value={quote(value, safe="")}')
        results = cast(SearchResponse, decode_envelope(body, 'results'))['data']
        if results is None:
            return SearchResults()
        if not isinstance(results, dict):
            raise LibraryDecodeError(f'error decoding results: expected an object, got {type(results).__name__}')
        return results

    async def close(self):
        await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
