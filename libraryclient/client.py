from typing import Dict, Iterable, Optional

from .utils import async_to_blocking
from . import aioclient
from .types import Collection, Container, Entity, Image, ImageTag, SearchResults, TagMap


class LibraryClient:
    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ):
        self._async_client = async_to_blocking(
            aioclient.LibraryClient.create(url=url, token=token, headers=headers, timeout=timeout)
        )

    @property
    def url(self) -> str:
        return self._async_client.url

    def get_entity(self, entity_ref: str) -> Optional[Entity]:
        return async_to_blocking(self._async_client.get_entity(entity_ref))

    def get_collection(self, collection_ref: str) -> Optional[Collection]:
        return async_to_blocking(self._async_client.get_collection(collection_ref))

    def get_container(self, container_ref: str) -> Optional[Container]:
        return async_to_blocking(self._async_client.get_container(container_ref))

    def get_image(self, image_ref: str) -> Optional[Image]:
        return async_to_blocking(self._async_client.get_image(image_ref))

    def create_entity(self, name: str, description: str = aioclient.NO_DESCRIPTION) -> Entity:
        return async_to_blocking(self._async_client.create_entity(name, description))

    def create_collection(
        self, name: str, entity_id: str, description: str = aioclient.NO_DESCRIPTION
    ) -> Collection:
        return async_to_blocking(self._async_client.create_collection(name, entity_id, description))

    def create_container(
        self, name: str, collection_id: str, description: str = aioclient.NO_DESCRIPTION
    ) -> Container:
        return async_to_blocking(self._async_client.create_container(name, collection_id, description))

    def create_image(self, hash: str, container_id: str, description: str = aioclient.NO_DESCRIPTION) -> Image:
        return async_to_blocking(self._async_client.create_image(hash, container_id, description))

    def get_tags(self, container_id: str) -> TagMap:
        return async_to_blocking(self._async_client.get_tags(container_id))

    def set_tag(self, container_id: str, image_tag: ImageTag) -> None:
        async_to_blocking(self._async_client.set_tag(container_id, image_tag))

    def set_tags(self, container_id: str, image_id: str, tags: Iterable[str]) -> None:
        async_to_blocking(self._async_client.set_tags(container_id, image_id, tags))

    def search(self, value: str) -> SearchResults:
        return async_to_blocking(self._async_client.search(value))

    def close(self):
        async_to_blocking(self._async_client.close())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
