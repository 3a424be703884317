from typing import Dict, List, Optional, TypedDict

from typing_extensions import NotRequired


class Entity(TypedDict):
    name: str
    description: str
    id: NotRequired[str]
    createdBy: NotRequired[str]
    createdAt: NotRequired[str]  # date string
    updatedBy: NotRequired[Optional[str]]
    updatedAt: NotRequired[Optional[str]]  # date string
    deleted: NotRequired[bool]
    deletedAt: NotRequired[Optional[str]]  # date string
    collections: NotRequired[List[str]]
    size: NotRequired[int]
    quota: NotRequired[int]
    defaultPrivate: NotRequired[bool]


class Collection(TypedDict):
    name: str
    description: str
    entity: str
    id: NotRequired[str]
    createdBy: NotRequired[str]
    createdAt: NotRequired[str]
    updatedBy: NotRequired[Optional[str]]
    updatedAt: NotRequired[Optional[str]]
    deleted: NotRequired[bool]
    deletedAt: NotRequired[Optional[str]]
    containers: NotRequired[List[str]]
    size: NotRequired[int]
    private: NotRequired[bool]
    entityName: NotRequired[str]


class Container(TypedDict):
    name: str
    description: str
    collection: str
    id: NotRequired[str]
    createdBy: NotRequired[str]
    createdAt: NotRequired[str]
    updatedBy: NotRequired[Optional[str]]
    updatedAt: NotRequired[Optional[str]]
    deleted: NotRequired[bool]
    deletedAt: NotRequired[Optional[str]]
    fullDescription: NotRequired[str]
    images: NotRequired[List[str]]
    imageTags: NotRequired[Dict[str, str]]
    size: NotRequired[int]
    downloadCount: NotRequired[int]
    entityName: NotRequired[str]
    collectionName: NotRequired[str]


class Image(TypedDict):
    hash: str
    description: str
    container: str
    id: NotRequired[str]
    createdBy: NotRequired[str]
    createdAt: NotRequired[str]
    updatedBy: NotRequired[Optional[str]]
    updatedAt: NotRequired[Optional[str]]
    deleted: NotRequired[bool]
    deletedAt: NotRequired[Optional[str]]
    uploaded: NotRequired[bool]
    size: NotRequired[int]
    entityName: NotRequired[str]
    collectionName: NotRequired[str]
    containerName: NotRequired[str]


# tag name -> image id
TagMap = Dict[str, str]


class ImageTag(TypedDict):
    tag: str
    imageID: str


class SearchResults(TypedDict):
    entity: NotRequired[List[Entity]]
    collection: NotRequired[List[Collection]]
    container: NotRequired[List[Container]]
    image: NotRequired[List[Image]]


class EntityResponse(TypedDict):
    data: Entity


class CollectionResponse(TypedDict):
    data: Collection


class ContainerResponse(TypedDict):
    data: Container


class ImageResponse(TypedDict):
    data: Image


class TagsResponse(TypedDict):
    data: Optional[TagMap]


class SearchResponse(TypedDict):
    data: Optional[SearchResults]
