"""Catalog schemas: home and detail view payloads."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base for catalog payloads: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Category(CatalogModel):
    """Top-level directory shown on the home view."""
    name: str
    slug: str
    image_count: int = 0
    preview_image: str | None = None


class CategoryItem(CatalogModel):
    """Subdirectory listed inside a detail view."""
    type: Literal["category"] = "category"
    name: str
    slug: str
    count: int = 0
    preview: str | None = None


class ImageItem(CatalogModel):
    """Image file listed inside a detail view."""
    type: Literal["image"] = "image"
    name: str
    src: str


ContentItem = Annotated[Union[CategoryItem, ImageItem], Field(discriminator="type")]


class DirectoryContent(CatalogModel):
    """Immediate children of a resolved directory."""
    name: str
    subcategories: list[CategoryItem] = []
    images: list[ImageItem] = []


class DirectoryPage(DirectoryContent):
    """Detail view payload with navigation context."""
    path: list[str] = []
    parent: str = "/"


class StaticParam(CatalogModel):
    slug: list[str]


class StaticParamsResponse(CatalogModel):
    params: list[StaticParam] = []
