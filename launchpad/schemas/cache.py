"""Cache Payload Schemas — one explicit, versioned schema per cached shape.

Invariants:
    - Every payload carries v (schema version); only v == 1 decodes today
    - Single item and collection are distinct schemas (never guessed from shape)
    - decode_* raises CachePayloadError on any mismatch — never returns a silent None
    - price round-trips as a string so Decimal precision survives JSON

Design Decisions:
    - Pydantic over ad hoc json.loads: schema drift becomes a typed error
    - Snapshot model separate from the domain dataclass: the wire shape can evolve
      (bump v) without touching core types
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from launchpad.core.catalog import CatalogItem
from launchpad.core.errors import CachePayloadError

CACHE_SCHEMA_VERSION = 1


class CatalogItemSnapshot(BaseModel):
    """Serialized copy of one CatalogItem."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int
    title: str
    author: str
    isbn: str = ""
    price: Decimal
    stock: int
    year: int

    @classmethod
    def from_item(cls, item: CatalogItem) -> "CatalogItemSnapshot":
        return cls(
            id=item.id, title=item.title, author=item.author, isbn=item.isbn,
            price=item.price, stock=item.stock, year=item.year,
        )

    def to_item(self) -> CatalogItem:
        return CatalogItem(
            id=self.id, title=self.title, author=self.author, isbn=self.isbn,
            price=self.price, stock=self.stock, year=self.year,
        )


class CachedCatalogItem(BaseModel):
    """Payload stored under item:{id}."""
    model_config = ConfigDict(extra="forbid")

    v: Literal[1] = CACHE_SCHEMA_VERSION
    kind: Literal["catalog_item"] = "catalog_item"
    item: CatalogItemSnapshot


class CachedCatalogCollection(BaseModel):
    """Payload stored under item:all."""
    model_config = ConfigDict(extra="forbid")

    v: Literal[1] = CACHE_SCHEMA_VERSION
    kind: Literal["catalog_collection"] = "catalog_collection"
    items: list[CatalogItemSnapshot]


def encode_item(item: CatalogItem) -> str:
    return CachedCatalogItem(
        item=CatalogItemSnapshot.from_item(item),
    ).model_dump_json()


def encode_collection(items: list[CatalogItem]) -> str:
    return CachedCatalogCollection(
        items=[CatalogItemSnapshot.from_item(i) for i in items],
    ).model_dump_json()


def decode_item(key: str, raw: str) -> CatalogItem:
    try:
        payload = CachedCatalogItem.model_validate_json(raw)
    except PydanticValidationError as e:
        raise CachePayloadError(f"{e.error_count()} schema error(s)", key) from e
    return payload.item.to_item()


def decode_collection(key: str, raw: str) -> list[CatalogItem]:
    try:
        payload = CachedCatalogCollection.model_validate_json(raw)
    except PydanticValidationError as e:
        raise CachePayloadError(f"{e.error_count()} schema error(s)", key) from e
    return [s.to_item() for s in payload.items]
