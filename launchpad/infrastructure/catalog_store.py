"""SQL Catalog Store — CatalogStore implementation over SQLAlchemy async sessions.

Invariants:
    - One session per call; every write commits before returning
    - insert returns the item with the database-assigned id
    - update_full replaces every mutable field in one UPDATE; False when no row matched
    - delete_by_id is a set-based DELETE (no entity load); False when no row matched
    - query_page takes the total from COUNT(*) OVER () on the page statement itself,
      so a non-empty page and its total come from one statement snapshot
    - Pages are ordered by id ascending

Design Decisions:
    - Core statements (update()/delete()) over ORM unit-of-work for writes:
      no read-before-write round trip
    - Errors surface as StoreError via DatabaseSessionManager.session()
"""

import logging

from sqlalchemy import delete, exists, func, select, update

from launchpad.core.catalog import CatalogItem
from launchpad.infrastructure.database import DatabaseSessionManager
from launchpad.models.catalog_item import CatalogItemRow

logger = logging.getLogger(__name__)


class SqlCatalogStore:
    """Durable catalog storage."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def get_by_id(self, item_id: int) -> CatalogItem | None:
        async with self._db.session() as session:
            row = await session.get(CatalogItemRow, item_id)
            return row.to_domain() if row else None

    async def get_all(self) -> list[CatalogItem]:
        async with self._db.session() as session:
            result = await session.execute(
                select(CatalogItemRow).order_by(CatalogItemRow.id),
            )
            return [row.to_domain() for row in result.scalars().all()]

    async def exists(self, item_id: int) -> bool:
        async with self._db.session() as session:
            result = await session.execute(
                select(exists().where(CatalogItemRow.id == item_id)),
            )
            return bool(result.scalar())

    async def insert(self, item: CatalogItem) -> CatalogItem:
        async with self._db.session() as session:
            row = CatalogItemRow(
                title=item.title,
                author=item.author,
                isbn=item.isbn,
                price=item.price,
                stock=item.stock,
                year=item.year,
            )
            session.add(row)
            await session.commit()
            logger.debug(
                f"Inserted catalog item {row.id}", extra={"item_id": row.id},
            )
            return item.with_id(row.id)

    async def update_full(self, item: CatalogItem) -> bool:
        async with self._db.session() as session:
            result = await session.execute(
                update(CatalogItemRow)
                .where(CatalogItemRow.id == item.id)
                .values(
                    title=item.title,
                    author=item.author,
                    isbn=item.isbn,
                    price=item.price,
                    stock=item.stock,
                    year=item.year,
                ),
            )
            await session.commit()
            return result.rowcount > 0

    async def delete_by_id(self, item_id: int) -> bool:
        async with self._db.session() as session:
            result = await session.execute(
                delete(CatalogItemRow).where(CatalogItemRow.id == item_id),
            )
            await session.commit()
            return result.rowcount > 0

    async def query_page(
        self, offset: int, size: int,
    ) -> tuple[list[CatalogItem], int]:
        total = func.count().over().label("total")
        async with self._db.session() as session:
            result = await session.execute(
                select(CatalogItemRow, total)
                .order_by(CatalogItemRow.id)
                .offset(offset)
                .limit(size),
            )
            rows = result.all()
            if rows:
                return [row.to_domain() for row, _ in rows], rows[0].total
            if offset == 0:
                return [], 0
            # Past the last page: no row carries the window count
            count = await session.execute(
                select(func.count()).select_from(CatalogItemRow),
            )
            return [], count.scalar_one()
