"""ORM Models — SQLAlchemy declarative models for catalog and order tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - OrderRow is the aggregate root for OrderItemRow

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from launchpad.models.catalog_item import CatalogItemRow  # noqa: F401
from launchpad.models.order import OrderRow, OrderItemRow  # noqa: F401
