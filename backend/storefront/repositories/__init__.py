"""Repository package exposing persistence-layer access for the user store."""

from __future__ import annotations

from storefront.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
)
from storefront.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate_select",
    "apply_sorting",
    "UserRepository",
]
