"""
Category use cases for the application layer.
Categories are never deleted, only deactivated.
"""

import logging
from typing import Any, Dict

from app.domain.models.base import ConflictError, DatabaseError, ValidationError
from app.domain.models.category import HEX_COLOR_PATTERN
from app.domain.repositories.category_repository import CategoryRepository
from app.domain.repositories.errors import RepositoryError, UniqueViolationError
from app.application.use_cases.base_use_case import BaseUseCase
from app.infrastructure.pagination import parse_pagination_params

logger = logging.getLogger(__name__)


class CategoryUseCases(BaseUseCase):
    """Use cases for time entry categories."""

    entity_name = "Category"
    UPDATABLE_FIELDS = ("name", "description", "color")

    def __init__(self, categories: CategoryRepository):
        self.categories = categories

    @staticmethod
    def _check_color(color: Any) -> None:
        if color is not None and not HEX_COLOR_PATTERN.match(str(color)):
            raise ValidationError("Color must be in hex format (#RRGGBB)", "color")

    async def list(self, include_inactive: bool = False, page: Any = None, limit: Any = None) -> Dict[str, Any]:
        """Categories ordered by name, active only unless include_inactive."""
        params = parse_pagination_params(page, limit)

        with self.storage_errors("Failed to retrieve categories"):
            rows, total = await self.categories.list(include_inactive, params.offset, params.limit)

        return self.to_page(rows, total, params)

    async def get_by_id(self, category_id: str) -> Dict[str, Any]:
        with self.storage_errors("Failed to retrieve category", category_id=category_id):
            category = await self.categories.find_by_id(category_id)

        if category is None:
            raise self.not_found(category_id)
        return self.to_output(category)

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if data.get("color") is None:
            raise ValidationError("Color is required", "color")
        self._check_color(data["color"])

        try:
            category = await self.categories.create({
                "name": data["name"],
                "description": data.get("description"),
                "color": data["color"],
            })
        except UniqueViolationError:
            raise ConflictError("A category with this name already exists", code="DUPLICATE_NAME")
        except RepositoryError as e:
            logger.error(f"Create category failed: {e.message}")
            raise DatabaseError("Failed to create category", code="CREATE_FAILED") from e

        return self.to_output(category)

    async def update(self, category_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        changes = self.whitelist(data, self.UPDATABLE_FIELDS)
        if not changes:
            return await self.get_by_id(category_id)
        self._check_color(changes.get("color"))

        try:
            category = await self.categories.update(category_id, self.to_columns(changes))
        except UniqueViolationError:
            raise ConflictError("A category with this name already exists", code="DUPLICATE_NAME")
        except RepositoryError as e:
            logger.error(f"Update category failed: {e.message}", extra={"category_id": category_id})
            raise DatabaseError("Update failed", code="UPDATE_FAILED") from e

        if category is None:
            raise self.not_found(category_id)
        return self.to_output(category)

    async def _set_active(self, category_id: str, active: bool) -> Dict[str, Any]:
        with self.storage_errors("Failed to retrieve category", category_id=category_id):
            category = await self.categories.find_by_id(category_id)
        if category is None:
            raise self.not_found(category_id)

        if bool(category.get("is_active")) == active:
            if active:
                raise ValidationError("Category is already active", code="ALREADY_ACTIVE")
            raise ValidationError("Category is already deactivated", code="ALREADY_INACTIVE")

        code = "ACTIVATE_FAILED" if active else "DEACTIVATE_FAILED"
        message = "Failed to activate category" if active else "Failed to deactivate category"
        with self.storage_errors(message, code=code, category_id=category_id):
            updated = await self.categories.update(category_id, self.to_columns({"isActive": active}))

        if updated is None:
            raise self.not_found(category_id)
        return self.to_output(updated)

    async def deactivate(self, category_id: str) -> Dict[str, str]:
        """Soft-delete a category. Entries keep referencing it."""
        await self._set_active(category_id, False)
        return {"message": "Category deactivated"}

    async def activate(self, category_id: str) -> Dict[str, Any]:
        return await self._set_active(category_id, True)
