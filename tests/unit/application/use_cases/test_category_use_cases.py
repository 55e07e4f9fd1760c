"""
Unit tests for CategoryUseCases.
"""

import pytest

from app.domain.models.base import ConflictError, DatabaseError, EntityNotFoundError, ValidationError
from app.application.use_cases.category_use_cases import CategoryUseCases


class TestCategoryUseCases:
    """Test cases for categories."""

    @pytest.mark.asyncio
    async def test_create(self, category_repo):
        use_cases = CategoryUseCases(category_repo)

        category = await use_cases.create({"name": "Meetings", "color": "#10B981"})

        assert category["name"] == "Meetings"
        assert category["isActive"] is True

    @pytest.mark.asyncio
    async def test_create_requires_hex_color(self, category_repo):
        use_cases = CategoryUseCases(category_repo)

        with pytest.raises(ValidationError, match="Color is required"):
            await use_cases.create({"name": "Meetings"})
        with pytest.raises(ValidationError, match="hex format"):
            await use_cases.create({"name": "Meetings", "color": "green"})

    @pytest.mark.asyncio
    async def test_duplicate_name(self, category_repo):
        category_repo.add(name="Meetings")
        use_cases = CategoryUseCases(category_repo)

        with pytest.raises(ConflictError) as exc_info:
            await use_cases.create({"name": "Meetings", "color": "#000000"})
        assert exc_info.value.code == "DUPLICATE_NAME"

    @pytest.mark.asyncio
    async def test_create_failure(self, category_repo):
        category_repo.fail("create")
        use_cases = CategoryUseCases(category_repo)

        with pytest.raises(DatabaseError) as exc_info:
            await use_cases.create({"name": "Meetings", "color": "#000000"})
        assert exc_info.value.code == "CREATE_FAILED"

    @pytest.mark.asyncio
    async def test_update_whitelist_and_color(self, category_repo):
        category = category_repo.add(name="Dev")
        use_cases = CategoryUseCases(category_repo)

        result = await use_cases.update(category["id"], {"color": "#FFFFFF", "isActive": False})
        assert result["color"] == "#FFFFFF"
        assert result["isActive"] is True

        with pytest.raises(ValidationError):
            await use_cases.update(category["id"], {"color": "#FFF"})

    @pytest.mark.asyncio
    async def test_list_orders_by_name_and_hides_inactive(self, category_repo):
        category_repo.add(name="Support")
        category_repo.add(name="Admin")
        category_repo.add(name="Legacy", is_active=False)
        use_cases = CategoryUseCases(category_repo)

        active = await use_cases.list()
        everything = await use_cases.list(include_inactive=True)

        assert [c["name"] for c in active["data"]] == ["Admin", "Support"]
        assert everything["pagination"]["total"] == 3

    @pytest.mark.asyncio
    async def test_deactivate_and_activate(self, category_repo):
        category = category_repo.add(name="Dev")
        use_cases = CategoryUseCases(category_repo)

        assert await use_cases.deactivate(category["id"]) == {"message": "Category deactivated"}
        with pytest.raises(ValidationError) as exc_info:
            await use_cases.deactivate(category["id"])
        assert exc_info.value.code == "ALREADY_INACTIVE"

        restored = await use_cases.activate(category["id"])
        assert restored["isActive"] is True
        with pytest.raises(ValidationError) as exc_info:
            await use_cases.activate(category["id"])
        assert exc_info.value.code == "ALREADY_ACTIVE"

    @pytest.mark.asyncio
    async def test_missing_category(self, category_repo):
        use_cases = CategoryUseCases(category_repo)

        with pytest.raises(EntityNotFoundError):
            await use_cases.get_by_id("missing")
        with pytest.raises(EntityNotFoundError):
            await use_cases.deactivate("missing")
