import pytest

from errors import SaveFailed, ValidationFailed
from tests.helpers import create_decision


class TestCategoryService:
    """Tests for CategoryService."""

    def test_create_category_simple(self, services):
        """Test creating a category with name, icon and color."""
        category = services.categories.create("Housing", "house", "4A90E2")

        assert category.id
        assert category.name == "Housing"
        assert category.icon_name == "house"
        assert category.accent_color == "4A90E2"

    def test_create_category_defaults(self, services):
        """Test creating a category without icon or color."""
        category = services.categories.create("Utilities")

        assert category.icon_name == "folder"
        assert category.accent_color == "4A90E2"

    def test_create_assigns_unique_ids(self, services):
        """Test that every category gets its own identifier."""
        first = services.categories.create("Travel")
        second = services.categories.create("Travel")

        assert first.id != second.id

    def test_duplicate_names_are_allowed(self, services):
        """Test that category names are not unique."""
        services.categories.create("Duplicate")
        services.categories.create("Duplicate")

        names = [c.name for c in services.categories.find_all()]
        assert names == ["Duplicate", "Duplicate"]

    def test_create_empty_name_raises_validation_error(self, services):
        """Test that an empty name is rejected before any write."""
        with pytest.raises(ValidationFailed, match="Category name cannot be empty"):
            services.categories.create("")

        assert services.categories.find_all() == []

    def test_create_name_too_long_raises_validation_error(self, services):
        """Test that names over 50 characters are rejected."""
        with pytest.raises(ValidationFailed, match="50 characters or less"):
            services.categories.create("x" * 51)

        assert services.categories.find_all() == []

    def test_create_name_at_limit(self, services):
        """Test that a 50 character name is accepted."""
        category = services.categories.create("x" * 50)

        assert services.categories.find(category.id).name == "x" * 50

    def test_find_category_by_id(self, services):
        """Test finding a category by ID."""
        created = services.categories.create("Transport", "car", "FF9500")

        found = services.categories.find(created.id)

        assert found == created

    def test_find_category_by_id_not_found(self, services):
        """Test finding a non-existent category returns None."""
        assert services.categories.find("missing") is None

    def test_find_by_name(self, services):
        """Test finding a category by name."""
        services.categories.create("Entertainment")

        found = services.categories.find_by_name("Entertainment")

        assert found is not None
        assert found.name == "Entertainment"

    def test_find_by_name_case_sensitive(self, services):
        """Test that category name lookup is case-sensitive."""
        services.categories.create("Shopping")

        assert services.categories.find_by_name("shopping") is None

    def test_find_all_empty(self, services):
        """Test finding all categories when database is empty."""
        categories = services.categories.find_all()

        assert categories == []
        assert isinstance(categories, list)

    def test_find_all_ordered_by_name(self, services):
        """Test finding all categories returns them ordered by name."""
        services.categories.create("Zebra")
        services.categories.create("Alpha")
        services.categories.create("Beta")

        categories = services.categories.find_all()

        assert [c.name for c in categories] == ["Alpha", "Beta", "Zebra"]

    def test_update_category(self, services):
        """Test updating every field of a category."""
        category = services.categories.create("OldName", "folder", "000000")

        updated = services.categories.update(category.id, "NewName", "star", "FFFFFF")

        assert updated.id == category.id
        found = services.categories.find(category.id)
        assert found.name == "NewName"
        assert found.icon_name == "star"
        assert found.accent_color == "FFFFFF"

    def test_update_invalid_name_leaves_category_unchanged(self, services):
        """Test that a failed validation does not touch the stored category."""
        category = services.categories.create("Keep")

        with pytest.raises(ValidationFailed):
            services.categories.update(category.id, "")

        assert services.categories.find(category.id).name == "Keep"

    def test_update_nonexistent_category_raises_error(self, services):
        """Test that updating a non-existent category raises an error."""
        with pytest.raises(SaveFailed, match="Category with ID missing not found"):
            services.categories.update("missing", "Name")

    def test_delete_category(self, services):
        """Test deleting a category."""
        category = services.categories.create("ToDelete")

        assert services.categories.delete(category.id) is True
        assert services.categories.find(category.id) is None

    def test_delete_nonexistent_category(self, services):
        """Test deleting a non-existent category returns False."""
        assert services.categories.delete("missing") is False

    def test_delete_does_not_affect_other_categories(self, services):
        """Test that deleting one category doesn't affect others."""
        services.categories.create("Keep1")
        doomed = services.categories.create("Delete")
        services.categories.create("Keep2")

        services.categories.delete(doomed.id)

        names = {c.name for c in services.categories.find_all()}
        assert names == {"Keep1", "Keep2"}

    def test_delete_detaches_decisions(self, services):
        """Test that deleting a category keeps its decisions, uncategorized."""
        housing = services.categories.create("Housing")
        decision = create_decision(services, title="Move", category=housing)

        services.categories.delete(housing.id)

        found = services.decisions.find(decision.id)
        assert found is not None
        assert found.category is None
        assert found.category_id is None

    def test_delete_only_detaches_own_decisions(self, services):
        """Test that decisions in other categories keep their category."""
        housing = services.categories.create("Housing")
        food = services.categories.create("Food")
        create_decision(services, title="Move", category=housing)
        kept = create_decision(services, title="Groceries", category=food)

        services.categories.delete(housing.id)

        assert services.decisions.find(kept.id).category.name == "Food"

    def test_count_decisions(self, services):
        """Test counting decisions per category."""
        housing = services.categories.create("Housing")
        create_decision(services, title="Move", category=housing)
        create_decision(services, title="Renovate", category=housing)
        create_decision(services, title="Other")

        assert services.categories.count_decisions(housing.id) == 2

    def test_create_category_with_special_characters(self, services):
        """Test creating category with special characters."""
        category = services.categories.create("Food & Drink")

        assert services.categories.find(category.id).name == "Food & Drink"
