"""Tests for saved recipes: dedup, order, search and tags"""

import pytest

from models.recipe import RecipeAnalysis
from services.errors import AlreadySaved
from storage.local_storage import SAVED_RECIPES_KEY
from storage.recipe_store import RecipeStore


def make_recipe(name, ingredients=("Яйца - 3 шт",), tags=()):
    return RecipeAnalysis(
        dish_name=name,
        ingredients=list(ingredients),
        instructions=[{"step": 1, "title": "Готовить", "description": "..."}],
        tags=list(tags),
    )


class TestRecipeStore:

    @pytest.fixture
    def store(self, storage):
        return RecipeStore(storage)

    def test_save_assigns_id_and_timestamp(self, store):
        saved = store.save(make_recipe("Омлет"))
        assert saved.id
        assert saved.saved_at is not None
        assert store.get(saved.id) == saved

    def test_newest_first(self, store):
        store.save(make_recipe("Первый"))
        store.save(make_recipe("Второй"))
        assert [recipe.dish_name for recipe in store.list()] == ["Второй", "Первый"]

    def test_duplicate_is_rejected(self, store):
        """Test same name and same ingredients is a duplicate"""
        first = store.save(make_recipe("Омлет"))
        with pytest.raises(AlreadySaved) as exc_info:
            store.save(make_recipe("Омлет"))
        assert exc_info.value.existing.id == first.id
        assert exc_info.value.message == "Этот рецепт уже сохранен"
        assert len(store.list()) == 1

    def test_different_ingredients_are_not_duplicates(self, store):
        store.save(make_recipe("Омлет"))
        store.save(make_recipe("Омлет", ingredients=("Яйца - 2 шт",)))
        store.save(make_recipe("Омлет", ingredients=("Молоко - 50 г", "Яйца - 3 шт")))
        assert len(store.list()) == 3

    def test_is_saved(self, store):
        recipe = make_recipe("Омлет")
        assert not store.is_saved(recipe)
        store.save(recipe)
        assert store.is_saved(recipe)

    def test_delete_is_idempotent(self, store):
        saved = store.save(make_recipe("Омлет"))
        assert store.delete(saved.id)
        assert not store.delete(saved.id)
        assert not store.delete("unknown")
        assert store.list() == []

    def test_persisted_in_camel_case(self, store, storage):
        saved = store.save(make_recipe("Омлет"))
        raw = storage.get_item(SAVED_RECIPES_KEY)
        assert raw[0]["dishName"] == "Омлет"
        assert raw[0]["id"] == saved.id
        assert isinstance(raw[0]["savedAt"], str)

    def test_survives_reload(self, store, storage):
        saved = store.save(make_recipe("Омлет", tags=["завтрак"]))
        reloaded = RecipeStore(storage).get(saved.id)
        assert reloaded.dish_name == "Омлет"
        assert reloaded.tags == ["завтрак"]
        assert reloaded.saved_at == saved.saved_at

    @pytest.mark.parametrize("value", ["not a list", [{"dishName": 5}], {"a": 1}])
    def test_corrupt_collection_reads_as_empty(self, store, storage, value):
        storage.set_item(SAVED_RECIPES_KEY, value)
        assert store.list() == []


class TestSearch:

    @pytest.fixture
    def store(self, storage):
        store = RecipeStore(storage)
        store.save(make_recipe("Куриный суп", tags=["курица", "суп"]))
        store.save(make_recipe("Омлет", tags=["яйца", "завтрак"]))
        store.save(make_recipe("Блины", tags=["завтрак", "выпечка"]))
        return store

    def test_empty_query_returns_all(self, store):
        assert len(store.search("")) == 3
        assert len(store.search("   ")) == 3

    def test_name_substring_case_insensitive(self, store):
        assert [recipe.dish_name for recipe in store.search("СУП")] == ["Куриный суп"]

    def test_tag_with_hash(self, store):
        """Test a leading # is ignored when matching tags"""
        assert [recipe.dish_name for recipe in store.search("#завтрак")] == ["Блины", "Омлет"]

    def test_tag_substring(self, store):
        assert [recipe.dish_name for recipe in store.search("кур")] == ["Куриный суп"]

    def test_no_match(self, store):
        assert store.search("пицца") == []


class TestPopularTags:

    def test_ranked_by_count(self, storage):
        store = RecipeStore(storage)
        store.save(make_recipe("A", tags=["суп", "обед"]))
        store.save(make_recipe("B", tags=["завтрак", "обед"]))
        store.save(make_recipe("C", tags=["завтрак", "обед"]))
        assert store.popular_tags() == ["обед", "завтрак", "суп"]

    def test_limit(self, storage):
        store = RecipeStore(storage)
        store.save(make_recipe("A", tags=[f"тег{i}" for i in range(15)]))
        assert len(store.popular_tags()) == 10
        assert len(store.popular_tags(3)) == 3

    def test_no_recipes(self, storage):
        assert RecipeStore(storage).popular_tags() == []

    def test_frequencies_across_recipes(self, storage):
        store = RecipeStore(storage)
        store.save(make_recipe("R1", tags=["a", "c"]))
        store.save(make_recipe("R2", tags=["a", "c", "b"]))
        store.save(make_recipe("R3", tags=["c"]))
        assert store.popular_tags(3) == ["c", "a", "b"]

    def test_ties_keep_first_seen_order(self, storage):
        store = RecipeStore(storage)
        store.save(make_recipe("A", tags=["x", "y"]))
        store.save(make_recipe("B", tags=["z", "y"]))
        assert store.popular_tags() == ["y", "z", "x"]

    def test_all_tied(self, storage):
        store = RecipeStore(storage)
        tags = [f"тег{i}" for i in range(15)]
        store.save(make_recipe("A", tags=tags))
        assert store.popular_tags(3) == tags[:3]
