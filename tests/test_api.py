"""HTTP surface tests with the assistant dependency overridden"""

import json
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_assistant
from app import app
from tests.conftest import OMELETTE_REPLY, OMELETTE_TEXT, reply_with


@pytest.fixture
def assistant(make_assistant):
    return make_assistant(reply_with(json.dumps(OMELETTE_REPLY, ensure_ascii=False)))


@pytest.fixture
def client(assistant):
    app.dependency_overrides[get_assistant] = lambda: assistant
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestRecipeRoutes:

    def test_analyze_and_save(self, client):
        response = client.post("/recipes/analyze", json={"text": OMELETTE_TEXT})
        assert response.status_code == 200
        data = response.json()
        assert data["recipe"]["dishName"] == "Омлет"
        assert data["recipe"]["nutritionPer100g"]["calories"] == 150
        assert data["saved"] is False

        saved = client.post("/recipes/current/save").json()
        assert saved["created"] is True
        again = client.post("/recipes/current/save").json()
        assert again["created"] is False
        assert again["notice"] == "Этот рецепт уже сохранен"

        recipes = client.get("/recipes/saved").json()
        assert [recipe["id"] for recipe in recipes] == [saved["recipe"]["id"]]
        assert client.get(f"/recipes/saved/{saved['recipe']['id']}").status_code == 200

    def test_analyze_empty_text(self, client):
        response = client.post("/recipes/analyze", json={"text": "   "})
        assert response.status_code == 400
        assert response.json()["detail"] == "Текст рецепта не может быть пустым"

    def test_analyze_without_key(self, client, assistant):
        assistant.llm.settings.openrouter_api_key = None
        response = client.post("/recipes/analyze", json={"text": OMELETTE_TEXT})
        assert response.status_code == 503

    def test_unknown_saved_recipe(self, client):
        assert client.get("/recipes/saved/nope").status_code == 404
        assert client.delete("/recipes/saved/nope").json()["removed"] is False

    def test_save_generated_out_of_range(self, client):
        assert client.post("/recipes/generated/0/save").status_code == 404

    def test_search_and_tags(self, client):
        client.post("/recipes/analyze", json={"text": OMELETTE_TEXT})
        client.post("/recipes/current/save")

        assert len(client.get("/recipes/saved", params={"q": "#завтрак"}).json()) == 1
        assert client.get("/recipes/saved", params={"q": "пицца"}).json() == []
        assert client.get("/recipes/tags/popular", params={"limit": 1}).json() == ["яйца"]


class TestShoppingCartRoutes:

    def test_add_toggle_remove(self, client):
        added = client.post("/shopping-cart/items", json={"ingredient": "Молоко"}).json()
        assert added["added"] is True
        item_id = added["item"]["id"]

        duplicate = client.post("/shopping-cart/items", json={"ingredient": "МОЛОКО"}).json()
        assert duplicate["added"] is False

        toggled = client.put(f"/shopping-cart/items/{item_id}/toggle-purchased").json()
        assert toggled["purchased"] is True
        assert client.get("/shopping-cart/").json()["purchased"][0]["id"] == item_id
        assert client.get("/shopping-cart/summary").json()["completion_percentage"] == 100.0

        assert client.delete(f"/shopping-cart/items/{item_id}").json()["removed"] is True
        assert client.put(f"/shopping-cart/items/{item_id}/toggle-purchased").status_code == 404

    def test_bulk_and_from_current(self, client):
        bulk = client.post("/shopping-cart/items/bulk", json={"ingredients": ["Соль", "соль", "Перец"]}).json()
        assert bulk["addedCount"] == 2

        assert client.post("/shopping-cart/from-current").status_code == 404
        client.post("/recipes/analyze", json={"text": OMELETTE_TEXT})
        assert client.post("/shopping-cart/from-current").json()["addedCount"] == 2

        client.delete("/shopping-cart/clear")
        assert client.get("/shopping-cart/summary").json()["total_items"] == 0

    def test_from_saved_single_ingredient(self, client):
        client.post("/recipes/analyze", json={"text": OMELETTE_TEXT})
        recipe_id = client.post("/recipes/current/save").json()["recipe"]["id"]

        response = client.post(f"/shopping-cart/from-saved/{recipe_id}", params={"ingredient_index": 0})
        assert response.json()["item"]["name"] == "Яйца - 3 шт"
        assert client.post(f"/shopping-cart/from-saved/{recipe_id}").json()["addedCount"] == 1


class TestHostAndPreferences:

    def test_launch_then_analyze_forwarded(self, client):
        launch = client.post("/host/launch", json={
            "url": "https://app.example/?start=" + quote(OMELETTE_TEXT),
            "initData": {"user": {"id": 42}},
        }).json()
        assert launch["loaded"] is True
        assert launch["text"] == OMELETTE_TEXT
        assert launch["user"] == {"id": 42}

        assert client.post("/recipes/analyze", json={}).status_code == 200
        alerts = client.get("/host/alerts").json()
        assert alerts["alerts"][0].startswith("Текст рецепта загружен!")
        assert alerts["vibrations"] == 1
        assert client.get("/host/alerts").json() == {"alerts": [], "vibrations": 0}

    def test_theme(self, client):
        assert client.get("/preferences/theme").json() == {"theme": "light"}
        assert client.put("/preferences/theme", json={"theme": "dark"}).json() == {"theme": "dark"}
        assert client.get("/preferences/theme").json() == {"theme": "dark"}
        assert client.put("/preferences/theme", json={"theme": "purple"}).status_code == 422

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
