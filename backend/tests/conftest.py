"""
Shared fixtures: an in-memory database with a small catalog, a fake
generation client and a TestClient wired to both.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mixr.api.dependencies import get_generation_client
from mixr.core.config import Settings, get_settings
from mixr.core.constants import EquipmentSubcategory, IngredientSubcategory
from mixr.db.models import Base, EquipmentModel, IngredientModel, MoodModel
from mixr.db.session import get_db, make_engine
from mixr.main import app


SUNRISE_RESPONSE = """Here is your cocktail:
```json
{
  "name": "Sunrise",
  "description": "A bright vodka sour.",
  "ingredients": [
    {"name": "Vodka", "amount": "2 oz"},
    {"name": "Fresh Lime", "amount": "1 oz"}
  ],
  "steps": ["Add ice to the shaker", "Pour in vodka and lime", "Shake and strain"],
  "equipmentUsed": ["Shaker"]
}
```
Enjoy!"""


class FakeLLMClient:
    """Stands in for LLMClient; records prompts and replies with canned text."""

    def __init__(self, response: str = SUNRISE_RESPONSE, error: Exception = None):
        self.response = response
        self.error = error
        self.calls = []

    async def complete(self, prompt, system=None, model=None):
        self.calls.append({"prompt": prompt, "system": system, "model": model})
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog(db):
    """Seed a small catalog and return its rows keyed by name."""
    equipment = [
        EquipmentModel(subcategory=EquipmentSubcategory.ESSENTIAL, name="Shaker", icon="🍸"),
        EquipmentModel(subcategory=EquipmentSubcategory.ESSENTIAL, name="Jigger", icon="📏"),
        EquipmentModel(subcategory=EquipmentSubcategory.GLASSWARE, name="Highball glass", icon="🍹"),
    ]
    ingredients = [
        IngredientModel(subcategory=IngredientSubcategory.SPIRIT, name="Vodka", icon="🍸"),
        IngredientModel(subcategory=IngredientSubcategory.OTHER, name="Lime Juice", icon="🧃"),
        IngredientModel(subcategory=IngredientSubcategory.FRUIT, name="Lime", icon="🍋"),
        IngredientModel(subcategory=IngredientSubcategory.OTHER, name="Simple Syrup", icon="🍯"),
        IngredientModel(subcategory=IngredientSubcategory.SPIRIT, name="Tequila", icon="🍹"),
    ]
    moods = [
        MoodModel(emoji="😊", name="Happy", description="Bright, refreshing cocktails",
                  example_drinks="Mojito, Daiquiri"),
        MoodModel(emoji="🧐", name="Serious", description="Strong, sophisticated drinks",
                  example_drinks="Manhattan, Old Fashioned"),
        MoodModel(emoji="💕", name="Romantic", description="Elegant cocktails for two",
                  example_drinks="French 75"),
    ]
    db.add_all(equipment + ingredients + moods)
    db.commit()

    return {
        "equipment": {row.name: row for row in equipment},
        "ingredients": {row.name: row for row in ingredients},
        "moods": {row.name: row for row in moods},
    }


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


@pytest.fixture
def client(session_factory, fake_llm):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_generation_client] = lambda: fake_llm
    app.dependency_overrides[get_settings] = lambda: Settings(auth_disabled=True)

    yield TestClient(app)

    app.dependency_overrides.clear()
