#!/usr/bin/env python3
"""
Catalog seeding script: loads the standard equipment, ingredient and mood
sets into the SQL database. Tables that already hold rows are left alone.
"""
import sys
import logging
import argparse
from pathlib import Path

# Add backend to path
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

from sqlalchemy.orm import Session
from mixr.core.constants import EquipmentSubcategory as ES, IngredientSubcategory as IS
from mixr.db.session import SessionLocal, engine, init_db
from mixr.db.models import Base, EquipmentModel, IngredientModel, MoodModel

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


EQUIPMENT = [
    (ES.ESSENTIAL, "Cocktail shaker", "🍸"),
    (ES.ESSENTIAL, "Jigger (measuring tool)", "📏"),
    (ES.ESSENTIAL, "Bar spoon", "🥄"),
    (ES.ESSENTIAL, "Strainer", "🔍"),
    (ES.ESSENTIAL, "Muddler", "🔨"),
    (ES.GLASSWARE, "Rocks glass (old fashioned)", "🥃"),
    (ES.GLASSWARE, "Highball glass", "🍹"),
    (ES.GLASSWARE, "Martini glass", "🍸"),
    (ES.GLASSWARE, "Coupe glass", "🥂"),
    (ES.GLASSWARE, "Wine glass", "🍷"),
    (ES.GLASSWARE, "Shot glass", "🥃"),
    (ES.GLASSWARE, "Beer mug", "🍺"),
    (ES.GLASSWARE, "Champagne flute", "🥂"),
    (ES.GARNISH, "Sharp knife", "🔪"),
    (ES.GARNISH, "Cutting board", "📋"),
    (ES.GARNISH, "Vegetable peeler", "🥕"),
    (ES.GARNISH, "Cocktail picks", "🗡️"),
    (ES.GARNISH, "Zester/grater", "🧀"),
    (ES.ADVANCED, "Fine mesh strainer", "🔍"),
    (ES.ADVANCED, "Citrus juicer", "🍋"),
    (ES.ADVANCED, "Mortar and pestle", "🥣"),
    (ES.ADVANCED, "Ice crusher", "🧊"),
    (ES.ADVANCED, "Bottle opener", "🍾"),
    (ES.ADVANCED, "Corkscrew", "🍷"),
    (ES.ADVANCED, "Mixing glass", "🥃"),
    (ES.ADVANCED, "Bar towel", "🧻"),
]

INGREDIENTS = {
    IS.SPIRIT: [
        ("Vodka", "🍸"), ("Gin", "🍸"), ("Rum (White)", "🥃"), ("Rum (Dark)", "🥃"),
        ("Rum (Spiced)", "🥃"), ("Whiskey", "🥃"), ("Bourbon", "🥃"), ("Scotch", "🥃"),
        ("Tequila (Blanco)", "🍹"), ("Tequila (Reposado)", "🍹"), ("Brandy", "🥃"),
        ("Cognac", "🥃"), ("Mezcal", "🍹"), ("Rye Whiskey", "🥃"),
    ],
    IS.WINE: [
        ("White Wine", "🍷"), ("Red Wine", "🍷"), ("Rosé Wine", "🍷"), ("Champagne", "🥂"),
        ("Prosecco", "🥂"), ("Sparkling Wine", "🥂"), ("Port Wine", "🍷"), ("Sherry", "🍷"),
        ("Vermouth (Dry)", "🍷"), ("Vermouth (Sweet)", "🍷"),
    ],
    IS.OTHER_ALCOHOL: [
        ("Beer (Light)", "🍺"), ("Beer (IPA)", "🍺"), ("Beer (Stout)", "🍺"), ("Sake", "🍶"),
        ("Absinthe", "🍸"), ("Amaretto", "🥃"), ("Baileys", "🥃"), ("Kahlúa", "🥃"),
        ("Grand Marnier", "🥃"), ("Cointreau", "🥃"), ("Triple Sec", "🥃"), ("Sambuca", "🥃"),
        ("Jägermeister", "🥃"),
    ],
    IS.FRUIT: [
        ("Lemon", "🍋"), ("Lime", "🍋"), ("Orange", "🍊"), ("Grapefruit", "🍊"),
        ("Cranberry", "🫐"), ("Pineapple", "🍍"), ("Apple", "🍎"), ("Pear", "🍐"),
        ("Strawberry", "🍓"), ("Blackberry", "🫐"), ("Raspberry", "🫐"), ("Blueberry", "🫐"),
        ("Cherry", "🍒"), ("Peach", "🍑"), ("Watermelon", "🍉"), ("Mango", "🥭"),
        ("Coconut", "🥥"),
    ],
    IS.SPICE: [
        ("Mint", "🌿"), ("Basil", "🌿"), ("Rosemary", "🌿"), ("Thyme", "🌿"),
        ("Cilantro", "🌿"), ("Cinnamon", "🌰"), ("Nutmeg", "🌰"), ("Vanilla", "🌰"),
        ("Ginger", "🫚"), ("Cardamom", "🌰"), ("Star Anise", "⭐"), ("Cloves", "🌰"),
        ("Black Pepper", "🌰"), ("Salt", "🧂"), ("Sugar", "🍬"),
    ],
    IS.OTHER: [
        ("Simple Syrup", "🍯"), ("Grenadine", "🍷"), ("Angostura Bitters", "💧"),
        ("Orange Bitters", "💧"), ("Worcestershire Sauce", "🧴"), ("Tabasco", "🌶️"),
        ("Tomato Juice", "🍅"), ("Cranberry Juice", "🧃"), ("Orange Juice", "🧃"),
        ("Apple Juice", "🧃"), ("Pineapple Juice", "🧃"), ("Ginger Beer", "🍺"),
        ("Club Soda", "💧"), ("Tonic Water", "💧"), ("Sprite/7UP", "🥤"), ("Cola", "🥤"),
        ("Ice", "🧊"), ("Honey", "🍯"), ("Maple Syrup", "🍯"), ("Agave Nectar", "🍯"),
        ("Egg White", "🥚"), ("Heavy Cream", "🥛"),
    ],
}

MOODS = [
    ("😊", "Happy", "Bright, refreshing cocktails perfect for celebrations",
     "Mojito, Piña Colada, Daiquiri", "happy.jpg"),
    ("🧐", "Serious", "Strong, sophisticated drinks for focused moments",
     "Manhattan, Old Fashioned, Whiskey Neat", "serious.jpg"),
    ("🎉", "Lighthearted", "Fun, colorful cocktails that bring smiles",
     "Cosmopolitan, Sex on the Beach, Blue Hawaiian", "lighthearted.jpg"),
    ("😤", "Tense", "Calming, smooth drinks to help you unwind",
     "Whiskey Sour, Dark 'n' Stormy, Negroni", "tense.jpg"),
    ("💕", "Romantic", "Elegant, intimate cocktails perfect for two",
     "French 75, Champagne Cocktail, Rose Martini", "romantic.jpg"),
    ("🌟", "Adventurous", "Bold, experimental drinks with unique flavors",
     "Mezcal Margarita, Smoky Manhattan, Spiced Rum Punch", "adventurous.jpg"),
    ("📸", "Nostalgic", "Classic cocktails with timeless appeal",
     "Mint Julep, Sidecar, Aviation", "nostalgic.jpg"),
    ("⚡", "Energetic", "Caffeinated or stimulating drinks for energy",
     "Espresso Martini, Irish Coffee, Red Bull Cocktail", "energetic.jpg"),
]


def seed_equipment(db: Session) -> int:
    if db.query(EquipmentModel).first():
        logger.info("Equipment already seeded, skipping")
        return 0
    db.add_all([
        EquipmentModel(subcategory=subcategory, name=name, icon=icon)
        for subcategory, name, icon in EQUIPMENT
    ])
    return len(EQUIPMENT)


def seed_ingredients(db: Session) -> int:
    if db.query(IngredientModel).first():
        logger.info("Ingredients already seeded, skipping")
        return 0
    rows = [
        IngredientModel(subcategory=subcategory, name=name, icon=icon)
        for subcategory, items in INGREDIENTS.items()
        for name, icon in items
    ]
    db.add_all(rows)
    return len(rows)


def seed_moods(db: Session) -> int:
    if db.query(MoodModel).first():
        logger.info("Moods already seeded, skipping")
        return 0
    db.add_all([
        MoodModel(
            emoji=emoji,
            name=name,
            description=description,
            example_drinks=example_drinks,
            image_name=image_name
        )
        for emoji, name, description, example_drinks, image_name in MOODS
    ])
    return len(MOODS)


def seed_catalog(db: Session) -> dict:
    """Seed every empty catalog table in one transaction."""
    counts = {
        "equipment": seed_equipment(db),
        "ingredients": seed_ingredients(db),
        "moods": seed_moods(db),
    }
    db.commit()
    return counts


def main(reset: bool = False):
    if reset:
        logger.info("Resetting SQL Database...")
        Base.metadata.drop_all(bind=engine)

    init_db()

    db = SessionLocal()
    try:
        counts = seed_catalog(db)
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()

    for table, count in counts.items():
        logger.info(f"Seeded {count} {table}")
    logger.info("Catalog seeding complete")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the MIXR catalog")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    args = parser.parse_args()

    main(reset=args.reset)
