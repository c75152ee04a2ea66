"""
Tests for JSON extraction and recipe validation.
"""
import pytest

from mixr.core.exceptions import ParseErrorCause, RecipeParseError
from mixr.utils.json_parser import extract_json, parse_recipe_response


RECIPE_JSON = (
    '{"name": "Mojito", "description": "Minty.", '
    '"ingredients": [{"name": "Rum (White)", "amount": "2 oz"}], '
    '"steps": ["Muddle mint", "Add rum"], "equipmentUsed": ["Muddler"]}'
)


class TestExtractJson:

    def test_raw_json_is_returned_trimmed(self):
        assert extract_json(f"  {RECIPE_JSON}\n") == RECIPE_JSON

    def test_json_tagged_fence(self):
        assert extract_json(f"```json\n{RECIPE_JSON}\n```") == RECIPE_JSON

    def test_bare_fence(self):
        assert extract_json(f"```\n{RECIPE_JSON}\n```") == RECIPE_JSON

    def test_first_fence_wins(self):
        raw = '```json\n{"a": 1}\n```\nand also\n```json\n{"b": 2}\n```'
        assert extract_json(raw) == '{"a": 1}'

    def test_prose_wrapped_object(self):
        raw = f"Sure! Here is a recipe: {RECIPE_JSON} Let me know if you like it."
        assert extract_json(raw) == RECIPE_JSON

    def test_no_json_returns_input(self):
        assert extract_json("no json here") == "no json here"
        assert extract_json("  no json here  ") == "no json here"


class TestParseRecipeResponse:

    def test_valid_recipe(self):
        recipe = parse_recipe_response(RECIPE_JSON)

        assert recipe.name == "Mojito"
        assert recipe.description == "Minty."
        assert recipe.ingredients[0].name == "Rum (White)"
        assert recipe.ingredients[0].amount == "2 oz"
        assert recipe.steps == ("Muddle mint", "Add rum")
        assert recipe.equipment_used == ("Muddler",)

    def test_fenced_recipe(self):
        recipe = parse_recipe_response(f"Here you go:\n```json\n{RECIPE_JSON}\n```")
        assert recipe.name == "Mojito"

    def test_missing_ingredients_names_field(self):
        with pytest.raises(RecipeParseError) as exc_info:
            parse_recipe_response('{"name":"Mojito"}')

        assert exc_info.value.cause == ParseErrorCause.MISSING_INGREDIENTS
        assert "ingredients" in exc_info.value.message

    def test_empty_object_names_name_field(self):
        with pytest.raises(RecipeParseError) as exc_info:
            parse_recipe_response("{}")

        assert exc_info.value.cause == ParseErrorCause.MISSING_NAME
        assert '"name"' in exc_info.value.message

    def test_missing_steps(self):
        with pytest.raises(RecipeParseError) as exc_info:
            parse_recipe_response('{"name": "X", "ingredients": [{"name": "Gin", "amount": "1 oz"}], "steps": []}')

        assert exc_info.value.cause == ParseErrorCause.MISSING_STEPS
        assert "steps" in exc_info.value.message

    def test_invalid_json(self):
        with pytest.raises(RecipeParseError) as exc_info:
            parse_recipe_response('{"name": "Broken",')

        assert exc_info.value.cause == ParseErrorCause.INVALID_JSON
        assert exc_info.value.message.startswith("Failed to parse recipe JSON")

    def test_non_object_top_level_is_missing_name(self):
        with pytest.raises(RecipeParseError) as exc_info:
            parse_recipe_response('["Mojito"]')

        assert exc_info.value.cause == ParseErrorCause.MISSING_NAME

    def test_unusable_ingredient_entries_are_dropped(self, caplog):
        content = (
            '{"name": "X", "ingredients": [{"name": "Vodka", "amount": "2 oz"}, '
            '{"amount": "1 oz"}, 7, "1 dash bitters"], "steps": ["Stir"]}'
        )
        with caplog.at_level("INFO", logger="mixr.utils.json_parser"):
            recipe = parse_recipe_response(content)

        assert [(i.name, i.amount) for i in recipe.ingredients] == [
            ("Vodka", "2 oz"), ("1 dash bitters", "")
        ]
        assert "Dropping 2 ingredient entries" in caplog.text

    def test_no_usable_ingredient_is_missing_ingredients(self):
        content = '{"name": "X", "ingredients": [{"amount": "1 oz"}, null], "steps": ["Stir"]}'
        with pytest.raises(RecipeParseError) as exc_info:
            parse_recipe_response(content)

        assert exc_info.value.cause == ParseErrorCause.MISSING_INGREDIENTS

    def test_defaults_for_optional_fields(self):
        recipe = parse_recipe_response(
            '{"name": "Gin Neat", "ingredients": [{"name": "Gin"}], "steps": ["Pour"]}'
        )

        assert recipe.description == ""
        assert recipe.equipment_used == ()
        assert recipe.ingredients[0].amount == ""

    def test_values_are_stringified(self):
        recipe = parse_recipe_response(
            '{"name": "X", "ingredients": [{"name": "Gin", "amount": 2}], '
            '"steps": [1, "Stir"], "equipmentUsed": ["Shaker", 3, null]}'
        )

        assert recipe.ingredients[0].amount == "2"
        assert recipe.steps == ("1", "Stir")
        assert recipe.equipment_used == ("Shaker",)

    def test_parsing_is_idempotent(self):
        assert parse_recipe_response(RECIPE_JSON) == parse_recipe_response(RECIPE_JSON)

    def test_recipe_is_immutable(self):
        recipe = parse_recipe_response(RECIPE_JSON)
        with pytest.raises(Exception):
            recipe.name = "Other"

    def test_object_steps_use_their_instruction(self):
        recipe = parse_recipe_response(
            '{"name": "X", "ingredients": [{"name": "Gin"}], '
            '"steps": [{"step": 1, "instruction": "Stir"}, {"text": "Strain"}, {"n": 3}]}'
        )

        assert recipe.steps == ("Stir", "Strain", '{"n": 3}')

    def test_long_amount_is_truncated_and_logged(self, caplog):
        long_amount = "a" * 150
        with caplog.at_level("DEBUG", logger="mixr.utils.json_parser"):
            recipe = parse_recipe_response(
                '{"name": "X", "ingredients": [{"name": "Gin", "amount": "%s"}], "steps": ["Pour"]}'
                % long_amount
            )

        assert recipe.ingredients[0].amount == "a" * 100
        assert "Truncating amount of 150 chars" in caplog.text
