"""Tests for the plain-text export of presentation modes."""

from __future__ import annotations

import pytest

from mealcart.answers import export_as_text, export_filename, render_response
from mealcart.answers.dispatcher import NO_DAILY_MEALS


def test_export_simple_grocery_list():
    mode = render_response(
        '{"grocery_list":[{"name":"Milk","quantity":"1","unit":"l","price":15}],"total_price":15}'
    )
    title = "Your AI-Generated Grocery List"

    text = export_as_text(mode)

    assert text == (
        f"{title}\n{'=' * len(title)}\n\n"
        "Grocery List:\n"
        "- Milk\n"
        "   Price: 15 kr\n"
        "   Quantity: 1 x l\n"
        "\n"
        "Totals:\n"
        "Total Price: 15 kr\n"
    )


def test_export_current_meal_plan_contains_every_item_field_once(load_answer):
    text = export_as_text(render_response(load_answer("current_meal_plan.json")))

    for expected in (
        "Chicken Breast",
        "Price: 149 kr",
        "Calories 110 kcal",
        "Protein 21g",
        "Carbs 0.5g",
        "Fat 2g",
        "Jasmine Rice",
        "Price: 32.9 kr",
        "Calories 350 kcal",
        "Protein 7g",
        "Carbs 78g",
        "Fat 0.6g",
    ):
        assert text.count(expected) == 1, expected


def test_export_current_meal_plan_sections_in_order(load_answer):
    text = export_as_text(render_response(load_answer("current_meal_plan.json")))

    assert text.startswith("Your AI-Generated Weekly Meal Plan & Grocery List\n")
    grocery = text.index("Grocery List:")
    meals = text.index("Daily Meal Ideas:")
    notes = text.index("Notes:")
    assert grocery < meals < notes
    assert "Monday:\n  Meal 1: Grilled chicken with rice\n" in text
    assert "  Snack: Greek yoghurt" in text
    assert "   Typical Volume: 900g" in text
    assert "   Brand: Kronfagel" in text
    assert "   Link: https://www.willys.se/produkt/kycklingfile-101" in text
    assert "Totals:" not in text


def test_export_legacy_plan_uses_estimated_total(load_answer):
    text = export_as_text(render_response(load_answer("legacy_meal_plan.json")))

    assert "Estimated Total Cost: 49.9 kr" in text
    assert "  Lunch: Lentil soup" in text
    assert "Stays well within the budget." in text


def test_export_includes_placeholders():
    mode = render_response('{"meal_plan": {"grocery_list": [{"item": "Oats"}]}}')

    assert NO_DAILY_MEALS in export_as_text(mode)


def test_export_error_with_suggestion(load_answer):
    text = export_as_text(render_response(load_answer("budget_error.json")))

    assert text.startswith("Unable to Generate Plan\n" + "=" * 23 + "\n\n")
    assert "The budget is too low for seven days of high-protein meals." in text
    assert "Suggestion: Increase your budget by 23.50 kr to meet your goal." in text


def test_export_error_keeps_zero_budget_increase():
    text = export_as_text(render_response('{"success": false, "message": "No", "budgetIncrease": 0}'))

    assert "Suggested budget increase: 0.00 kr" in text


def test_export_debug_view_contains_pretty_json():
    text = export_as_text(render_response('{"foo": "bar"}'))

    assert "Unknown Response Structure" in text
    assert '{\n  "foo": "bar"\n}' in text


def test_export_raw_text_and_empty():
    assert export_as_text(render_response("Buy milk.")).endswith("Buy milk.\n")
    assert export_as_text(render_response("")) == "No content received.\n"


@pytest.mark.parametrize(
    ("fixture", "filename"),
    [
        ("simple_grocery_list.json", "your-grocery-list.txt"),
        ("legacy_meal_plan.json", "your-meal-plan.txt"),
        ("current_meal_plan.json", "your-new-meal-plan.txt"),
        ("budget_error.json", "plan-error.txt"),
    ],
)
def test_export_filename_per_shape(load_answer, fixture, filename):
    assert export_filename(render_response(load_answer(fixture))) == filename


def test_export_filename_fallbacks():
    assert export_filename(render_response('{"foo": 1}')) == "unrecognized-response.txt"
    assert export_filename(render_response("hello")) == "ai-response.txt"
    assert export_filename(render_response("")) == "empty-response.txt"
    assert export_filename(render_response('{"meal_plan": {"grocery_list": [], "notes": "Rest"}}')) == "your-plan-notes.txt"
