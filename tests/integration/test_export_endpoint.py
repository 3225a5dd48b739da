"""Integration tests for the /export download endpoint."""

from __future__ import annotations

from fastapi import status


def test_export_returns_text_attachment(client, load_answer):
    response = client.post("/export", json={"answer": load_answer("current_meal_plan.json")})

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/plain")
    assert (
        response.headers["content-disposition"]
        == 'attachment; filename="your-new-meal-plan.txt"'
    )
    assert "Chicken Breast" in response.text
    assert "Daily Meal Ideas:" in response.text


def test_export_legacy_plan_filename(client, load_answer):
    response = client.post("/export", json={"answer": load_answer("legacy_meal_plan.json")})

    assert 'filename="your-meal-plan.txt"' in response.headers["content-disposition"]
    assert "Estimated Total Cost: 49.9 kr" in response.text


def test_export_prose_answer(client):
    response = client.post("/export", json={"answer": "Eat more vegetables."})

    assert 'filename="ai-response.txt"' in response.headers["content-disposition"]
    assert response.text.endswith("Eat more vegetables.\n")
