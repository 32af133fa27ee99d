"""Versioned artifact documents and their upgrade rules.

Stored program and nutrition documents carry a ``schema_version``.

Version 1 is the camelCase shape written by the earlier mobile app::

    {"weeksDuration": 8, "split": "...", "weeks": [{"weekNumber": 1, ...}]}
    {"calories": "2200", "mealSuggestions": "[...]", "macroBreakdown": {...}}

Version 2 is the current snake_case shape produced by ``to_dict``.

Reading a stored document always goes through ``upgrade_*_document``;
each step upgrades exactly one version and owns all defaulting for it.
"""

import json
import re
from typing import Any, Callable

PROGRAM_SCHEMA_VERSION = 2
NUTRITION_SCHEMA_VERSION = 2

_LEADING_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def _as_int(value: Any, default: int) -> int:
    """Coerce legacy numeric values ("3", "3-4", "90s", 2.0) to int."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(round(value))
    if isinstance(value, str):
        match = _LEADING_NUMBER.search(value)
        if match:
            return int(round(float(match.group())))
    return default


def _as_list(value: Any) -> list:
    """Coerce a legacy collection, possibly JSON-encoded, to a list."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return []
    return value if isinstance(value, list) else []


def _load(document: dict | str) -> dict:
    if isinstance(document, str):
        document = json.loads(document)
    if not isinstance(document, dict):
        raise ValueError(f"Artifact document must be an object, got {type(document).__name__}")
    return dict(document)


def _upgrade_exercise_v1(data: dict) -> dict:
    return {
        "name": str(data.get("name") or "Unknown"),
        "sets": _as_int(data.get("sets"), 3),
        "reps": str(data.get("reps", "")),
        "rest": _as_int(data.get("rest"), 60),
        "tempo": str(data.get("tempo") or ""),
        "notes": str(data.get("notes") or ""),
    }


def _upgrade_program_v1(document: dict) -> dict:
    weeks = []
    for index, week in enumerate(_as_list(document.get("weeks"))):
        if not isinstance(week, dict):
            continue
        workouts = []
        for workout in _as_list(week.get("workouts")):
            if not isinstance(workout, dict):
                continue
            workouts.append({
                "day": str(workout.get("day") or f"Day {len(workouts) + 1}"),
                "exercises": [
                    _upgrade_exercise_v1(ex)
                    for ex in _as_list(workout.get("exercises"))
                    if isinstance(ex, dict)
                ],
            })
        week_number = week.get("weekNumber", week.get("week"))
        weeks.append({
            "week_number": _as_int(week_number, index + 1),
            "phase": str(week.get("phase") or ""),
            "workouts": workouts,
        })

    return {
        "schema_version": 2,
        "split": str(document.get("split") or ""),
        "weeks_duration": _as_int(document.get("weeksDuration"), len(weeks)),
        "weeks": weeks,
        "exercises": [
            _upgrade_exercise_v1(ex)
            for ex in _as_list(document.get("exercises"))
            if isinstance(ex, dict)
        ],
    }


def _upgrade_meal_v1(data: dict) -> dict:
    return {
        "name": str(data.get("name") or "Meal"),
        "protein": _as_int(data.get("protein"), 0),
        "carbs": _as_int(data.get("carbs"), 0),
        "fats": _as_int(data.get("fats"), 0),
        "calories": _as_int(data.get("calories"), 0),
        "ingredients": [str(i) for i in _as_list(data.get("ingredients"))],
    }


def _upgrade_nutrition_v1(document: dict) -> dict:
    breakdown = document.get("macroBreakdown")
    macro_breakdown = None
    if isinstance(breakdown, dict):
        macro_breakdown = {
            "protein_percentage": _as_int(breakdown.get("proteinPercentage"), 0),
            "carbs_percentage": _as_int(breakdown.get("carbsPercentage"), 0),
            "fats_percentage": _as_int(breakdown.get("fatsPercentage"), 0),
        }

    return {
        "schema_version": 2,
        "calories": _as_int(document.get("calories"), 0),
        "protein": _as_int(document.get("protein"), 0),
        "carbohydrates": _as_int(document.get("carbohydrates"), 0),
        "fats": _as_int(document.get("fats"), 0),
        "meal_suggestions": [
            _upgrade_meal_v1(meal)
            for meal in _as_list(document.get("mealSuggestions"))
            if isinstance(meal, dict)
        ],
        "macro_breakdown": macro_breakdown,
        "notes": str(document.get("notes") or ""),
    }


_PROGRAM_UPGRADES: dict[int, Callable[[dict], dict]] = {1: _upgrade_program_v1}
_NUTRITION_UPGRADES: dict[int, Callable[[dict], dict]] = {1: _upgrade_nutrition_v1}


def _upgrade(
    document: dict | str,
    current: int,
    upgrades: dict[int, Callable[[dict], dict]],
) -> dict:
    document = _load(document)
    version = document.get("schema_version", 1)
    if not isinstance(version, int) or version < 1 or version > current:
        raise ValueError(f"Unsupported schema_version: {version!r}")

    while version < current:
        document = upgrades[version](document)
        version = document["schema_version"]

    return document


def upgrade_program_document(document: dict | str) -> dict:
    """Upgrade a stored program document to the current schema."""
    return _upgrade(document, PROGRAM_SCHEMA_VERSION, _PROGRAM_UPGRADES)


def upgrade_nutrition_document(document: dict | str) -> dict:
    """Upgrade a stored nutrition document to the current schema."""
    return _upgrade(document, NUTRITION_SCHEMA_VERSION, _NUTRITION_UPGRADES)
