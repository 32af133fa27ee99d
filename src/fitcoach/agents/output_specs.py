"""Structured output schemas for generation calls."""

# Exercise prescription, shared by program weeks and the flat exercise list
EXERCISE_SPEC = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "Exercise name"},
        "sets": {"type": "integer", "description": "Number of sets"},
        "reps": {
            "type": ["integer", "string"],
            "description": 'Reps per set, can be a range like "8-10"',
        },
        "rest": {"type": "integer", "description": "Rest time in seconds"},
        "tempo": {"type": "string", "description": 'Tempo format like "3-0-1-0"'},
        "notes": {"type": "string", "description": "Coaching cues, form tips or modifications"},
    },
    "required": ["name", "sets", "reps", "rest", "tempo", "notes"],
}

PROGRAM_SPEC = {
    "type": "object",
    "properties": {
        "weeks_duration": {"type": "integer", "description": "Total duration in weeks"},
        "split": {"type": "string", "description": "Training split, e.g. Upper/Lower"},
        "weeks": {
            "type": "array",
            "description": "One entry per week",
            "items": {
                "type": "object",
                "properties": {
                    "week_number": {"type": "integer"},
                    "phase": {
                        "type": "string",
                        "description": "hypertrophy, strength, power, deload or endurance",
                    },
                    "workouts": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "day": {"type": "string", "description": "Workout day name or number"},
                                "exercises": {"type": "array", "items": EXERCISE_SPEC},
                            },
                            "required": ["day", "exercises"],
                        },
                    },
                },
                "required": ["week_number", "phase", "workouts"],
            },
        },
        "exercises": {
            "type": "array",
            "description": "All unique exercises in the program",
            "items": EXERCISE_SPEC,
        },
    },
    "required": ["weeks_duration", "split", "weeks", "exercises"],
}

MEAL_SPEC = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "protein": {"type": "number", "description": "Grams of protein"},
        "carbs": {"type": "number", "description": "Grams of carbohydrates"},
        "fats": {"type": "number", "description": "Grams of fat"},
        "calories": {"type": "number"},
        "ingredients": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["name", "protein", "carbs", "fats", "calories"],
}

NUTRITION_SPEC = {
    "type": "object",
    "properties": {
        "calories": {"type": "number", "description": "Daily caloric intake"},
        "protein": {"type": "number", "description": "Grams of protein per day"},
        "carbohydrates": {"type": "number", "description": "Grams of carbs per day"},
        "fats": {"type": "number", "description": "Grams of fat per day"},
        "meal_suggestions": {
            "type": "array",
            "description": "5-7 meal options",
            "items": MEAL_SPEC,
        },
        "macro_breakdown": {
            "type": "object",
            "properties": {
                "protein_percentage": {"type": "number"},
                "carbs_percentage": {"type": "number"},
                "fats_percentage": {"type": "number"},
            },
            "required": ["protein_percentage", "carbs_percentage", "fats_percentage"],
        },
    },
    "required": ["calories", "protein", "carbohydrates", "fats"],
}

EXERCISE_SWAP_SPEC = {
    "type": "object",
    "properties": {
        "alternatives": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "muscle_group": {"type": "string"},
                    "equipment": {"type": "string"},
                    "difficulty": {"type": "string"},
                    "reason": {"type": "string", "description": "Why it is a good alternative"},
                    "description": {"type": "string"},
                },
                "required": ["name", "muscle_group", "equipment", "difficulty", "reason"],
            },
        },
    },
    "required": ["alternatives"],
}
