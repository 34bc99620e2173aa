from typing import Any

_LINKABLE_ITEM: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "url": {"type": "string", "description": "A valid URL or search URL."},
    },
    "required": ["title", "url"],
    "additionalProperties": False,
}

_STRING_LIST: dict[str, Any] = {"type": "array", "items": {"type": "string"}}

_PLAN_WEEK: dict[str, Any] = {
    "type": "object",
    "properties": {
        "weekNumber": {"type": "integer"},
        "theme": {"type": "string"},
        "goals": _STRING_LIST,
        "actionItems": _STRING_LIST,
    },
    "required": ["weekNumber", "theme", "goals", "actionItems"],
    "additionalProperties": False,
}

CAREER_PLAN_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "career": {"type": "string"},
        "isFictional": {"type": "boolean"},
        "intro": {"type": "string"},
        "skillsToDevelop": _STRING_LIST,
        "thoughtLeaders": {"type": "array", "items": _LINKABLE_ITEM},
        "recommendedCourses": {"type": "array", "items": _LINKABLE_ITEM},
        "targetCompanies": {"type": "array", "items": _LINKABLE_ITEM},
        "weeks": {"type": "array", "items": _PLAN_WEEK},
    },
    "required": [
        "career",
        "isFictional",
        "intro",
        "weeks",
        "skillsToDevelop",
        "thoughtLeaders",
        "recommendedCourses",
        "targetCompanies",
    ],
    "additionalProperties": False,
}
