from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple
from urllib.parse import quote

PLAN_WEEK_COUNT = 8
SEARCH_FALLBACK_URL = "https://www.google.com/search?q="


@dataclass(frozen=True)
class LinkableItem:
    title: str
    url: str = ""

    @property
    def href(self) -> str:
        """URL to show for this item; falls back to a web search on the title."""
        url = (self.url or "").strip()
        if url:
            return url
        return SEARCH_FALLBACK_URL + quote(self.title, safe="!~*'()")

    @staticmethod
    def from_payload(raw: Any) -> "LinkableItem":
        if not isinstance(raw, dict):
            raise TypeError("linkable item must be an object")
        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValueError("linkable item needs a non-empty title")
        url = raw.get("url")
        return LinkableItem(title=title.strip(), url=url.strip() if isinstance(url, str) else "")


@dataclass(frozen=True)
class PlanWeek:
    week_number: int
    theme: str
    goals: Tuple[str, ...] = ()
    action_items: Tuple[str, ...] = ()

    @staticmethod
    def from_payload(raw: Any) -> "PlanWeek":
        if not isinstance(raw, dict):
            raise TypeError("week must be an object")
        week_number = raw.get("weekNumber")
        if isinstance(week_number, bool) or not isinstance(week_number, int):
            raise TypeError("weekNumber must be an integer")
        return PlanWeek(
            week_number=week_number,
            theme=_require_str(raw, "theme"),
            goals=_str_tuple(raw.get("goals"), "goals"),
            action_items=_str_tuple(raw.get("actionItems"), "actionItems"),
        )


@dataclass(frozen=True)
class CareerPlan:
    career: str
    is_fictional: bool
    intro: str
    weeks: Tuple[PlanWeek, ...]
    skills_to_develop: Tuple[str, ...] = ()
    thought_leaders: Tuple[LinkableItem, ...] = ()
    recommended_courses: Tuple[LinkableItem, ...] = ()
    target_companies: Tuple[LinkableItem, ...] = ()

    @staticmethod
    def from_payload(raw: Any) -> "CareerPlan":
        """
        Build a plan from the camelCase payload returned by the plan model.

        Raises TypeError / ValueError when the payload does not match the
        plan shape. Weeks are re-ordered by weekNumber and must be exactly
        1..PLAN_WEEK_COUNT.
        """
        if not isinstance(raw, dict):
            raise TypeError("plan must be a JSON object")

        is_fictional = raw.get("isFictional")
        if not isinstance(is_fictional, bool):
            raise TypeError("isFictional must be a boolean")

        weeks_raw = raw.get("weeks")
        if not isinstance(weeks_raw, list):
            raise TypeError("weeks must be a list")
        weeks = tuple(sorted((PlanWeek.from_payload(w) for w in weeks_raw), key=lambda w: w.week_number))
        numbers = [w.week_number for w in weeks]
        if numbers != list(range(1, PLAN_WEEK_COUNT + 1)):
            raise ValueError(f"weeks must be numbered 1..{PLAN_WEEK_COUNT}, got {numbers}")

        return CareerPlan(
            career=_require_str(raw, "career"),
            is_fictional=is_fictional,
            intro=_require_str(raw, "intro"),
            weeks=weeks,
            skills_to_develop=_str_tuple(raw.get("skillsToDevelop"), "skillsToDevelop"),
            thought_leaders=_items(raw.get("thoughtLeaders"), "thoughtLeaders"),
            recommended_courses=_items(raw.get("recommendedCourses"), "recommendedCourses"),
            target_companies=_items(raw.get("targetCompanies"), "targetCompanies"),
        )


def _require_str(raw: dict, key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value.strip()


def _str_tuple(value: Any, key: str) -> Tuple[str, ...]:
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list of strings")
    out: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise TypeError(f"{key} must be a list of strings")
        s = item.strip()
        if s:
            out.append(s)
    return tuple(out)


def _items(value: Any, key: str) -> Tuple[LinkableItem, ...]:
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list")
    return tuple(LinkableItem.from_payload(v) for v in value)
