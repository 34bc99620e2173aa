from __future__ import annotations

import random
from typing import Sequence

from career_reimagined.domain.entities.career_catalog import MAX_CAREERS, SUGGESTED_CAREERS, SURPRISE_COUNT


def add_career(careers: Sequence[str], name: str, capacity: int = MAX_CAREERS) -> list[str]:
    """
    Return the career list with `name` appended.

    Blank names, exact duplicates and additions past `capacity` leave the
    list unchanged.
    """
    current = list(careers)
    candidate = (name or "").strip()
    if not candidate or len(current) >= capacity or candidate in current:
        return current
    current.append(candidate)
    return current


def remove_career(careers: Sequence[str], name: str) -> list[str]:
    return [c for c in careers if c != name]


def surprise_careers(rng: random.Random | None = None, pool: Sequence[str] = SUGGESTED_CAREERS) -> list[str]:
    return (rng or random).sample(list(pool), SURPRISE_COUNT)
