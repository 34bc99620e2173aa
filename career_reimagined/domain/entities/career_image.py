from __future__ import annotations

import uuid
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class CareerImage:
    id: str
    career: str
    image_url: str = ""
    loading: bool = True
    error: str | None = None

    @staticmethod
    def placeholder(career: str) -> "CareerImage":
        return CareerImage(id=uuid.uuid4().hex, career=career)

    def resolve(self, image_url: str) -> "CareerImage":
        if not self.loading:
            raise ValueError(f"CareerImage for {self.career!r} already settled.")
        if not image_url:
            raise ValueError("image_url must be non-empty.")
        return replace(self, image_url=image_url, loading=False)

    def fail(self, error: str) -> "CareerImage":
        if not self.loading:
            raise ValueError(f"CareerImage for {self.career!r} already settled.")
        return replace(self, loading=False, error=error or "Failed to generate.")

    @property
    def settled(self) -> bool:
        return not self.loading
