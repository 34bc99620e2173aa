from __future__ import annotations

import hashlib
import io
import json
import re
from typing import Any

from PIL import Image, ImageDraw

from career_reimagined.application.ports.generative_ai import ContentPart, GenerativeAIPort
from career_reimagined.domain.entities.career_catalog import HUMAN_SUBJECT

_CAREER_RE = re.compile(r'becoming a "(?P<career>[^"]+)"')
_SUBJECT_RE = re.compile(r"CONTEXT: The subject is a (?P<subject>.+?)\.\n")


class MockGenerativeService(GenerativeAIPort):
    def __init__(self, subject: str = HUMAN_SUBJECT) -> None:
        self._subject = subject

    async def classify_subject(self, image_bytes: bytes, mime_type: str) -> str:
        return self._subject

    async def generate_image(self, image_bytes: bytes, mime_type: str, prompt: str) -> list[ContentPart]:
        digest = hashlib.sha256(prompt.encode("utf-8")).digest()
        img = Image.new("RGB", (300, 400), (digest[0], digest[1], digest[2]))
        draw = ImageDraw.Draw(img)
        draw.rectangle((20, 20, 279, 379), outline=(255, 255, 255), width=4)
        draw.text((30, 30), "Mock portrait", fill=(255, 255, 255))
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return [ContentPart(text="Here is your portrait."), ContentPart(inline_data=buf.getvalue(), mime_type="image/png")]

    async def generate_plan(self, prompt: str, schema: dict[str, Any]) -> str:
        career_match = _CAREER_RE.search(prompt)
        subject_match = _SUBJECT_RE.search(prompt)
        career = career_match.group("career") if career_match else "Professional"
        subject = subject_match.group("subject") if subject_match else HUMAN_SUBJECT
        satirical = subject != HUMAN_SUBJECT

        def link(title: str) -> dict[str, str]:
            return {"title": title, "url": ""}

        plan = {
            "career": career,
            "isFictional": satirical,
            "intro": f"Mock plan for a {subject} becoming a {career}.",
            "skillsToDevelop": [f"{career} fundamentals", "Networking", "Portfolio building"],
            "thoughtLeaders": [link(f"Famous {career}")],
            "recommendedCourses": [link(f"Intro to {career}")],
            "targetCompanies": [link(f"{career} Inc.")],
            "weeks": [
                {
                    "weekNumber": n,
                    "theme": f"Week {n} focus",
                    "goals": [f"Goal {n}.1", f"Goal {n}.2"],
                    "actionItems": [f"Action {n}.1"],
                }
                for n in range(1, 9)
            ],
        }
        return json.dumps(plan)
