from __future__ import annotations

import logging
import random
from contextlib import contextmanager
from typing import Iterator

from career_reimagined.application.exceptions import ExportError, InvalidTransitionError, UploadRejectedError
from career_reimagined.application.use_cases.classify_subject import ClassifySubjectUseCase
from career_reimagined.application.use_cases.export_plan import ExportedDocument, ExportPlanUseCase
from career_reimagined.application.use_cases.generate_career_images import GenerateCareerImagesUseCase
from career_reimagined.application.use_cases.generate_career_plan import GenerateCareerPlanUseCase
from career_reimagined.application.utils import career_rules
from career_reimagined.application.utils.data_url import parse_data_url
from career_reimagined.application.utils.upload_rules import DEFAULT_MAX_UPLOAD_BYTES, validate_upload
from career_reimagined.domain.entities.app_step import AppStep
from career_reimagined.domain.entities.career_catalog import HUMAN_SUBJECT, MAX_CAREERS
from career_reimagined.domain.entities.career_image import CareerImage
from career_reimagined.domain.entities.career_plan import CareerPlan
from career_reimagined.domain.entities.photo import UploadedPhoto

PLAN_FAILED_NOTICE = "Failed to generate plan. Please try again."
EXPORT_FAILED_NOTICE = "Could not export PDF. Please try again."


class CareerSession:
    """
    State machine for one user session: upload, career selection, image
    fan-out, plan generation with a per-career cache, and export.

    Every await on the AI service runs inside `_loading`, so
    `loading_message` is set exactly while a blocking call is in flight.
    `reset()` bumps an epoch counter; work started under an older epoch
    never writes into the fresh state.
    """

    def __init__(
        self,
        classify_subject: ClassifySubjectUseCase,
        generate_images: GenerateCareerImagesUseCase,
        generate_plan: GenerateCareerPlanUseCase,
        export_plan: ExportPlanUseCase,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        rng: random.Random | None = None,
    ) -> None:
        self._classify_subject = classify_subject
        self._generate_images = generate_images
        self._generate_plan = generate_plan
        self._export_plan = export_plan
        self._max_upload_bytes = max_upload_bytes
        self._rng = rng
        self._epoch = 0
        self._logger = logging.getLogger(__name__)
        self._clear()

    def _clear(self) -> None:
        self.step = AppStep.UPLOAD
        self.photo: UploadedPhoto | None = None
        self.subject_descriptor = HUMAN_SUBJECT
        self.careers: list[str] = []
        self.generated_images: list[CareerImage] = []
        self.plan_cache: dict[str, CareerPlan] = {}
        self.selected_career: str | None = None
        self.selected_plan: CareerPlan | None = None
        self.selected_career_image: str | None = None
        self.loading_message: str | None = None
        self.upload_error: str | None = None
        self._notifications: list[str] = []

    @property
    def is_busy(self) -> bool:
        return self.loading_message is not None

    def pop_notifications(self) -> list[str]:
        pending, self._notifications = self._notifications, []
        return pending

    # --- upload step ---

    async def select_photo(self, photo: UploadedPhoto) -> bool:
        """Validate and classify a new photo. Returns False if it was rejected or superseded."""
        self._require(AppStep.UPLOAD, "select a photo")
        try:
            validate_upload(photo, self._max_upload_bytes)
        except UploadRejectedError as e:
            self.upload_error = str(e)
            self._logger.info("Upload rejected", extra={"reason": str(e)})
            return False
        self.upload_error = None

        with self._loading("Analyzing subject...") as epoch:
            subject = await self._classify_subject.execute(photo)
        if self._is_stale(epoch, "classification"):
            return False

        self.photo = photo
        self.subject_descriptor = subject
        return True

    def clear_photo(self) -> None:
        self._require(AppStep.UPLOAD, "remove the photo")
        self.photo = None
        self.subject_descriptor = HUMAN_SUBJECT
        self.upload_error = None

    def add_career(self, name: str) -> bool:
        self._require(AppStep.UPLOAD, "edit careers")
        before = len(self.careers)
        self.careers = career_rules.add_career(self.careers, name, capacity=MAX_CAREERS)
        return len(self.careers) > before

    def remove_career(self, name: str) -> None:
        self._require(AppStep.UPLOAD, "edit careers")
        self.careers = career_rules.remove_career(self.careers, name)

    def surprise_me(self) -> list[str]:
        self._require(AppStep.UPLOAD, "edit careers")
        self.careers = career_rules.surprise_careers(self._rng)
        return list(self.careers)

    # --- generation ---

    async def generate_images(self) -> list[CareerImage]:
        self._require(AppStep.UPLOAD, "generate images")
        if self.photo is None:
            raise InvalidTransitionError("Upload a photo before generating images.")
        if not self.careers:
            raise InvalidTransitionError("Add at least one career before generating images.")

        photo = self.photo
        subject = self.subject_descriptor
        placeholders = [CareerImage.placeholder(c) for c in self.careers]
        self.generated_images = list(placeholders)
        self.step = AppStep.GENERATING_IMAGES

        with self._loading(f"Reimagining your {subject}...") as epoch:

            def write(index: int, record: CareerImage) -> None:
                if self._epoch == epoch:
                    self.generated_images[index] = record

            settled = await self._generate_images.execute(photo, subject, placeholders, on_settled=write)

        if self._is_stale(epoch, "image batch"):
            return settled

        failed = sum(1 for img in settled if img.error)
        self._logger.info(
            "Image batch settled",
            extra={"careers": len(settled), "failed": failed, "epoch": epoch},
        )
        self.step = AppStep.GALLERY
        return list(self.generated_images)

    async def select_career(self, career: str) -> CareerPlan | None:
        """Show the plan for `career`, generating it on a cache miss. Returns None on failure."""
        self._require(AppStep.GALLERY, "select a career")
        image = next((img for img in self.generated_images if img.career == career), None)
        if image is None:
            raise ValueError(f"Unknown career: {career!r}")

        self.selected_career = career
        self.selected_career_image = image.image_url or None

        cached = self.plan_cache.get(career)
        if cached is not None:
            self._logger.info("Plan cache hit", extra={"career": career})
            self.selected_plan = cached
            self.step = AppStep.PLAN_VIEW
            return cached

        subject = self.subject_descriptor
        self.step = AppStep.GENERATING_PLAN
        epoch = self._epoch
        try:
            with self._loading(f"Drafting plan for {subject} as {career}..."):
                plan = await self._generate_plan.execute(career, subject)
        except Exception:
            if self._is_stale(epoch, "plan failure"):
                return None
            self._logger.exception("Plan generation failed", extra={"career": career})
            self.step = AppStep.GALLERY
            self._notifications.append(PLAN_FAILED_NOTICE)
            return None

        if self._is_stale(epoch, "plan"):
            return None

        plan = self.plan_cache.setdefault(career, plan)
        self.selected_plan = plan
        self.step = AppStep.PLAN_VIEW
        return plan

    def back_to_gallery(self) -> None:
        self._require(AppStep.PLAN_VIEW, "go back to the gallery")
        self.step = AppStep.GALLERY

    def reset(self) -> None:
        self._epoch += 1
        self._clear()
        self._logger.info("Session reset", extra={"epoch": self._epoch})

    # --- downloads ---

    def export_plan(self) -> ExportedDocument | None:
        if self.step != AppStep.PLAN_VIEW or self.selected_plan is None:
            raise InvalidTransitionError("Open a plan before exporting it.")
        try:
            return self._export_plan.execute(self.selected_plan, self.selected_career_image)
        except ExportError:
            self._logger.exception("PDF export failed", extra={"career": self.selected_plan.career})
            self._notifications.append(EXPORT_FAILED_NOTICE)
            return None

    def download_image(self, career: str) -> tuple[str, bytes]:
        image = next((img for img in self.generated_images if img.career == career), None)
        if image is None or not image.image_url:
            raise ValueError(f"No generated image for {career!r}")
        _, data = parse_data_url(image.image_url)
        return f"reimagined-{career}.png", data

    # --- helpers ---

    def _require(self, step: AppStep, action: str) -> None:
        if self.is_busy:
            raise InvalidTransitionError(f"Cannot {action} while busy: {self.loading_message}")
        if self.step != step:
            raise InvalidTransitionError(f"Cannot {action} from step {self.step.value}.")

    @contextmanager
    def _loading(self, message: str) -> Iterator[int]:
        epoch = self._epoch
        self.loading_message = message
        try:
            yield epoch
        finally:
            if self._epoch == epoch:
                self.loading_message = None

    def _is_stale(self, epoch: int, what: str) -> bool:
        if self._epoch == epoch:
            return False
        self._logger.info("Discarding stale result", extra={"reason": what, "epoch": epoch})
        return True
