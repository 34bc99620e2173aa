from __future__ import annotations

import base64
import binascii
import logging
from contextlib import contextmanager
from typing import Iterator
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from career_reimagined.api.v1.schemas import (
    CareerImageSchema,
    CareerPlanSchema,
    CareerRequestSchema,
    LinkableItemSchema,
    PhotoRequestSchema,
    PlanWeekSchema,
    SessionSchema,
)
from career_reimagined.application.exceptions import LLMContractError, LLMUpstreamError
from career_reimagined.application.use_cases.career_session import CareerSession
from career_reimagined.domain.entities.career_plan import CareerPlan, LinkableItem
from career_reimagined.domain.entities.photo import UploadedPhoto
from career_reimagined.wiring.dependencies import get_session

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=SessionSchema)
def read_session(session: CareerSession = Depends(get_session)):
    return _snapshot(session)


@router.post("/photo", response_model=SessionSchema)
async def select_photo(req: PhotoRequestSchema, session: CareerSession = Depends(get_session)):
    try:
        data = base64.b64decode(req.data_base64, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="data_base64 is not valid base64.")
    photo = UploadedPhoto(data=data, mime_type=req.mime_type, filename=req.filename)
    with _client_errors():
        await session.select_photo(photo)
    return _snapshot(session)


@router.delete("/photo", response_model=SessionSchema)
def clear_photo(session: CareerSession = Depends(get_session)):
    with _client_errors():
        session.clear_photo()
    return _snapshot(session)


@router.post("/careers", response_model=SessionSchema)
def add_career(req: CareerRequestSchema, session: CareerSession = Depends(get_session)):
    with _client_errors():
        session.add_career(req.career)
    return _snapshot(session)


@router.delete("/careers", response_model=SessionSchema)
def remove_career(career: str = Query(...), session: CareerSession = Depends(get_session)):
    with _client_errors():
        session.remove_career(career)
    return _snapshot(session)


@router.post("/careers/surprise", response_model=SessionSchema)
def surprise_me(session: CareerSession = Depends(get_session)):
    with _client_errors():
        session.surprise_me()
    return _snapshot(session)


@router.post("/generate", response_model=SessionSchema)
async def generate_images(session: CareerSession = Depends(get_session)):
    with _client_errors():
        await session.generate_images()
    return _snapshot(session)


@router.post("/plan", response_model=SessionSchema)
async def select_career(req: CareerRequestSchema, session: CareerSession = Depends(get_session)):
    with _client_errors():
        await session.select_career(req.career)
    return _snapshot(session)


@router.post("/back", response_model=SessionSchema)
def back_to_gallery(session: CareerSession = Depends(get_session)):
    with _client_errors():
        session.back_to_gallery()
    return _snapshot(session)


@router.post("/reset", response_model=SessionSchema)
def reset(session: CareerSession = Depends(get_session)):
    session.reset()
    return _snapshot(session)


@router.get("/export")
def export_plan(session: CareerSession = Depends(get_session)) -> Response:
    with _client_errors():
        document = session.export_plan()
    if document is None:
        notices = session.pop_notifications()
        logger.warning("Export produced no document", extra={"reason": notices[0] if notices else None})
        raise HTTPException(status_code=500, detail=notices[0] if notices else "Export failed.")
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers=_attachment(document.filename),
    )


@router.get("/images")
def download_image(career: str = Query(...), session: CareerSession = Depends(get_session)) -> Response:
    try:
        filename, data = session.download_image(career)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(content=data, media_type="image/png", headers=_attachment(filename))


@contextmanager
def _client_errors() -> Iterator[None]:
    try:
        yield
    except (LLMUpstreamError, LLMContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}


def _link(item: LinkableItem) -> LinkableItemSchema:
    return LinkableItemSchema(title=item.title, url=item.href)


def _plan(plan: CareerPlan) -> CareerPlanSchema:
    return CareerPlanSchema(
        career=plan.career,
        is_fictional=plan.is_fictional,
        intro=plan.intro,
        skills_to_develop=list(plan.skills_to_develop),
        thought_leaders=[_link(i) for i in plan.thought_leaders],
        recommended_courses=[_link(i) for i in plan.recommended_courses],
        target_companies=[_link(i) for i in plan.target_companies],
        weeks=[
            PlanWeekSchema(
                week_number=w.week_number,
                theme=w.theme,
                goals=list(w.goals),
                action_items=list(w.action_items),
            )
            for w in plan.weeks
        ],
    )


def _snapshot(session: CareerSession) -> SessionSchema:
    return SessionSchema(
        step=session.step,
        has_photo=session.photo is not None,
        subject_descriptor=session.subject_descriptor,
        careers=list(session.careers),
        generated_images=[
            CareerImageSchema(id=i.id, career=i.career, image_url=i.image_url, loading=i.loading, error=i.error)
            for i in session.generated_images
        ],
        cached_plans=list(session.plan_cache),
        selected_career=session.selected_career,
        selected_plan=_plan(session.selected_plan) if session.selected_plan else None,
        loading_message=session.loading_message,
        upload_error=session.upload_error,
        notifications=session.pop_notifications(),
    )
