from pydantic import BaseModel, Field

from career_reimagined.domain.entities.app_step import AppStep


class PhotoRequestSchema(BaseModel):
    data_base64: str
    mime_type: str
    filename: str = "upload"


class CareerRequestSchema(BaseModel):
    career: str


class LinkableItemSchema(BaseModel):
    title: str
    url: str


class PlanWeekSchema(BaseModel):
    week_number: int
    theme: str
    goals: list[str] = Field(default_factory=list)
    action_items: list[str] = Field(default_factory=list)


class CareerPlanSchema(BaseModel):
    career: str
    is_fictional: bool
    intro: str
    skills_to_develop: list[str] = Field(default_factory=list)
    thought_leaders: list[LinkableItemSchema] = Field(default_factory=list)
    recommended_courses: list[LinkableItemSchema] = Field(default_factory=list)
    target_companies: list[LinkableItemSchema] = Field(default_factory=list)
    weeks: list[PlanWeekSchema]


class CareerImageSchema(BaseModel):
    id: str
    career: str
    image_url: str
    loading: bool
    error: str | None = None


class SessionSchema(BaseModel):
    step: AppStep
    has_photo: bool
    subject_descriptor: str
    careers: list[str]
    generated_images: list[CareerImageSchema]
    cached_plans: list[str]
    selected_career: str | None = None
    selected_plan: CareerPlanSchema | None = None
    loading_message: str | None = None
    upload_error: str | None = None
    notifications: list[str] = Field(default_factory=list)
