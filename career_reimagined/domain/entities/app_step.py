from enum import Enum


class AppStep(str, Enum):
    UPLOAD = "UPLOAD"
    GENERATING_IMAGES = "GENERATING_IMAGES"
    GALLERY = "GALLERY"
    GENERATING_PLAN = "GENERATING_PLAN"
    PLAN_VIEW = "PLAN_VIEW"
