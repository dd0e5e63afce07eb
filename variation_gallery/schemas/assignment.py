from typing import Any, Dict, List, Optional
from pydantic import BaseModel, validator


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


class AssignmentRecord(BaseModel):
    """One attribute combination (or catch-all) and the images it shows."""
    slugs: List[str]
    imgs: List[str] = []
    video: Optional[Dict[str, str]] = None
    loop_hidden: Optional[bool] = None

    @validator("slugs", pre=True)
    def coerce_slugs(cls, v):
        if _is_scalar(v):
            v = [v]
        if not isinstance(v, (list, tuple)):
            raise ValueError("slugs must be a list")
        slugs = [str(s).strip() for s in v if _is_scalar(s) and str(s).strip()]
        if not slugs:
            raise ValueError("slugs must not be empty")
        return slugs

    @validator("imgs", pre=True)
    def coerce_imgs(cls, v):
        if v is None or v == "":
            return []
        if _is_scalar(v):
            v = [v]
        if not isinstance(v, (list, tuple)):
            raise ValueError("imgs must be a list")
        # nested entries are not image references
        return [str(i).strip() for i in v if _is_scalar(i) and str(i).strip()]

    @validator("video", pre=True)
    def coerce_video(cls, v):
        if not v:
            return None
        if not isinstance(v, dict):
            raise ValueError("video must be a mapping")
        return {str(k): str(val) for k, val in v.items() if _is_scalar(val)}


class AssignmentList(BaseModel):
    product_id: int
    assignments: List[AssignmentRecord] = []
