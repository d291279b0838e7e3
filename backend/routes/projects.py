# backend/routes/projects.py
import json
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import ValidationError

from schemas.project import ProjectCreate, ProjectOut, ProjectUpdate
from schemas.user import CurrentUser
from storage.base import Storage
from storage.factory import get_storage
from utils.tokenJWT import require_admin
from utils.uploads import save_upload

router = APIRouter(prefix="/api/projects", tags=["Projects"])


# ---- HELPERS ----
def parse_json_list(raw: Optional[str], field: str) -> Optional[List[str]]:
    """Multipart forms carry lists as JSON strings, e.g. '["React", "FastAPI"]'."""
    if raw is None:
        return None
    if not raw.strip():
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field}")
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise HTTPException(status_code=400, detail=f"Invalid {field}")
    return value


def parse_flag(raw: Optional[str]) -> Optional[bool]:
    # Forms send "true"/"false"; anything but "true" is False
    if raw is None:
        return None
    return raw.strip().lower() == "true"


def _drop_none(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}


# =========================
# PUBLIC LISTING
# =========================
@router.get("", response_model=List[ProjectOut])
def list_projects(
    published: Optional[bool] = Query(None),
    featured: Optional[bool] = Query(None),
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    storage: Storage = Depends(get_storage),
):
    return storage.get_projects(published, featured, limit, offset)


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: str, storage: Storage = Depends(get_storage)):
    project = storage.get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


# =========================
# CREATE (admin, multipart)
# =========================
@router.post("", response_model=ProjectOut)
def create_project(
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
    title: str = Form(...),
    description: str = Form(...),
    category: str = Form(...),
    full_description: Optional[str] = Form(None, alias="fullDescription"),
    tags: Optional[str] = Form(None),
    technologies: Optional[str] = Form(None),
    image_url: Optional[str] = Form(None, alias="imageUrl"),
    video_url: Optional[str] = Form(None, alias="videoUrl"),
    demo_url: Optional[str] = Form(None, alias="demoUrl"),
    github_url: Optional[str] = Form(None, alias="githubUrl"),
    is_published: Optional[str] = Form(None, alias="isPublished"),
    is_featured: Optional[str] = Form(None, alias="isFeatured"),
    image: Optional[UploadFile] = File(None),
    video: Optional[UploadFile] = File(None),
):
    data = _drop_none({
        "title": title,
        "description": description,
        "category": category,
        "full_description": full_description,
        "tags": parse_json_list(tags, "tags"),
        "technologies": parse_json_list(technologies, "technologies"),
        "image_url": image_url,
        "video_url": video_url,
        "demo_url": demo_url,
        "github_url": github_url,
        "is_published": parse_flag(is_published),
        "is_featured": parse_flag(is_featured),
    })
    try:
        payload = ProjectCreate(**data)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid project data")

    # Uploaded files win over URLs sent in the form
    media = _drop_none({"image_url": save_upload(image), "video_url": save_upload(video)})
    if media:
        payload = payload.model_copy(update=media)

    return storage.create_project(payload)


# =========================
# PARTIAL UPDATE (admin, multipart)
# =========================
@router.patch("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: str,
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    full_description: Optional[str] = Form(None, alias="fullDescription"),
    tags: Optional[str] = Form(None),
    technologies: Optional[str] = Form(None),
    image_url: Optional[str] = Form(None, alias="imageUrl"),
    video_url: Optional[str] = Form(None, alias="videoUrl"),
    demo_url: Optional[str] = Form(None, alias="demoUrl"),
    github_url: Optional[str] = Form(None, alias="githubUrl"),
    is_published: Optional[str] = Form(None, alias="isPublished"),
    is_featured: Optional[str] = Form(None, alias="isFeatured"),
    image: Optional[UploadFile] = File(None),
    video: Optional[UploadFile] = File(None),
):
    if not storage.get_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    data = _drop_none({
        "title": title,
        "description": description,
        "category": category,
        "full_description": full_description,
        "tags": parse_json_list(tags, "tags"),
        "technologies": parse_json_list(technologies, "technologies"),
        "image_url": image_url,
        "video_url": video_url,
        "demo_url": demo_url,
        "github_url": github_url,
        "is_published": parse_flag(is_published),
        "is_featured": parse_flag(is_featured),
    })
    try:
        updates = ProjectUpdate(**data).model_dump(exclude_unset=True)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid project data")

    updates.update(_drop_none({"image_url": save_upload(image), "video_url": save_upload(video)}))

    project = storage.update_project(project_id, updates)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


# =========================
# DELETE (admin)
# =========================
@router.delete("/{project_id}")
def delete_project(
    project_id: str,
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return {"message": "Project deleted successfully"}
