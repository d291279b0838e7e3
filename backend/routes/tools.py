# backend/routes/tools.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import ValidationError

from routes.projects import parse_flag
from schemas.tool import ToolCreate, ToolOut, ToolUpdate
from schemas.user import CurrentUser
from storage.base import Storage
from storage.factory import get_storage
from utils.tokenJWT import require_admin
from utils.uploads import save_upload

router = APIRouter(prefix="/api/tools", tags=["Tools"])


def _parse_order(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid tool data")


@router.get("", response_model=List[ToolOut])
def list_tools(
    featured: Optional[bool] = Query(None),
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    storage: Storage = Depends(get_storage),
):
    return storage.get_tools(featured, limit, offset)


@router.get("/{tool_id}", response_model=ToolOut)
def get_tool(tool_id: str, storage: Storage = Depends(get_storage)):
    tool = storage.get_tool(tool_id)
    if not tool:
        raise HTTPException(status_code=404, detail="Tool not found")
    return tool


@router.post("", response_model=ToolOut)
def create_tool(
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
    name: str = Form(...),
    icon_url: Optional[str] = Form(None, alias="iconUrl"),
    category: Optional[str] = Form(None),
    website: Optional[str] = Form(None),
    is_featured: Optional[str] = Form(None, alias="isFeatured"),
    order: Optional[str] = Form(None),
    icon: Optional[UploadFile] = File(None),
):
    data = {
        "name": name,
        "icon_url": icon_url,
        "category": category,
        "website": website,
        "is_featured": parse_flag(is_featured) or False,
        "order": _parse_order(order) or 0,
    }
    try:
        payload = ToolCreate(**data)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid tool data")

    uploaded = save_upload(icon)
    if uploaded:
        payload = payload.model_copy(update={"icon_url": uploaded})
    return storage.create_tool(payload)


@router.patch("/{tool_id}", response_model=ToolOut)
def update_tool(
    tool_id: str,
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
    name: Optional[str] = Form(None),
    icon_url: Optional[str] = Form(None, alias="iconUrl"),
    category: Optional[str] = Form(None),
    website: Optional[str] = Form(None),
    is_featured: Optional[str] = Form(None, alias="isFeatured"),
    order: Optional[str] = Form(None),
    icon: Optional[UploadFile] = File(None),
):
    if not storage.get_tool(tool_id):
        raise HTTPException(status_code=404, detail="Tool not found")

    data = {
        "name": name,
        "icon_url": icon_url,
        "category": category,
        "website": website,
        "is_featured": parse_flag(is_featured),
        "order": _parse_order(order),
    }
    try:
        updates = ToolUpdate(**{k: v for k, v in data.items() if v is not None}).model_dump(exclude_unset=True)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid tool data")

    uploaded = save_upload(icon)
    if uploaded:
        updates["icon_url"] = uploaded

    tool = storage.update_tool(tool_id, updates)
    if not tool:
        raise HTTPException(status_code=404, detail="Tool not found")
    return tool


@router.delete("/{tool_id}")
def delete_tool(
    tool_id: str,
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_tool(tool_id):
        raise HTTPException(status_code=404, detail="Tool not found")
    return {"message": "Tool deleted successfully"}
