# routes/categories.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from core.database import get_session
from models.models import ProjectCategory
from schemas.category_schema import CategoryCreate, CategoryRead, CategoryUpdate
from services import category_service

router = APIRouter(prefix="/categories", tags=["Categories"])


def _read(category: ProjectCategory, count: int = 0) -> CategoryRead:
    data = CategoryRead.model_validate(category)
    data.project_count = count
    return data


# ==================================================================
#  ✅ LIST CATEGORIES
# ==================================================================
@router.get("/", response_model=List[CategoryRead])
def list_categories(session: Session = Depends(get_session)):
    counts = category_service.project_counts(session)
    return [_read(c, counts.get(c.name, 0)) for c in category_service.list_categories(session)]


# ==================================================================
#  ✅ CREATE CATEGORY
# ==================================================================
@router.post("/", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(data: CategoryCreate, session: Session = Depends(get_session)):
    return _read(category_service.create_category(session, data.name))


# ==================================================================
#  ✅ RENAME CATEGORY
# ==================================================================
@router.put("/{category_id}", response_model=CategoryRead)
def rename_category(category_id: int, data: CategoryUpdate, session: Session = Depends(get_session)):
    category = category_service.rename_category(session, category_id, data.name)
    counts = category_service.project_counts(session)
    return _read(category, counts.get(category.name, 0))


# ==================================================================
#  ✅ DELETE CATEGORY
# ==================================================================
@router.delete("/{category_id}")
def delete_category(category_id: int, session: Session = Depends(get_session)):
    category_service.delete_category(session, category_id)
    return {"message": "Category deleted successfully"}
