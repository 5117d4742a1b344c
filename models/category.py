# models/category.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class Category(BaseModel):
    """Document category as stored by the archive."""
    id: str
    name: str
    description: Optional[str] = None
    color: str = "#6b7280"
    icon: str = "Folder"
    parent_id: Optional[str] = None
    document_count: int = 0
    created_at: Optional[datetime] = None
    is_default: bool = False

    model_config = ConfigDict(from_attributes=True)
