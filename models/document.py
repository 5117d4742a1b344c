from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


# ======================================================
# DOCUMENT
# ======================================================

class Document(BaseModel):
    """
    Archived document metadata.
    user_id is the owner, used for the edit/delete "own document" rules.
    """

    id: str
    name: str
    original_name: Optional[str] = None
    physical_location: str = Field(..., description="Where the paper original is stored")
    description: Optional[str] = None
    category: str
    tags: List[str] = Field(default_factory=list)

    size: int = 0
    mime_type: Optional[str] = None
    url: Optional[str] = None
    thumbnail_url: Optional[str] = None

    user_id: Optional[str] = Field(None, description="Owner (uploader) user ID")

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 1
    is_archived: bool = False
