"""Upload models"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class UploadSubmission(BaseModel):
    """Validated, normalized document metadata for one request."""

    subject: str
    description: str
    comments: Optional[str] = None
    tags: str
    folder: str
    approver: str
    selected_groups: List[str] = Field(default_factory=list)
    selected_users: List[str] = Field(default_factory=list)
    selected_option: Optional[str] = None

    def to_wire(self, include_comments: bool = True) -> Dict[str, Any]:
        """Field names as the client form sends them."""
        data: Dict[str, Any] = {
            "subject": self.subject,
            "description": self.description,
        }
        if include_comments:
            data["comments"] = self.comments
        data.update(
            {
                "tags": self.tags,
                "folder": self.folder,
                "approver": self.approver,
                "selectedGroups": list(self.selected_groups),
                "selectedUsers": list(self.selected_users),
            }
        )
        return data


class StoredFile(BaseModel):
    """A persisted upload."""

    generated_name: str
    original_name: str
    path: str
    size_bytes: int
    mime_type: str

    @property
    def url(self) -> str:
        return f"/uploads/{self.generated_name}"

    def describe(self) -> Dict[str, Any]:
        return {
            "filename": self.generated_name,
            "originalName": self.original_name,
            "path": self.path,
            "size": self.size_bytes,
            "mimetype": self.mime_type,
            "url": self.url,
        }
