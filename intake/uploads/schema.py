"""
Document form schema.

DOCUMENT_FIELDS mirrors the field descriptors the client form is built
from; UploadSchema validates a submission against the same list, so the
server and the form never disagree about what a field is called or what
it accepts. Both upload endpoints validate through UploadSchema and differ
only in whether ``comments`` is required.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..utils.exceptions import ValidationFailedError
from .models import UploadSubmission

TEXT_KINDS = ("text", "textarea", "select")
MULTI_KIND = "react-select"
FILE_KIND = "file"


@dataclass(frozen=True)
class Option:
    value: str
    label: str


@dataclass(frozen=True)
class FieldRule:
    """One form field: how it renders and what it must contain."""
    name: str
    label: str
    kind: str
    message: str = ""
    required: bool = True
    options: Tuple[Option, ...] = field(default_factory=tuple)
    placeholder: Optional[str] = None

    @property
    def is_multi(self) -> bool:
        return self.kind == MULTI_KIND

    def descriptor(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "label": self.label, "type": self.kind}
        if self.placeholder:
            out["placeholder"] = self.placeholder
        if self.options:
            out["options"] = [{"value": o.value, "label": o.label} for o in self.options]
        return out


def _options(*pairs: Tuple[str, str]) -> Tuple[Option, ...]:
    return tuple(Option(value, label) for value, label in pairs)


DOCUMENT_FIELDS: Tuple[FieldRule, ...] = (
    FieldRule("subject", "Subject", "text", "Subject is required"),
    FieldRule("description", "Description", "textarea", "Description is required"),
    FieldRule("comments", "Comments", "textarea", "Comments are required"),
    FieldRule(
        "folder", "Select Folder", "select", "Please select a folder",
        options=_options(("folder1", "Folder 1"), ("folder2", "Folder 2")),
    ),
    FieldRule(
        "tags", "Add Tags", "text", "At least one tag is required",
        placeholder="#tag1, #tag2",
    ),
    FieldRule("file", "Upload File", FILE_KIND, required=False),
    FieldRule(
        "approver", "Set Approver", "select", "Approver selection is required",
        options=_options(("user1", "User 1"), ("user2", "User 2")),
    ),
    FieldRule(
        "selectedGroups", "Group Wise", MULTI_KIND, "Please select at least one group",
        options=_options(("group1", "Group 1"), ("group2", "Group 2"), ("group3", "Group 3")),
    ),
    FieldRule(
        "selectedUsers", "User Wise", MULTI_KIND, "Please select at least one user",
        options=_options(("user1", "User 1"), ("user2", "User 2"), ("user3", "User 3")),
    ),
)

# Fields that arrive as repeated multipart values
MULTI_FIELDS = tuple(f.name for f in DOCUMENT_FIELDS if f.is_multi)

# Order of names in the "All fields (...) are required." message, which
# existing clients match on; differs from the form order above
SUMMARY_ORDER = (
    "subject", "description", "comments", "tags", "folder",
    "approver", "selectedGroups", "selectedUsers",
)


def field_descriptors() -> List[Dict[str, Any]]:
    """Descriptors for rendering the upload form."""
    return [f.descriptor() for f in DOCUMENT_FIELDS]


def coerce_text(value: Any) -> str:
    """A single trimmed string; repeated values keep the last one."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else ""
    return str(value).strip()


def coerce_multi(value: Any) -> List[str]:
    """
    Normalize a multi-select value to an ordered, de-duplicated list.

    Accepts repeated form values, a JSON array string, or a comma-separated
    string. Blank entries are dropped.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = [item for v in value for item in _split_multi(v)]
    else:
        items = _split_multi(value)

    out: List[str] = []
    for item in items:
        if item and item not in out:
            out.append(item)
    return out


def _split_multi(value: Any) -> List[str]:
    raw = str(value).strip()
    if raw.startswith("["):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return [str(v).strip() for v in parsed]
    return [part.strip() for part in raw.split(",")]


class UploadSchema:
    """Validates raw submitted fields against DOCUMENT_FIELDS."""

    def __init__(
        self,
        require_comments: bool = True,
        enforce_options: bool = False,
        fields: Sequence[FieldRule] = DOCUMENT_FIELDS,
    ):
        self.require_comments = require_comments
        self.enforce_options = enforce_options
        self.fields = tuple(f for f in fields if f.kind != FILE_KIND)

    def is_required(self, rule: FieldRule) -> bool:
        if rule.name == "comments":
            return self.require_comments
        return rule.required

    @property
    def required_names(self) -> List[str]:
        return [f.name for f in self.fields if self.is_required(f)]

    def missing_summary(self) -> str:
        required = set(self.required_names)
        names = [n for n in SUMMARY_ORDER if n in required]
        names += [n for n in self.required_names if n not in SUMMARY_ORDER]
        return f"All fields ({', '.join(names)}) are required."

    def validate(self, raw: Mapping[str, Any]) -> UploadSubmission:
        """
        Check every field and return the normalized submission.

        All violations are collected before raising ValidationFailedError,
        so the caller sees every problem in one response.
        """
        values: Dict[str, Any] = {}
        errors: List[str] = []
        missing: List[str] = []

        for rule in self.fields:
            value = coerce_multi(raw.get(rule.name)) if rule.is_multi else coerce_text(raw.get(rule.name))
            values[rule.name] = value

            if not value:
                if self.is_required(rule):
                    errors.append(rule.message)
                    missing.append(rule.name)
                continue

            if self.enforce_options and rule.options:
                allowed = {o.value for o in rule.options}
                chosen = value if rule.is_multi else [value]
                for item in chosen:
                    if item not in allowed:
                        errors.append(f"{rule.label} has an invalid selection: {item}")

        if errors:
            raise ValidationFailedError(errors, missing=missing)

        return UploadSubmission(
            subject=values["subject"],
            description=values["description"],
            comments=values.get("comments") or None,
            tags=values["tags"],
            folder=values["folder"],
            approver=values["approver"],
            selected_groups=values["selectedGroups"],
            selected_users=values["selectedUsers"],
            selected_option=coerce_text(raw.get("selectedOption")) or None,
        )
