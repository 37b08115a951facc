"""Data models for the gallery UI state."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from visions_gallery.api.models import ImageResponse

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


class ViewMode(str, Enum):
    """Display mode of the gallery page.

    Admin mode only reveals the add/edit/delete controls; the API performs
    no authorization of its own.
    """

    BROWSE = "Browse"
    ADMIN = "Admin"


@dataclass
class FormFields:
    """Contents of the create/edit form."""

    url: str = ""
    title: str = ""
    description: str = ""

    @classmethod
    def from_record(cls, record: ImageResponse) -> "FormFields":
        """Copy a record's editable fields into a form."""
        return cls(
            url=record.url or "",
            title=record.title or "",
            description=record.description or "",
        )

    def to_payload(self) -> dict:
        """Request body for ``POST``/``PUT /api/images``.

        Blank title and description are sent as ``null`` so that editing a
        record with missing values does not store empty strings.
        """
        return {
            "url": self.url,
            "title": self.title or None,
            "description": self.description or None,
        }


@dataclass
class GalleryViewState:
    """Session state for the gallery page.

    Each browser session gets its own instance.  ``records`` is only ever
    replaced wholesale by a fresh listing from the API.

    Attributes
    ----------
    records : list[ImageResponse]
        Records currently displayed, newest first
    mode : ViewMode
        Browse or Admin
    form_open : bool
        Whether the create/edit form is shown
    editing_target : ImageResponse | None
        Record being edited, or None when the form creates a new record
    form_fields : FormFields
        Current form contents
    loading : bool
        True while the listing is being fetched
    selected_id : int | None
        Record picked in the grid, target of the edit/delete buttons
    pending_delete : int | None
        Record awaiting delete confirmation
    """

    records: list[ImageResponse] = field(default_factory=list)
    mode: ViewMode = ViewMode.BROWSE
    form_open: bool = False
    editing_target: ImageResponse | None = None
    form_fields: FormFields = field(default_factory=FormFields)
    loading: bool = False
    selected_id: int | None = None
    pending_delete: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.mode is ViewMode.ADMIN

    @property
    def is_editing(self) -> bool:
        return self.editing_target is not None

    def find_record(self, image_id: int | None) -> ImageResponse | None:
        """Return the displayed record with this id, if any."""
        if image_id is None:
            return None
        return next((r for r in self.records if r.id == image_id), None)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"GalleryViewState(records={len(self.records)}, "
            f"mode={self.mode.value}, form_open={self.form_open}, "
            f"editing={self.editing_target.id if self.editing_target else None})"
        )


def display_title(record: ImageResponse) -> str:
    """Title shown for a record; empty or missing titles read "Untitled"."""
    return record.title or UNTITLED
