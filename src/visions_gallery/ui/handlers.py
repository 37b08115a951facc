"""Gradio event handlers for the gallery page.

Every handler applies one state transition and returns the full set of
component updates produced by :func:`render_view`, followed by the state.
The component order is fixed by ``VIEW_OUTPUT_NAMES`` and mirrored by
``create_ui`` in :mod:`visions_gallery.ui.app`.
"""

import logging

import gradio as gr

from . import state as transitions
from .client import ImagesClient
from .models import UNTITLED, FormFields, GalleryViewState, display_title

logger = logging.getLogger(__name__)

VIEW_OUTPUT_NAMES = [
    "status",
    "gallery",
    "mode_button",
    "admin_controls",
    "confirm_group",
    "confirm_text",
    "form_group",
    "form_heading",
    "url_input",
    "title_input",
    "description_input",
    "save_button",
]


def format_caption(record) -> str:
    """Caption shown under a gallery tile."""
    title = display_title(record)
    if record.description:
        return f"{title}\n{record.description}"
    return title


def status_message(state: GalleryViewState) -> str:
    """Markdown shown above the grid."""
    if state.loading:
        return "*Loading images...*"
    if not state.records:
        hint = (
            "Start by adding some images to your gallery."
            if state.is_admin
            else "The gallery is currently empty."
        )
        return f"### No images yet\n{hint}"

    selected = state.find_record(state.selected_id)
    count = f"**{len(state.records)}** image(s)"
    if selected is not None and state.is_admin:
        return f"{count} · selected: *{display_title(selected)}*"
    return count


def render_view(state: GalleryViewState) -> tuple:
    """Build component updates for the current state.

    Returns:
        Tuple ordered as ``VIEW_OUTPUT_NAMES``
    """
    pending = state.find_record(state.pending_delete)
    pending_title = display_title(pending) if pending else UNTITLED
    fields = state.form_fields

    return (
        status_message(state),
        [(record.url, format_caption(record)) for record in state.records],
        gr.update(
            value="Admin Mode" if state.is_admin else "View Mode",
            variant="primary" if state.is_admin else "secondary",
        ),
        gr.update(visible=state.is_admin),
        gr.update(visible=state.is_admin and state.pending_delete is not None),
        f"Are you sure you want to delete **{pending_title}**?",
        gr.update(visible=state.is_admin and state.form_open),
        "### Edit Image" if state.is_editing else "### Add New Image",
        fields.url,
        fields.title,
        fields.description,
        gr.update(value="Save Changes" if state.is_editing else "Add Image"),
    )


def _respond(state: GalleryViewState) -> tuple:
    return (*render_view(state), state)


def load_gallery(state: GalleryViewState | None, client: ImagesClient) -> tuple:
    """Initial fetch when the page is opened."""
    state = state or GalleryViewState()
    return _respond(transitions.load_images(state, client))


def refresh_gallery(state: GalleryViewState, client: ImagesClient) -> tuple:
    return _respond(transitions.load_images(state, client))


def toggle_mode(state: GalleryViewState) -> tuple:
    return _respond(transitions.toggle_mode(state))


def select_image(index: int | None, state: GalleryViewState) -> tuple:
    """Remember which tile was clicked.

    Args:
        index: Position of the tile in the grid
        state: UI state
    """
    if index is None or not 0 <= index < len(state.records):
        state.selected_id = None
    else:
        state.selected_id = state.records[index].id
    return _respond(state)


def open_create_form(state: GalleryViewState) -> tuple:
    return _respond(transitions.open_create_form(state))


def open_edit_form(state: GalleryViewState) -> tuple:
    """Open the form for the selected record."""
    record = state.find_record(state.selected_id)
    if record is None:
        logger.warning("Edit requested with no image selected")
        return _respond(state)
    return _respond(transitions.open_edit_form(state, record))


def close_form(state: GalleryViewState) -> tuple:
    return _respond(transitions.close_form(state))


def update_form_fields(
    url: str, title: str, description: str, state: GalleryViewState
) -> GalleryViewState:
    """Keep typed form text in the state so later re-renders show it.

    Only the state is returned; the textboxes already hold these values.
    """
    state.form_fields = FormFields(url=url or "", title=title or "", description=description or "")
    return state


def submit_form(
    url: str,
    title: str,
    description: str,
    state: GalleryViewState,
    client: ImagesClient,
) -> tuple:
    """Save the form contents through the API."""
    fields = FormFields(url=url or "", title=title or "", description=description or "")
    return _respond(transitions.submit_form(state, client, fields))


def request_delete(state: GalleryViewState) -> tuple:
    """Show the confirmation prompt for the selected record."""
    if state.selected_id is None:
        logger.warning("Delete requested with no image selected")
        return _respond(state)
    return _respond(transitions.request_delete(state, state.selected_id))


def cancel_delete(state: GalleryViewState) -> tuple:
    return _respond(transitions.cancel_delete(state))


def confirm_delete(state: GalleryViewState, client: ImagesClient) -> tuple:
    return _respond(transitions.confirm_delete(state, client))
