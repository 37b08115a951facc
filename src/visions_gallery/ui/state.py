"""State transitions for the gallery page.

Every mutation is followed by a full re-fetch of the listing; the state never
patches ``records`` locally.  API failures are logged and leave the state as
it was before the request (the form stays open, the previous listing stays
on screen).
"""

import logging

from visions_gallery.api.models import ImageResponse

from .client import ApiError, ImagesClient
from .models import FormFields, GalleryViewState, ViewMode

logger = logging.getLogger(__name__)


def load_images(state: GalleryViewState, client: ImagesClient) -> GalleryViewState:
    """Replace the displayed records with a fresh listing.

    Args:
        state: UI state
        client: API client

    Returns:
        Updated state; on failure ``records`` is left untouched
    """
    state.loading = True
    try:
        state.records = client.list_images()
        logger.info(f"Loaded {len(state.records)} images")
    except ApiError as e:
        logger.error(f"Failed to fetch images: {e}")
    finally:
        state.loading = False

    # Drop references to records that no longer exist.
    if state.find_record(state.selected_id) is None:
        state.selected_id = None
    return state


def toggle_mode(state: GalleryViewState) -> GalleryViewState:
    """Switch between Browse and Admin mode.  Never calls the API."""
    state.mode = ViewMode.BROWSE if state.is_admin else ViewMode.ADMIN
    if not state.is_admin:
        state.pending_delete = None
    logger.debug(f"Switched to {state.mode.value} mode")
    return state


def open_create_form(state: GalleryViewState) -> GalleryViewState:
    """Open an empty form for a new record."""
    state.editing_target = None
    state.form_fields = FormFields()
    state.form_open = True
    state.pending_delete = None
    return state


def open_edit_form(state: GalleryViewState, record: ImageResponse) -> GalleryViewState:
    """Open the form pre-filled with an existing record."""
    state.editing_target = record
    state.form_fields = FormFields.from_record(record)
    state.form_open = True
    state.pending_delete = None
    return state


def close_form(state: GalleryViewState) -> GalleryViewState:
    """Close the form and forget its contents."""
    state.form_open = False
    state.editing_target = None
    state.form_fields = FormFields()
    return state


def submit_form(
    state: GalleryViewState, client: ImagesClient, fields: FormFields | None = None
) -> GalleryViewState:
    """Save the form: update when editing, create otherwise.

    On success the form is closed and the listing re-fetched.  On failure the
    error is logged and the form stays open with its contents.

    Args:
        state: UI state
        client: API client
        fields: Latest form contents; defaults to ``state.form_fields``

    Returns:
        Updated state
    """
    if fields is not None:
        state.form_fields = fields

    try:
        if state.editing_target is not None:
            client.update_image(state.editing_target.id, state.form_fields)
            logger.info(f"Updated image {state.editing_target.id}")
        else:
            created = client.create_image(state.form_fields)
            logger.info(f"Created image {created.id}")
    except ApiError as e:
        logger.error(f"Failed to save image: {e}")
        return state

    close_form(state)
    return load_images(state, client)


def request_delete(state: GalleryViewState, image_id: int) -> GalleryViewState:
    """Ask for confirmation before deleting a record."""
    state.pending_delete = image_id
    return state


def cancel_delete(state: GalleryViewState) -> GalleryViewState:
    state.pending_delete = None
    return state


def confirm_delete(state: GalleryViewState, client: ImagesClient) -> GalleryViewState:
    """Delete the record awaiting confirmation, then re-fetch on success."""
    image_id = state.pending_delete
    if image_id is None:
        return state
    state.pending_delete = None

    try:
        client.delete_image(image_id)
        logger.info(f"Deleted image {image_id}")
    except ApiError as e:
        logger.error(f"Failed to delete image: {e}")
        return state

    return load_images(state, client)
