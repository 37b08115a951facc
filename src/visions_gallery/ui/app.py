"""Gradio UI for the Visions gallery."""

import logging

import gradio as gr

from visions_gallery.core.config import config

from . import handlers
from .client import ImagesClient
from .models import GalleryViewState

# Configure logging
logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui(client: ImagesClient | None = None) -> gr.Blocks:
    """Create the gallery page.

    Args:
        client: API client; defaults to one pointed at ``config.api_base_url``

    Returns:
        Gradio Blocks app
    """
    client = client or ImagesClient()

    app = gr.Blocks(title="Visions")

    with app:
        # Session state - one instance per user
        view_state = gr.State(GalleryViewState())

        with gr.Row():
            with gr.Column(scale=4):
                gr.Markdown("# Visions")
            with gr.Column(scale=1, min_width=160):
                mode_button = gr.Button("View Mode", variant="secondary", size="sm")

        with gr.Row(visible=False) as admin_controls:
            add_button = gr.Button("Add Image", variant="primary", size="sm")
            edit_button = gr.Button("Edit Selected", size="sm")
            delete_button = gr.Button("Delete Selected", variant="stop", size="sm")
            refresh_button = gr.Button("Refresh", size="sm")

        with gr.Group(visible=False) as confirm_group:
            confirm_text = gr.Markdown()
            with gr.Row():
                confirm_button = gr.Button("Delete", variant="stop", size="sm")
                cancel_delete_button = gr.Button("Cancel", size="sm")

        with gr.Group(visible=False) as form_group:
            form_heading = gr.Markdown("### Add New Image")
            url_input = gr.Textbox(
                label="Image URL",
                placeholder="https://images.unsplash.com/...",
            )
            title_input = gr.Textbox(label="Title", placeholder="Sunset in the mountains")
            description_input = gr.Textbox(
                label="Description",
                placeholder="A beautiful view of the peaks during golden hour...",
                lines=3,
            )
            with gr.Row():
                cancel_form_button = gr.Button("Cancel")
                save_button = gr.Button("Add Image", variant="primary")

        status = gr.Markdown("*Loading images...*")
        gallery = gr.Gallery(
            label="Gallery",
            show_label=False,
            columns=3,
            object_fit="cover",
            height="auto",
            allow_preview=True,
        )

        components = {
            "status": status,
            "gallery": gallery,
            "mode_button": mode_button,
            "admin_controls": admin_controls,
            "confirm_group": confirm_group,
            "confirm_text": confirm_text,
            "form_group": form_group,
            "form_heading": form_heading,
            "url_input": url_input,
            "title_input": title_input,
            "description_input": description_input,
            "save_button": save_button,
        }
        outputs = [components[name] for name in handlers.VIEW_OUTPUT_NAMES] + [view_state]

        def load_wrapper(state):
            return handlers.load_gallery(state, client)

        def refresh_wrapper(state):
            return handlers.refresh_gallery(state, client)

        def select_wrapper(evt: gr.SelectData, state):
            return handlers.select_image(evt.index, state)

        def submit_wrapper(url, title, description, state):
            return handlers.submit_form(url, title, description, state, client)

        def confirm_wrapper(state):
            return handlers.confirm_delete(state, client)

        app.load(fn=load_wrapper, inputs=[view_state], outputs=outputs)
        refresh_button.click(fn=refresh_wrapper, inputs=[view_state], outputs=outputs)
        mode_button.click(fn=handlers.toggle_mode, inputs=[view_state], outputs=outputs)
        gallery.select(fn=select_wrapper, inputs=[view_state], outputs=outputs)

        add_button.click(fn=handlers.open_create_form, inputs=[view_state], outputs=outputs)
        edit_button.click(fn=handlers.open_edit_form, inputs=[view_state], outputs=outputs)
        cancel_form_button.click(fn=handlers.close_form, inputs=[view_state], outputs=outputs)
        form_inputs = [url_input, title_input, description_input, view_state]
        for textbox in (url_input, title_input, description_input):
            textbox.input(fn=handlers.update_form_fields, inputs=form_inputs, outputs=[view_state])
        save_button.click(
            fn=submit_wrapper,
            inputs=[url_input, title_input, description_input, view_state],
            outputs=outputs,
        )

        delete_button.click(fn=handlers.request_delete, inputs=[view_state], outputs=outputs)
        cancel_delete_button.click(fn=handlers.cancel_delete, inputs=[view_state], outputs=outputs)
        confirm_button.click(fn=confirm_wrapper, inputs=[view_state], outputs=outputs)

    return app


def main():
    """Main entry point for the gallery UI."""
    logger.info("Starting Visions gallery UI...")
    logger.info(f"Using API at {config.api_base_url}")

    app = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
    )


if __name__ == "__main__":
    main()
