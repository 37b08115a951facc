"""Gallery page: view state, API client, and the Gradio interface.

- models: view state dataclasses
- client: HTTP client for the gallery API
- state: state transitions (load, toggle mode, form, delete)
- handlers: Gradio event handlers rendering the state
- app: Blocks layout and the ``visions-ui`` entry point
"""
