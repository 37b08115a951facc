"""Visions Gallery - FastAPI REST API layer.

This package contains the FastAPI application and the Pydantic
request/response models.

Modules
-------
main
    Application factory, the image CRUD routes, and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response validation.
"""
