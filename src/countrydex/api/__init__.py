"""Countrydex — FastAPI REST API layer.

This package contains the FastAPI application, the country routes, the
Pydantic response models, and the JSON error handlers.

Modules
-------
main
    Application factory, static mounts, and the ``main()`` CLI entry point.
routes
    List, get, create, update, and delete handlers for ``/api/countries``.
models
    Pydantic models for API responses.
errors
    Exception handlers producing ``{"error": <message>}`` bodies.
"""
