"""Placecage image server: FastAPI REST API layer.

Modules
-------
main
    FastAPI application with the image and catalog routes and the ``main()``
    CLI entry point.
models
    Pydantic models for the catalog listing response.
"""
