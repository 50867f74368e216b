"""PixelRelay Image Generator — FastAPI relay layer.

Modules
-------
main
    Application factory, route handlers, and the ``main()`` CLI entry point.
models
    Pydantic models for the relay request and response contract.
relay
    Body parsing, the provider call, and payload normalisation.
"""
