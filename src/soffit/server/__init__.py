"""ASGI transport for the render endpoint."""
