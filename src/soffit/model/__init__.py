"""Payload types and decoding."""

from soffit.model.decoding import PAYLOAD_V1_0, PayloadDecoder, from_json
from soffit.model.payload import (
    Bearer,
    Definition,
    Payload,
    Preferences,
    Renderable,
    Request,
)

__all__ = [
    "PAYLOAD_V1_0",
    "Bearer",
    "Definition",
    "Payload",
    "PayloadDecoder",
    "Preferences",
    "Renderable",
    "Request",
    "from_json",
]
