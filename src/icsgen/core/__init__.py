"""Core encoding and generation logic for icsgen."""

from icsgen.core.nodes import Component, Property, RawLines
from icsgen.core.encoder import Encoder, encode, make_parameter_string, render_document
from icsgen.core.generator import GeneratorSession, generate_document

__all__ = [
    "Component",
    "Property",
    "RawLines",
    "Encoder",
    "encode",
    "make_parameter_string",
    "render_document",
    "GeneratorSession",
    "generate_document",
]
