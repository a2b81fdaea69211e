"""NLP annotation via stanza and plain-text formatting of its output."""

from src.core.nlp.annotator import NlpAnnotator, get_annotator, reset_annotator
from src.core.nlp.formatting import (
    entity_tags,
    format_annotation,
    format_coref,
    format_dependencies,
    format_entity_tags,
)

__all__ = [
    "NlpAnnotator",
    "get_annotator",
    "reset_annotator",
    "entity_tags",
    "format_annotation",
    "format_coref",
    "format_dependencies",
    "format_entity_tags",
]
