"""blenodoc: documentation records from ``@bleno`` doc comments."""

from blenodoc.errors import BlenodocError, ConfigError, ExtractionError
from blenodoc.models import ErrorEntry, Property, Record, Tag
from blenodoc.parse import FLATTENERS, MARKER_TITLE, PROPERTY_TITLE, parse_comment
from blenodoc.tags import parse_tags

__all__ = [
    "BlenodocError",
    "ConfigError",
    "ErrorEntry",
    "ExtractionError",
    "FLATTENERS",
    "MARKER_TITLE",
    "PROPERTY_TITLE",
    "Property",
    "Record",
    "Tag",
    "parse_comment",
    "parse_tags",
]
