# portfolio/services/section_service.py
# Validación del JSON libre de Section.content según su tipo (JSON Schema 2020-12)
from __future__ import annotations

from typing import Any, Dict, Optional

from jsonschema import Draft202012Validator

_URL_OR_ANCHOR = {"type": "string", "maxLength": 2048}
_STR_LIST = {"type": "array", "items": {"type": "string"}}

# Tipos sin schema registrado aceptan cualquier objeto JSON
SECTION_CONTENT_SCHEMAS: Dict[str, Dict[str, Any]] = {
    "hero": {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "description": {"type": "string"},
            "ctaText": {"type": "string", "maxLength": 80},
            "ctaLink": _URL_OR_ANCHOR,
            "backgroundImage": _URL_OR_ANCHOR,
        },
    },
    "about": {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "bio": {"type": "string"},
            "skills": _STR_LIST,
            "image": _URL_OR_ANCHOR,
        },
    },
    "contact": {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "email": {"type": "string"},
            "phone": {"type": "string"},
            "location": {"type": "string"},
            "linkedin": _URL_OR_ANCHOR,
            "github": _URL_OR_ANCHOR,
            "twitter": _URL_OR_ANCHOR,
        },
    },
    "featuredProject": {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "projectIds": {"type": "array", "items": {"type": "integer"}},
            "limit": {"type": "integer", "minimum": 1},
        },
    },
}

_ANY_OBJECT = {"type": "object"}


class SectionContentError(ValueError):
    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


def schema_for(section_type: Optional[str]) -> Dict[str, Any]:
    return SECTION_CONTENT_SCHEMAS.get(section_type or "", _ANY_OBJECT)


def validate_section_content(section_type: Optional[str], content: Any) -> None:
    validator = Draft202012Validator(schema_for(section_type))
    errors = sorted(validator.iter_errors(content), key=lambda e: [str(p) for p in e.path])
    if errors:
        e = errors[0]
        path = ".".join([str(p) for p in e.path])
        raise SectionContentError(f"JSON Schema validation error at '{path}': {e.message}", path)
