"""Page facades and the field catalog they draw chains from."""

from .fields import (
    CATALOGS,
    FieldContext,
    FieldDescriptor,
    FieldKind,
    field_descriptor,
)
from .practice_form import PracticeFormPage

__all__ = [
    "CATALOGS",
    "FieldContext",
    "FieldDescriptor",
    "FieldKind",
    "field_descriptor",
    "PracticeFormPage",
]
