"""
Type mapping for field types.

Maps an abstract field type token to its TypeScript annotation, Mongoose
schema type, Zod base validator and default sample value. The mapping is
total: any unrecognized token gets the most permissive representation.
"""

from typing import Any

from ..constants import (
    STATIC_TYPE_MAP,
    SCHEMA_TYPE_MAP,
    VALIDATOR_TYPE_MAP,
    SampleValues,
    SchemaTypes,
    StaticTypes,
    ValidatorTypes,
)
from .models import FieldType, TypeMapping


def default_sample(field_type: FieldType, field_name: str = "") -> Any:
    """Sample payload value for a field of the given type, before any rule applies."""
    if field_type is FieldType.STRING:
        return f"{SampleValues.STRING_PREFIX}{field_name}"
    if field_type is FieldType.NUMBER:
        return SampleValues.NUMBER
    if field_type is FieldType.BOOLEAN:
        return SampleValues.BOOLEAN
    return SampleValues.FALLBACK


def map_field_type(type_name: str, field_name: str = "") -> TypeMapping:
    """
    Map a type token to every target representation.

    Args:
        type_name: Type token from the field DSL (e.g. 'string')
        field_name: Field name, used to build string sample values

    Returns:
        TypeMapping; ('any', 'Mixed', 'z.any()', None) for unknown tokens

    Example:
        >>> map_field_type("number").schema_type
        'Number'
        >>> map_field_type("date").static_type
        'any'
    """
    field_type = FieldType.from_token(type_name)
    token = field_type.value
    return TypeMapping(
        static_type=STATIC_TYPE_MAP.get(token, StaticTypes.FALLBACK),
        schema_type=SCHEMA_TYPE_MAP.get(token, SchemaTypes.FALLBACK),
        validator_type=VALIDATOR_TYPE_MAP.get(token, ValidatorTypes.FALLBACK),
        sample_value=default_sample(field_type, field_name),
    )
