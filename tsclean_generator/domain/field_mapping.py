"""
Field mapping domain logic for the tsclean generator.

Combines the type mapper and the rule compiler into one FieldMapping per
field. Entity, persistence schema, validator and sample payload are all
rendered from these mappings, so a field cannot end up with a type or a
constraint in one artifact that disagrees with another.
"""

import json
import math
from typing import Any, Dict, Iterable, List

from ..constants import SampleValues, SchemaTypes, StaticTypes
from .models import FieldMapping, FieldSpec, FieldType, RuleKind, ValidatorRule
from .naming import is_valid_js_identifier
from .type_mapping import map_field_type
from .validator_compiler import compile_validator, is_applicable, parse_rule


def _fit_string_sample(sample: str, rule: ValidatorRule) -> str:
    """Pad or truncate a string sample so it satisfies a length bound."""
    # Fractional bounds round outward: min(20.5) needs 21 characters, max(4.5) allows 4
    if rule.kind.is_lower_bound and len(sample) < rule.value:
        return sample.ljust(math.ceil(rule.value), SampleValues.PAD_CHARACTER)
    if rule.kind.is_upper_bound and len(sample) > rule.value:
        return sample[:max(math.floor(rule.value), 0)]
    return sample


def _fit_number_sample(sample: Any, rule: ValidatorRule) -> Any:
    """Move a numeric sample onto the bound it would otherwise violate."""
    if rule.kind.is_lower_bound and sample < rule.value:
        return rule.value
    if rule.kind.is_upper_bound and sample > rule.value:
        return rule.value
    return sample


def build_field_mapping(field: FieldSpec) -> FieldMapping:
    """
    Resolve one field for code generation.

    The type token picks the base representation; the rule then refines the
    validator and, where needed, the sample value. An enum rule turns the
    field into a string literal union in every view.

    Args:
        field: Parsed field entry

    Returns:
        FieldMapping shared by every generated artifact
    """
    type_mapping = map_field_type(field.type_name, field.name)
    rule = parse_rule(field.rule)
    validator = compile_validator(type_mapping.validator_type, rule)

    static_type = type_mapping.static_type
    schema_type = type_mapping.schema_type
    sample = type_mapping.sample_value

    if rule.kind is RuleKind.ENUM:
        static_type = StaticTypes.STRING
        schema_type = SchemaTypes.STRING
        sample = rule.literals[0]
    elif is_applicable(type_mapping.validator_type, rule):
        if rule.kind is RuleKind.EMAIL:
            sample = SampleValues.EMAIL
        elif field.field_type is FieldType.STRING:
            sample = _fit_string_sample(sample, rule)
        elif field.field_type is FieldType.NUMBER:
            sample = _fit_number_sample(sample, rule)

    return FieldMapping(
        field=field,
        rule=rule,
        static_type=static_type,
        schema_type=schema_type,
        validator=validator,
        sample_value=sample,
    )


def build_field_mappings(fields: Iterable[FieldSpec]) -> List[FieldMapping]:
    """Resolve fields in declaration order."""
    return [build_field_mapping(f) for f in fields]


def object_key(name: str) -> str:
    """Key of a field in a TypeScript object literal (quoted when not an identifier)."""
    return name if is_valid_js_identifier(name) else json.dumps(name)


def build_validator_schema(mappings: Iterable[FieldMapping], indent: str = "    ") -> str:
    """
    Render the z.object(...) schema for a feature.

    Example:
        z.object({
            name: z.string().min(3),
            price: z.number().min(0),
        })
    """
    lines = ["z.object({"]
    for mapping in mappings:
        lines.append(f"{indent}{object_key(mapping.name)}: {mapping.validator},")
    lines.append("})")
    return "\n".join(lines)


def build_sample_payload(mappings: Iterable[FieldMapping]) -> Dict[str, Any]:
    """Sample request body, keys in field declaration order. The last of duplicate names wins."""
    return {mapping.name: mapping.sample_value for mapping in mappings}


def sample_json(mappings: Iterable[FieldMapping]) -> str:
    """
    Sample request body as a single-line JSON document.

    Every field gets a member, duplicates included, so the payload lists the
    same keys as the z.object schema.

    Example:
        {"name": "sample_name", "price": 123}
    """
    members = [f"{json.dumps(mapping.name)}: {json.dumps(mapping.sample_value)}" for mapping in mappings]
    return "{" + ", ".join(members) + "}"
