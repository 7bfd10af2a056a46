"""
Domain module for the tsclean generator.

Parsing of the field DSL, type and rule mapping, and the structured model of
an existing project's wiring. Nothing in here touches templates or the
filesystem.
"""

from .models import (
    FieldType,
    RuleKind,
    FieldSpec,
    FeatureSpec,
    ValidatorRule,
    TypeMapping,
    FieldMapping,
    GeneratedFile,
    GenerationResult,
)

from .field_parser import (
    parse_field,
    parse_fields,
    serialize_fields,
    canonicalize,
    resolve_fields,
)

from .type_mapping import map_field_type, default_sample

from .validator_compiler import (
    parse_rule,
    compile_validator,
    enum_sample,
    is_applicable,
)

from .field_mapping import (
    build_field_mapping,
    build_field_mappings,
    build_validator_schema,
    build_sample_payload,
    sample_json,
)

from .naming import NamingConventions, capitalize, is_valid_js_identifier

from .registry import (
    ProjectRegistry,
    RegisteredFeature,
    parse_entry_point,
    parse_readme,
    load_registry,
)

__all__ = [
    # Core models
    'FieldType',
    'RuleKind',
    'FieldSpec',
    'FeatureSpec',
    'ValidatorRule',
    'TypeMapping',
    'FieldMapping',
    'GeneratedFile',
    'GenerationResult',

    # Field DSL
    'parse_field',
    'parse_fields',
    'serialize_fields',
    'canonicalize',
    'resolve_fields',

    # Type and rule mapping
    'map_field_type',
    'default_sample',
    'parse_rule',
    'compile_validator',
    'enum_sample',
    'is_applicable',
    'build_field_mapping',
    'build_field_mappings',
    'build_validator_schema',
    'build_sample_payload',
    'sample_json',

    # Naming
    'NamingConventions',
    'capitalize',
    'is_valid_js_identifier',

    # Project wiring
    'ProjectRegistry',
    'RegisteredFeature',
    'parse_entry_point',
    'parse_readme',
    'load_registry',
]
