"""
Core domain models for the tsclean generator.

These models describe what a feature is made of (fields, types, rules) and
what the emitter produces from it. They are plain immutable dataclasses with
no knowledge of templates or the filesystem.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from ..constants import FieldDSL, FieldTypeTokens, RuleTokens, SchemaTypes
from .naming import capitalize


class FieldType(Enum):
    """Categories of field types."""

    STRING = FieldTypeTokens.STRING
    NUMBER = FieldTypeTokens.NUMBER
    BOOLEAN = FieldTypeTokens.BOOLEAN
    UNKNOWN = "unknown"

    @classmethod
    def from_token(cls, token: str) -> "FieldType":
        """Resolve a type token; anything unrecognized is UNKNOWN."""
        for member in cls:
            if member is not cls.UNKNOWN and member.value == token:
                return member
        return cls.UNKNOWN


class RuleKind(Enum):
    """Kinds of validation rules a field can carry."""

    NONE = "none"
    EMAIL = RuleTokens.EMAIL
    MIN_LENGTH = RuleTokens.MIN_LENGTH
    MAX_LENGTH = RuleTokens.MAX_LENGTH
    MIN = RuleTokens.MIN
    MAX = RuleTokens.MAX
    ENUM = RuleTokens.ENUM
    UNKNOWN = "unknown"

    @property
    def is_lower_bound(self) -> bool:
        return self in (RuleKind.MIN, RuleKind.MIN_LENGTH)

    @property
    def is_upper_bound(self) -> bool:
        return self in (RuleKind.MAX, RuleKind.MAX_LENGTH)


@dataclass(frozen=True)
class FieldSpec:
    """
    One name:type[:rule] entry of a field specification.

    The raw type token is kept (rather than only the resolved FieldType) so
    that a parsed field can be written back in its original form.
    """

    name: str
    type_name: str
    rule: str = ""

    @property
    def field_type(self) -> FieldType:
        return FieldType.from_token(self.type_name)

    def to_token(self) -> str:
        """Serialize back to the canonical name:type[:rule] form."""
        parts = [self.name, self.type_name]
        if self.rule:
            parts.append(self.rule)
        return FieldDSL.PART_SEPARATOR.join(parts)


@dataclass(frozen=True)
class FeatureSpec:
    """A named feature and its ordered fields."""

    name: str
    fields: Tuple[FieldSpec, ...] = ()

    @property
    def class_name(self) -> str:
        """Identifier used for type and class names (e.g. 'Products')."""
        return capitalize(self.name)

    @property
    def variable_name(self) -> str:
        """Identifier used for variables; the name exactly as given."""
        return self.name

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]


@dataclass(frozen=True)
class ValidatorRule:
    """
    A parsed rule token.

    Only ever used to produce validator text and sample values; `value` holds
    the numeric payload of bound rules and `literals` the enum members.
    """

    kind: RuleKind
    value: Optional[Union[int, float]] = None
    literals: Tuple[str, ...] = ()
    token: str = ""

    @property
    def is_bound(self) -> bool:
        return self.kind.is_lower_bound or self.kind.is_upper_bound


@dataclass(frozen=True)
class TypeMapping:
    """The views of one field type in every target representation."""

    static_type: str
    schema_type: str
    validator_type: str
    sample_value: Any


@dataclass(frozen=True)
class FieldMapping:
    """
    A field resolved for code generation.

    Every generated artifact (entity, persistence schema, validator, sample
    payload) reads the field from this record, which is what keeps them in
    agreement with each other.
    """

    field: FieldSpec
    rule: ValidatorRule
    static_type: str
    schema_type: str
    validator: str
    sample_value: Any

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def schema_type_expression(self) -> str:
        """Mongoose type as it must appear in source (Mixed lives on Schema.Types)."""
        if self.schema_type == SchemaTypes.FALLBACK:
            return "Schema.Types.Mixed"
        return self.schema_type


@dataclass(frozen=True)
class GeneratedFile:
    """A document produced by the emitter, addressed relative to the project root."""

    path: str
    content: str


@dataclass
class GenerationResult:
    """What a generation run wrote and what it warned about."""

    project_root: str
    files: List[GeneratedFile] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]
