"""
Validation utilities for feature definitions.

Feature and field definitions are never rejected: the generator degrades
unknown types and rules to permissive output. These validators collect what
was degraded or looks suspicious so the CLI can warn about it.
"""

from dataclasses import dataclass
from typing import List

from .constants import RESERVED_FIELD_NAMES
from .domain.models import FeatureSpec, FieldType, RuleKind
from .domain.naming import is_valid_js_identifier
from .domain.type_mapping import map_field_type
from .domain.validator_compiler import is_applicable, parse_rule
from .exceptions import UsageError


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    is_valid: bool
    errors: List[str]
    warnings: List[str]

    def __post_init__(self):
        """Ensure consistency."""
        if self.errors and self.is_valid:
            self.is_valid = False

    def add_error(self, error: str) -> None:
        """Add an error."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning."""
        self.warnings.append(warning)

    def merge(self, other: "ValidationResult") -> None:
        """Fold another result into this one."""
        for error in other.errors:
            self.add_error(error)
        self.warnings.extend(other.warnings)

    def raise_if_invalid(self) -> None:
        """Raise UsageError if invalid."""
        if not self.is_valid:
            raise UsageError(
                f"Validation failed: {'; '.join(self.errors)}",
                context={"errors": self.errors, "warnings": self.warnings}
            )


class FeatureValidator:
    """Checks a feature definition and reports what generation will degrade."""

    @staticmethod
    def validate_feature_name(name: str) -> ValidationResult:
        """Validate a feature name."""
        result = ValidationResult(True, [], [])

        if not name:
            result.add_error("Feature name cannot be empty")
            return result

        if not is_valid_js_identifier(name):
            result.add_warning(
                f"Feature name '{name}' is not a valid JavaScript identifier; "
                "the generated sources will not compile"
            )

        return result

    @staticmethod
    def validate_fields(feature: FeatureSpec) -> ValidationResult:
        """Validate the fields of a feature."""
        result = ValidationResult(True, [], [])
        seen = set()

        for field in feature.fields:
            label = f"{feature.name}.{field.name or '<empty>'}"

            if not field.name:
                result.add_warning(f"Field '{field.to_token()}' in '{feature.name}' has no name")
            elif not is_valid_js_identifier(field.name):
                result.add_warning(f"Field name '{label}' is not a valid JavaScript identifier")

            if field.name in seen:
                result.add_warning(f"Field name '{label}' is declared more than once")
            seen.add(field.name)

            if field.name in RESERVED_FIELD_NAMES:
                result.add_warning(f"Field name '{label}' clashes with the generated entity id")

            if field.field_type is FieldType.UNKNOWN:
                result.add_warning(
                    f"Unknown type '{field.type_name}' for '{label}'; using the permissive fallback"
                )

            rule = parse_rule(field.rule)
            base = map_field_type(field.type_name).validator_type
            if rule.kind is RuleKind.UNKNOWN:
                result.add_warning(f"Unrecognized rule '{field.rule}' for '{label}' is ignored")
            elif rule.kind is not RuleKind.NONE and not is_applicable(base, rule):
                result.add_warning(
                    f"Rule '{field.rule}' does not apply to type '{field.type_name}' of '{label}' and is ignored"
                )

        return result

    @classmethod
    def validate_feature(cls, feature: FeatureSpec) -> ValidationResult:
        """Validate a feature name and all of its fields."""
        result = cls.validate_feature_name(feature.name)
        result.merge(cls.validate_fields(feature))
        return result
