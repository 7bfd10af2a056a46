"""
Tests for feature validation (warnings and errors).
"""
from unittest import TestCase

from tsclean_generator.domain import FeatureSpec, parse_fields
from tsclean_generator.exceptions import UsageError
from tsclean_generator.validators import FeatureValidator, ValidationResult


def _feature(name, spec):
    return FeatureSpec(name=name, fields=tuple(parse_fields(spec)))


class TestValidationResult(TestCase):
    """Test cases for ValidationResult"""

    def test_error_invalidates(self):
        result = ValidationResult(True, [], [])
        result.add_warning("careful")
        self.assertTrue(result.is_valid)
        result.add_error("broken")
        self.assertFalse(result.is_valid)

    def test_merge(self):
        result = ValidationResult(True, [], ["w1"])
        result.merge(ValidationResult(False, ["e1"], ["w2"]))
        self.assertFalse(result.is_valid)
        self.assertEqual(result.errors, ["e1"])
        self.assertEqual(result.warnings, ["w1", "w2"])

    def test_raise_if_invalid(self):
        with self.assertRaises(UsageError):
            ValidationResult(False, ["bad"], []).raise_if_invalid()
        ValidationResult(True, [], ["only a warning"]).raise_if_invalid()


class TestFeatureValidator(TestCase):
    """Test cases for FeatureValidator"""

    def test_clean_feature(self):
        result = FeatureValidator.validate_feature(_feature("products", "name:string:minlength=3,price:number:min=0"))
        self.assertTrue(result.is_valid)
        self.assertEqual(result.warnings, [])

    def test_empty_feature_name_is_an_error(self):
        result = FeatureValidator.validate_feature(_feature("", "name:string"))
        self.assertFalse(result.is_valid)

    def test_non_identifier_feature_name_warns(self):
        result = FeatureValidator.validate_feature_name("order-items")
        self.assertTrue(result.is_valid)
        self.assertEqual(len(result.warnings), 1)

    def test_field_warnings(self):
        cases = {
            "name:string,name:number": "more than once",
            "first-name:string": "not a valid JavaScript identifier",
            "id:string": "clashes",
            "born:date": "Unknown type",
            "name:string:required": "Unrecognized rule",
            "price:number:email": "does not apply",
        }
        for spec, fragment in cases.items():
            with self.subTest(spec=spec):
                result = FeatureValidator.validate_fields(_feature("things", spec))
                self.assertTrue(result.is_valid)
                self.assertTrue(
                    any(fragment in warning for warning in result.warnings),
                    result.warnings,
                )

    def test_enum_on_any_type_is_not_reported(self):
        result = FeatureValidator.validate_fields(_feature("things", "kind:string:enum=a|b"))
        self.assertEqual(result.warnings, [])
