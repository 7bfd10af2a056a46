"""
Tests for the rule-to-validator compiler.
"""
from unittest import TestCase

from tsclean_generator.domain import RuleKind, compile_validator, enum_sample, parse_rule


class TestParseRule(TestCase):
    """Test cases for parse_rule"""

    def test_empty_rule(self):
        self.assertIs(parse_rule("").kind, RuleKind.NONE)
        self.assertIs(parse_rule(None).kind, RuleKind.NONE)

    def test_bounds(self):
        rule = parse_rule("minlength=3")
        self.assertIs(rule.kind, RuleKind.MIN_LENGTH)
        self.assertEqual(rule.value, 3)
        self.assertTrue(rule.is_bound)

    def test_decimal_and_negative_bounds(self):
        self.assertEqual(parse_rule("min=-5").value, -5)
        self.assertEqual(parse_rule("max=9.5").value, 9.5)

    def test_non_numeric_bound_is_unknown(self):
        self.assertIs(parse_rule("min=abc").kind, RuleKind.UNKNOWN)
        self.assertIs(parse_rule("max=").kind, RuleKind.UNKNOWN)

    def test_enum_literals_in_order(self):
        rule = parse_rule("enum=credit|debit|cash")
        self.assertIs(rule.kind, RuleKind.ENUM)
        self.assertEqual(rule.literals, ("credit", "debit", "cash"))

    def test_empty_enum_is_unknown(self):
        self.assertIs(parse_rule("enum=").kind, RuleKind.UNKNOWN)
        self.assertIs(parse_rule("enum=||").kind, RuleKind.UNKNOWN)

    def test_unrecognized_tokens(self):
        for token in ["required", "pattern=abc", "emails"]:
            with self.subTest(token=token):
                self.assertIs(parse_rule(token).kind, RuleKind.UNKNOWN)


class TestCompileValidator(TestCase):
    """Test cases for compile_validator"""

    def test_no_rule_returns_base(self):
        self.assertEqual(compile_validator("z.string()", ""), "z.string()")

    def test_email(self):
        self.assertEqual(compile_validator("z.string()", "email"), "z.string().email()")

    def test_length_and_value_bounds(self):
        self.assertEqual(compile_validator("z.string()", "minlength=3"), "z.string().min(3)")
        self.assertEqual(compile_validator("z.string()", "maxlength=50"), "z.string().max(50)")
        self.assertEqual(compile_validator("z.number()", "min=0"), "z.number().min(0)")
        self.assertEqual(compile_validator("z.number()", "max=99.5"), "z.number().max(99.5)")

    def test_enum(self):
        self.assertEqual(
            compile_validator("z.string()", "enum=a|b|c"),
            'z.enum(["a", "b", "c"])',
        )

    def test_unknown_rule_returns_base(self):
        self.assertEqual(compile_validator("z.string()", "required"), "z.string()")
        self.assertEqual(compile_validator("z.number()", "min=abc"), "z.number()")

    def test_inapplicable_refinements_are_ignored(self):
        self.assertEqual(compile_validator("z.number()", "email"), "z.number()")
        self.assertEqual(compile_validator("z.boolean()", "min=1"), "z.boolean()")
        self.assertEqual(compile_validator("z.any()", "maxlength=3"), "z.any()")

    def test_accepts_parsed_rule(self):
        self.assertEqual(compile_validator("z.number()", parse_rule("max=10")), "z.number().max(10)")


class TestEnumSample(TestCase):
    """Test cases for enum_sample"""

    def test_first_literal(self):
        self.assertEqual(enum_sample("enum=credit|debit"), "credit")

    def test_non_enum(self):
        self.assertIsNone(enum_sample("email"))
