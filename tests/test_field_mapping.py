"""
Tests for field mappings: the shared record every generated artifact reads.
"""
import json
import re
from unittest import TestCase

from tsclean_generator.domain import (
    build_field_mapping,
    build_field_mappings,
    build_sample_payload,
    build_validator_schema,
    parse_fields,
    sample_json,
)
from tsclean_generator.domain.field_mapping import object_key


def _mappings(spec):
    return build_field_mappings(parse_fields(spec))


class TestScenarios(TestCase):
    """End-to-end mapping of realistic feature definitions."""

    def test_products(self):
        mappings = _mappings("name:string:minlength=3,price:number:min=0")

        self.assertEqual(sample_json(mappings), '{"name": "sample_name", "price": 123}')
        schema = build_validator_schema(mappings)
        self.assertIn("name: z.string().min(3),", schema)
        self.assertIn("price: z.number().min(0),", schema)

    def test_payment(self):
        mappings = _mappings("amount:number:min=0,method:string:enum=credit|debit")

        self.assertEqual(sample_json(mappings), '{"amount": 123, "method": "credit"}')
        self.assertEqual(mappings[1].validator, 'z.enum(["credit", "debit"])')

    def test_schema_validator_and_sample_share_field_names(self):
        mappings = _mappings("a:string,b:number:max=3,c:boolean,d:date:email,e:string:enum=x|y")

        schema_keys = re.findall(r"^    (\w+): ", build_validator_schema(mappings), re.MULTILINE)
        self.assertEqual(schema_keys, ["a", "b", "c", "d", "e"])
        self.assertEqual(list(build_sample_payload(mappings)), schema_keys)
        self.assertEqual([m.name for m in mappings], schema_keys)


class TestBuildFieldMapping(TestCase):
    """Test cases for build_field_mapping"""

    def test_email_sample(self):
        mapping = build_field_mapping(parse_fields("email:string:email")[0])
        self.assertEqual(mapping.sample_value, "test@example.com")
        self.assertEqual(mapping.validator, "z.string().email()")

    def test_enum_overrides_every_view(self):
        mapping = build_field_mapping(parse_fields("status:number:enum=open|closed")[0])
        self.assertEqual(mapping.static_type, "string")
        self.assertEqual(mapping.schema_type, "String")
        self.assertEqual(mapping.validator, 'z.enum(["open", "closed"])')
        self.assertEqual(mapping.sample_value, "open")

    def test_number_sample_moves_onto_lower_bound(self):
        mapping = build_field_mapping(parse_fields("price:number:min=500")[0])
        self.assertEqual(mapping.sample_value, 500)

    def test_number_sample_moves_onto_upper_bound(self):
        mapping = build_field_mapping(parse_fields("qty:number:max=10")[0])
        self.assertEqual(mapping.sample_value, 10)

    def test_string_sample_padded_to_min_length(self):
        mapping = build_field_mapping(parse_fields("id2:string:minlength=12")[0])
        self.assertEqual(mapping.sample_value, "sample_id2xx")
        self.assertEqual(len(mapping.sample_value), 12)

    def test_string_sample_truncated_to_max_length(self):
        mapping = build_field_mapping(parse_fields("code:string:maxlength=4")[0])
        self.assertEqual(mapping.sample_value, "samp")

    def test_fractional_length_bounds_round_outward(self):
        """A fractional bound still yields a sample its own validator accepts."""
        lower = build_field_mapping(parse_fields("code:string:minlength=20.5")[0])
        self.assertEqual(lower.validator, "z.string().min(20.5)")
        self.assertEqual(len(lower.sample_value), 21)
        self.assertGreaterEqual(len(lower.sample_value), 20.5)

        upper = build_field_mapping(parse_fields("code:string:maxlength=4.5")[0])
        self.assertEqual(upper.validator, "z.string().max(4.5)")
        self.assertEqual(upper.sample_value, "samp")

    def test_sample_within_bounds_is_untouched(self):
        mapping = build_field_mapping(parse_fields("name:string:maxlength=50")[0])
        self.assertEqual(mapping.sample_value, "sample_name")

    def test_unknown_type(self):
        mapping = build_field_mapping(parse_fields("meta:json:email")[0])
        self.assertEqual(mapping.static_type, "any")
        self.assertEqual(mapping.schema_type_expression, "Schema.Types.Mixed")
        self.assertEqual(mapping.validator, "z.any()")
        self.assertIsNone(mapping.sample_value)


class TestRendering(TestCase):
    """Test cases for schema and payload rendering"""

    def test_validator_schema_layout(self):
        schema = build_validator_schema(_mappings("name:string,active:boolean"), indent="  ")
        self.assertEqual(schema, "z.object({\n  name: z.string(),\n  active: z.boolean(),\n})")

    def test_non_identifier_keys_are_quoted(self):
        self.assertEqual(object_key("first-name"), '"first-name"')
        self.assertEqual(object_key("firstName"), "firstName")

    def test_sample_json_is_valid_json(self):
        payload = json.loads(sample_json(_mappings("a:string,b:boolean,c:other")))
        self.assertEqual(payload, {"a": "sample_a", "b": True, "c": None})

    def test_sample_json_keeps_every_field(self):
        """Duplicate names each get a member, matching the z.object keys."""
        mappings = _mappings("a:string,a:number")
        self.assertEqual(sample_json(mappings), '{"a": "sample_a", "a": 123}')
        self.assertEqual(build_validator_schema(mappings).count("a: "), 2)
        self.assertEqual(build_sample_payload(mappings), {"a": 123})

    def test_sample_json_matches_json_dumps_layout(self):
        mappings = _mappings("name:string,first-name:string,ok:boolean")
        payload = {"name": "sample_name", "first-name": "sample_first-name", "ok": True}
        self.assertEqual(sample_json(mappings), json.dumps(payload))
        self.assertEqual(sample_json([]), "{}")
