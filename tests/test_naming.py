"""
Tests for naming conventions.
"""
from unittest import TestCase

from tsclean_generator.domain import FeatureSpec, NamingConventions, capitalize, is_valid_js_identifier


class TestCapitalize(TestCase):
    """Test cases for capitalize"""

    def test_only_first_character_changes(self):
        self.assertEqual(capitalize("products"), "Products")
        self.assertEqual(capitalize("orderItem"), "OrderItem")
        self.assertEqual(capitalize("Payment"), "Payment")

    def test_empty(self):
        self.assertEqual(capitalize(""), "")

    def test_non_string(self):
        with self.assertRaises(TypeError):
            capitalize(None)


class TestIdentifiers(TestCase):
    """Test cases for is_valid_js_identifier"""

    def test_valid(self):
        for name in ["name", "_id", "$ref", "price2"]:
            with self.subTest(name=name):
                self.assertTrue(is_valid_js_identifier(name))

    def test_invalid(self):
        for name in ["", "2fast", "first-name", "class", "with space"]:
            with self.subTest(name=name):
                self.assertFalse(is_valid_js_identifier(name))


class TestNamingConventions(TestCase):
    """Test cases for names derived from a feature"""

    def test_feature_names_are_not_pluralized(self):
        feature = FeatureSpec("products")
        self.assertEqual(feature.class_name, "Products")
        self.assertEqual(feature.variable_name, "products")
        self.assertEqual(NamingConventions.use_case_class("products"), "CreateProductsUseCase")
        self.assertEqual(NamingConventions.controller_class("products"), "ProductsController")
        self.assertEqual(NamingConventions.controller_variable("products"), "productsController")

    def test_modules(self):
        self.assertEqual(
            NamingConventions.controller_module("payment"),
            "../Features/payment/delivery/controllers/payment.controller",
        )
        self.assertEqual(NamingConventions.container_module("payment"), "../Features/payment/container")
