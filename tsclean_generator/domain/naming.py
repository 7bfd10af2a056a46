"""
Naming convention utilities for the tsclean generator.

Feature names are used as given for variables, file names and routes, and
with their first character upper-cased for classes and types. No
pluralization or singularization is ever applied to them.
"""

import re

from ..constants import JS_RESERVED_WORDS


_JS_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def capitalize(name: str) -> str:
    """
    Upper-case the first character and leave the remainder unchanged.

    Unlike str.capitalize(), the rest of the string keeps its case.

    Example:
        >>> capitalize("products")
        'Products'
        >>> capitalize("orderItem")
        'OrderItem'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")
    return name[:1].upper() + name[1:]


def is_valid_js_identifier(name: str) -> bool:
    """Check if a string can be used as a JavaScript identifier."""
    if not name:
        return False
    return bool(_JS_IDENTIFIER_RE.match(name)) and name not in JS_RESERVED_WORDS


class NamingConventions:
    """Names derived from a feature name for the generated source."""

    @staticmethod
    def class_name(feature: str) -> str:
        return capitalize(feature)

    @staticmethod
    def controller_class(feature: str) -> str:
        return f"{capitalize(feature)}Controller"

    @staticmethod
    def use_case_class(feature: str) -> str:
        return f"Create{capitalize(feature)}UseCase"

    @staticmethod
    def controller_variable(feature: str) -> str:
        return f"{feature}Controller"

    @staticmethod
    def controller_module(feature: str) -> str:
        """Import path of the controller as seen from Server/index.ts."""
        return f"../Features/{feature}/delivery/controllers/{feature}.controller"

    @staticmethod
    def container_module(feature: str) -> str:
        """Import path of the feature's DI registrations as seen from Server/index.ts."""
        return f"../Features/{feature}/container"
