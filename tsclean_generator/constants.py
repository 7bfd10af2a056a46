"""
Centralized constants for the tsclean generator.

Field-type tokens, rule tokens, the per-type mapping tables, sample values,
default configuration and the layout of a generated project all live here so
the parser, the mapper and the emitter agree on them.
"""

from typing import Dict, List


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    PROJECT_PATH = "."
    DEFAULT_FIELDS = "name:string:minlength=3,email:string:email"

    MIN_NODE_VERSION = 18
    PORT = 3000
    MONGODB_HOST = "mongodb://localhost:27017"
    API_PREFIX = "/api"

    INSTALL_DEPENDENCIES = True
    CHECK_ENVIRONMENT = True


# =============================================================================
# FIELD DSL
# =============================================================================

class FieldDSL:
    """Separators of the compact field grammar name:type[:rule],..."""

    FIELD_SEPARATOR = ","
    PART_SEPARATOR = ":"
    RULE_VALUE_SEPARATOR = "="
    ENUM_SEPARATOR = "|"
    MAX_PARTS = 3


class FieldTypeTokens:
    """Type tokens understood by the mapper."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class RuleTokens:
    """Rule tokens understood by the validator compiler."""

    EMAIL = "email"
    MIN_LENGTH = "minlength"
    MAX_LENGTH = "maxlength"
    MIN = "min"
    MAX = "max"
    ENUM = "enum"


# =============================================================================
# TYPE MAPPINGS
# =============================================================================

class StaticTypes:
    """TypeScript type annotations."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    FALLBACK = "any"


class SchemaTypes:
    """Mongoose schema types."""

    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    FALLBACK = "Mixed"


class ValidatorTypes:
    """Zod base validators."""

    STRING = "z.string()"
    NUMBER = "z.number()"
    BOOLEAN = "z.boolean()"
    FALLBACK = "z.any()"

    # Bases that accept .min()/.max() refinements
    BOUNDED = [STRING, NUMBER]


STATIC_TYPE_MAP: Dict[str, str] = {
    FieldTypeTokens.STRING: StaticTypes.STRING,
    FieldTypeTokens.NUMBER: StaticTypes.NUMBER,
    FieldTypeTokens.BOOLEAN: StaticTypes.BOOLEAN,
}

SCHEMA_TYPE_MAP: Dict[str, str] = {
    FieldTypeTokens.STRING: SchemaTypes.STRING,
    FieldTypeTokens.NUMBER: SchemaTypes.NUMBER,
    FieldTypeTokens.BOOLEAN: SchemaTypes.BOOLEAN,
}

VALIDATOR_TYPE_MAP: Dict[str, str] = {
    FieldTypeTokens.STRING: ValidatorTypes.STRING,
    FieldTypeTokens.NUMBER: ValidatorTypes.NUMBER,
    FieldTypeTokens.BOOLEAN: ValidatorTypes.BOOLEAN,
}


class SampleValues:
    """Values used in generated sample payloads."""

    STRING_PREFIX = "sample_"
    EMAIL = "test@example.com"
    NUMBER = 123
    BOOLEAN = True
    FALLBACK = None

    # Character used to pad string samples up to a minimum length
    PAD_CHARACTER = "x"

    # Id used for entities constructed inside generated tests
    TEST_ENTITY_ID = "123"


# =============================================================================
# GENERATED PROJECT LAYOUT
# =============================================================================

class ProjectPaths:
    """Relative paths inside a generated project."""

    ENTRY_POINT = "Server/index.ts"
    README = "README.md"
    PACKAGE_JSON = "package.json"
    TSCONFIG = "tsconfig.json"
    JEST_CONFIG = "jest.config.ts"
    ENV_FILE = ".env"
    GITIGNORE = ".gitignore"
    RESULT = "Core/result/result.ts"
    CUSTOM_ERROR = "Core/error/custom-error.ts"
    DATABASE = "Core/config/database.ts"

    FEATURES_DIR = "Features"
    TESTS_DIR = "__tests__"

    # Directories a feature owns; some stay empty until the user fills them
    FEATURE_DIRS: List[str] = [
        "domain/entity",
        "domain/usecases",
        "domain/repositories",
        "data/repositories",
        "data/datasources",
        "data/models",
        "delivery/routes",
        "delivery/controllers",
        "delivery/middlewares",
    ]


class ToolchainCommands:
    """Executables checked during the preflight."""

    NODE = "node"
    NPM = "npm"
    TSC = "tsc"


# Versions pinned in the generated package.json
NPM_DEPENDENCIES: Dict[str, str] = {
    "dotenv": "^16.4.5",
    "express": "^4.21.1",
    "mongoose": "^8.7.2",
    "reflect-metadata": "^0.2.2",
    "tsyringe": "^4.8.0",
    "zod": "^3.23.8",
}

NPM_DEV_DEPENDENCIES: Dict[str, str] = {
    "@types/express": "^5.0.0",
    "@types/jest": "^29.5.13",
    "@types/node": "^22.7.5",
    "@types/supertest": "^6.0.2",
    "jest": "^29.7.0",
    "nodemon": "^3.1.7",
    "supertest": "^7.0.0",
    "ts-jest": "^29.2.5",
    "ts-node": "^10.9.2",
    "typescript": "^5.6.3",
}


# =============================================================================
# NAMING
# =============================================================================

# Words that cannot be used as plain JavaScript identifiers
JS_RESERVED_WORDS = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "yield", "let", "static",
    "implements", "interface", "package", "private", "protected", "public",
    "await",
})

# Field name every generated entity already declares
RESERVED_FIELD_NAMES = frozenset({"id"})
