import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateError,
    select_autoescape,
)
from inflect import engine as inflect_engine

from tsclean_generator.config_validation import ToolConfigSchema
from tsclean_generator.constants import (
    NPM_DEPENDENCIES,
    NPM_DEV_DEPENDENCIES,
    ProjectPaths,
    SampleValues,
    ValidatorTypes,
)
from tsclean_generator.domain import (
    FeatureSpec,
    GeneratedFile,
    NamingConventions,
    ProjectRegistry,
    build_field_mappings,
    build_validator_schema,
    sample_json,
)
from tsclean_generator.domain.field_mapping import object_key
from tsclean_generator.domain.naming import is_valid_js_identifier
from tsclean_generator.exceptions import CodeGenerationError


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"

_INFLECT_ENGINE_ = inflect_engine()

# (template, output path) per feature; {f} is the feature name
FEATURE_TEMPLATES = [
    ("feature/container.ts.j2", "Features/{f}/container.ts"),
    ("feature/entity.ts.j2", "Features/{f}/domain/entity/{f}.entity.ts"),
    ("feature/repository_interface.ts.j2", "Features/{f}/domain/repositories/{f}.repository.interface.ts"),
    ("feature/usecase.ts.j2", "Features/{f}/domain/usecases/create-{f}.usecase.ts"),
    ("feature/model.ts.j2", "Features/{f}/data/models/{f}.model.ts"),
    ("feature/datasource.ts.j2", "Features/{f}/data/datasources/{f}.datasource.ts"),
    ("feature/repository.ts.j2", "Features/{f}/data/repositories/{f}.repository.ts"),
    ("feature/middleware.ts.j2", "Features/{f}/delivery/middlewares/validate-{f}.middleware.ts"),
    ("feature/controller.ts.j2", "Features/{f}/delivery/controllers/{f}.controller.ts"),
    ("feature/usecase_test.ts.j2", "__tests__/Features/{f}/{f}.usecase.test.ts"),
    ("feature/controller_test.ts.j2", "__tests__/Features/{f}/{f}.controller.test.ts"),
]

SHARED_TEMPLATES = [
    ("shared/package.json.j2", ProjectPaths.PACKAGE_JSON),
    ("shared/tsconfig.json.j2", ProjectPaths.TSCONFIG),
    ("shared/jest.config.ts.j2", ProjectPaths.JEST_CONFIG),
    ("shared/env.j2", ProjectPaths.ENV_FILE),
    ("shared/gitignore.j2", ProjectPaths.GITIGNORE),
    ("shared/result.ts.j2", ProjectPaths.RESULT),
    ("shared/custom_error.ts.j2", ProjectPaths.CUSTOM_ERROR),
    ("shared/database.ts.j2", ProjectPaths.DATABASE),
]


def jinja2_member_filter(name):
    """
    Custom Jinja filter rendering property access on an object.

    Uses dot access for identifiers and bracket access otherwise.
    """
    if is_valid_js_identifier(name):
        return f".{name}"
    return f"[{json.dumps(name)}]"


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        # Generated TypeScript and JSON must never be HTML-escaped
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,  # Remove first newline after a block tag
        lstrip_blocks=True,  # Strip leading whitespace from lines with block tags
        keep_trailing_newline=True,
    )
    env.filters["json"] = json.dumps
    env.filters["key"] = object_key
    env.filters["member"] = jinja2_member_filter
    env.globals["p"] = _INFLECT_ENGINE_
    return env


def render_template(env: Environment, template_name: str, context: Dict[str, Any], feature: str = None) -> str:
    """Renders a Jinja template, wrapping template failures in CodeGenerationError."""
    try:
        template = env.get_template(template_name)
        return template.render(context)
    except TemplateError as e:
        logger.error(f"Error rendering template '{template_name}': {e}")
        raise CodeGenerationError(
            f"Failed to render template '{template_name}': {e}",
            template=template_name,
            feature=feature,
        ) from e


def _resolve_config(config: Optional[ToolConfigSchema]) -> ToolConfigSchema:
    return config if config is not None else ToolConfigSchema()


def feature_route(name: str, config: ToolConfigSchema) -> str:
    """Path the feature router is mounted under, e.g. '/api/products'."""
    return f"{config.api_prefix}/{name}"


def build_feature_context(feature: FeatureSpec, config: Optional[ToolConfigSchema] = None) -> Dict[str, Any]:
    """
    Build the template context shared by every per-feature template.

    All field-dependent values (entity parameters, schema entries, the zod
    object and the sample payload) come from one list of FieldMapping.
    """
    config = _resolve_config(config)
    mappings = build_field_mappings(feature.fields)
    return {
        "name": feature.variable_name,
        "Feature": feature.class_name,
        "UseCase": NamingConventions.use_case_class(feature.name),
        "fields": mappings,
        "validator_schema": build_validator_schema(mappings, indent="  "),
        "sample_json": sample_json(mappings),
        "route": feature_route(feature.name, config),
        "article": _INFLECT_ENGINE_.a(feature.name),
        "test_id": SampleValues.TEST_ENTITY_ID,
        # z.any() accepts a missing key, so an empty body only fails when some field is typed
        "has_required_fields": any(m.validator != ValidatorTypes.FALLBACK for m in mappings),
    }


def feature_directories(feature: FeatureSpec) -> List[str]:
    """Directories a feature owns, relative to the project root."""
    base = f"{ProjectPaths.FEATURES_DIR}/{feature.name}"
    dirs = [f"{base}/{sub}" for sub in ProjectPaths.FEATURE_DIRS]
    dirs.append(f"{ProjectPaths.TESTS_DIR}/{ProjectPaths.FEATURES_DIR}/{feature.name}")
    return dirs


def emit_feature(
    feature: FeatureSpec,
    config: Optional[ToolConfigSchema] = None,
    env: Optional[Environment] = None,
) -> List[GeneratedFile]:
    """
    Render the source, wiring and test files of one feature.

    Args:
        feature: Feature name and its parsed fields
        config: Tool configuration (defaults when None)
        env: Jinja environment; a new one is created when None

    Returns:
        The eleven per-feature documents, in a fixed order
    """
    env = env or setup_jinja_env()
    context = build_feature_context(feature, config)
    files = []
    for template_name, path_pattern in FEATURE_TEMPLATES:
        path = path_pattern.format(f=feature.name)
        content = render_template(env, template_name, context, feature=feature.name)
        files.append(GeneratedFile(path=path, content=content))
        logger.debug(f"Rendered {path}")
    return files


def emit_shared_files(
    project_name: str,
    config: Optional[ToolConfigSchema] = None,
    env: Optional[Environment] = None,
) -> List[GeneratedFile]:
    """Render the project-wide files: manifests, .env, .gitignore and Core/."""
    config = _resolve_config(config)
    env = env or setup_jinja_env()
    context = {
        "project_name": project_name,
        "dependencies": NPM_DEPENDENCIES,
        "dev_dependencies": NPM_DEV_DEPENDENCIES,
        "port": config.port,
        "mongodb_uri": f"{config.mongodb_host.rstrip('/')}/{project_name}",
    }
    return [
        GeneratedFile(path=path, content=render_template(env, template_name, context))
        for template_name, path in SHARED_TEMPLATES
    ]


def _registry_context(registry: ProjectRegistry, config: ToolConfigSchema) -> Dict[str, Any]:
    features = []
    for registered in registry.features:
        name = registered.name
        features.append({
            "name": name,
            "sample_json": registered.sample_json,
            "route": feature_route(name, config),
            "controller_class": NamingConventions.controller_class(name),
            "controller_variable": NamingConventions.controller_variable(name),
            "controller_module": NamingConventions.controller_module(name),
            "container_module": NamingConventions.container_module(name),
        })
    return {
        "project_name": registry.project_name,
        "features": features,
        "port": config.port,
        "base_url": f"http://localhost:{config.port}",
    }


def render_entry_point(
    registry: ProjectRegistry,
    config: Optional[ToolConfigSchema] = None,
    env: Optional[Environment] = None,
) -> GeneratedFile:
    """Render Server/index.ts wiring every registered feature, in registry order."""
    config = _resolve_config(config)
    env = env or setup_jinja_env()
    content = render_template(env, "shared/server_index.ts.j2", _registry_context(registry, config))
    return GeneratedFile(path=ProjectPaths.ENTRY_POINT, content=content)


def render_readme(
    registry: ProjectRegistry,
    config: Optional[ToolConfigSchema] = None,
    env: Optional[Environment] = None,
) -> GeneratedFile:
    """Render README.md with one curl example per registered feature."""
    config = _resolve_config(config)
    env = env or setup_jinja_env()
    content = render_template(env, "shared/README.md.j2", _registry_context(registry, config))
    return GeneratedFile(path=ProjectPaths.README, content=content)


def build_registry(project_name: str, features: Iterable[FeatureSpec]) -> ProjectRegistry:
    """Registry of a new project, features in the order given."""
    registry = ProjectRegistry(project_name=project_name)
    for feature in features:
        registry.register(feature.name, sample_json(build_field_mappings(feature.fields)))
    return registry


def emit_project(
    project_name: str,
    features: List[FeatureSpec],
    config: Optional[ToolConfigSchema] = None,
) -> List[GeneratedFile]:
    """
    Render every file of a new project.

    Returns:
        Shared files, then the entry point and README, then each feature's files
    """
    config = _resolve_config(config)
    env = setup_jinja_env()
    registry = build_registry(project_name, features)

    files = emit_shared_files(project_name, config, env)
    files.append(render_entry_point(registry, config, env))
    files.append(render_readme(registry, config, env))
    for feature in features:
        files.extend(emit_feature(feature, config, env))
    return files


def write_files(project_root: Path, files: Iterable[GeneratedFile]) -> List[Path]:
    """
    Write generated files below project_root, creating parent directories.

    Existing files are overwritten.
    """
    written = []
    for generated in files:
        output_path = Path(project_root) / generated.path
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(generated.content)
        except OSError as e:
            logger.error(f"Error writing '{output_path}': {e}")
            raise CodeGenerationError(f"Failed to write '{output_path}': {e}") from e
        logger.debug(f"Generated file: {output_path}")
        written.append(output_path)
    return written


def make_directories(project_root: Path, directories: Iterable[str]) -> None:
    """Create (possibly empty) directories below project_root."""
    for directory in directories:
        (Path(project_root) / directory).mkdir(parents=True, exist_ok=True)
