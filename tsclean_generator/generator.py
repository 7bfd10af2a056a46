"""
High-level generation workflows.

create_project scaffolds a new project directory with any number of
features; add_feature wires one more feature into an existing project by
re-rendering its entry point and README from the project registry.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from .codegen import (
    emit_feature,
    emit_project,
    feature_directories,
    make_directories,
    render_entry_point,
    render_readme,
    setup_jinja_env,
    write_files,
)
from .colored_logging import log_highlight, log_progress, log_section, log_success
from .config_validation import ToolConfigSchema
from .constants import ProjectPaths
from .domain import (
    FeatureSpec,
    GeneratedFile,
    GenerationResult,
    build_field_mappings,
    load_registry,
    resolve_fields,
    sample_json,
)
from .environment import check_toolchain, install_dependencies
from .exceptions import NotAProjectError, ProjectExistsError
from .validators import FeatureValidator

logger = logging.getLogger(__name__)

# Directories every new project has, even before a file lands in them
CORE_DIRECTORIES = ["Core/config", "Core/error", "Core/result", "Server", ProjectPaths.TESTS_DIR]


def build_feature(name: str, fields_spec: Optional[str], config: ToolConfigSchema) -> FeatureSpec:
    """Turn a feature name and its optional --fields value into a FeatureSpec."""
    return FeatureSpec(name=name, fields=tuple(resolve_fields(fields_spec, config.default_fields)))


def _validate_features(features: List[FeatureSpec]) -> List[str]:
    """Validate every feature; raise on errors, return the warnings."""
    warnings = []
    for feature in features:
        result = FeatureValidator.validate_feature(feature)
        result.raise_if_invalid()
        for warning in result.warnings:
            logger.warning(warning)
        warnings.extend(result.warnings)
    return warnings


def _write(project_root: Path, files: List[GeneratedFile]) -> None:
    write_files(project_root, files)
    for generated in files:
        log_success(logger, f"Created {generated.path}")


def create_project(
    project_name: str,
    path: str = ".",
    features: Optional[List[FeatureSpec]] = None,
    config: Optional[ToolConfigSchema] = None,
) -> GenerationResult:
    """
    Scaffold a new project at <path>/<project_name>.

    The target directory must not exist yet. Nothing is written when the
    toolchain preflight fails.

    Args:
        project_name: Project and directory name
        path: Parent directory of the new project
        features: Features to scaffold, in order
        config: Tool configuration (defaults when None)

    Returns:
        GenerationResult listing the written files and any warnings

    Raises:
        ProjectExistsError: if the target directory already exists
        EnvironmentCheckError: if the preflight fails
    """
    config = config or ToolConfigSchema()
    features = features or []
    project_root = Path(path) / project_name

    if project_root.exists():
        raise ProjectExistsError(str(project_root))

    if config.check_environment:
        check_toolchain(config.min_node_version)

    warnings = _validate_features(features)

    log_section(logger, f"Setting up project: {project_name}")
    files = emit_project(project_name, features, config)

    project_root.mkdir(parents=True)
    make_directories(project_root, CORE_DIRECTORIES)
    for feature in features:
        make_directories(project_root, feature_directories(feature))
        log_progress(logger, f"Created folder structure for feature: {feature.name}")
    _write(project_root, files)

    if config.install_dependencies:
        install_dependencies(project_root)

    log_success(logger, "Project setup complete!")
    log_highlight(logger, "To start the development server, run:")
    logger.info(f"  cd {project_root}")
    logger.info("  npm run dev")
    log_highlight(logger, "To run tests, run:")
    logger.info("  npm test")

    return GenerationResult(project_root=str(project_root), files=files, warnings=warnings)


def detect_project_name(project_root: Path) -> str:
    """Name of an existing project: package.json name, else the directory name."""
    package_json = project_root / ProjectPaths.PACKAGE_JSON
    if package_json.is_file():
        try:
            with open(package_json, "r", encoding="utf-8") as f:
                name = json.load(f).get("name")
            if isinstance(name, str) and name:
                return name
        except (OSError, ValueError, AttributeError) as e:
            logger.debug(f"Could not read project name from {package_json}: {e}")
    return project_root.resolve().name


def add_feature(
    project_root: str,
    name: str,
    fields_spec: Optional[str] = None,
    config: Optional[ToolConfigSchema] = None,
) -> GenerationResult:
    """
    Add a feature to the project at project_root.

    The entry point and README are parsed into a registry, the feature is
    merged in and both files are rendered again, so adding a feature that
    is already wired replaces it instead of wiring it twice.

    Raises:
        NotAProjectError: if project_root has no Server/index.ts
    """
    config = config or ToolConfigSchema()
    root = Path(project_root)
    entry_point = root / ProjectPaths.ENTRY_POINT

    if not entry_point.is_file():
        raise NotAProjectError(str(root), entry_point=str(entry_point))

    if config.check_environment:
        check_toolchain(config.min_node_version)

    feature = build_feature(name, fields_spec, config)
    warnings = _validate_features([feature])

    readme_path = root / ProjectPaths.README
    readme = readme_path.read_text(encoding="utf-8") if readme_path.is_file() else None
    registry = load_registry(
        entry_point.read_text(encoding="utf-8"),
        readme,
        fallback_project_name=detect_project_name(root),
    )

    log_section(logger, f"Adding feature: {feature.name}")
    if not registry.register(feature.name, sample_json(build_field_mappings(feature.fields))):
        logger.warning(f"Feature '{feature.name}' already exists; its files will be regenerated")

    env = setup_jinja_env()
    files = emit_feature(feature, config, env)
    files.append(render_entry_point(registry, config, env))
    files.append(render_readme(registry, config, env))

    make_directories(root, feature_directories(feature))
    _write(root, files)

    log_success(logger, f"Feature '{feature.name}' added to {registry.project_name}")
    return GenerationResult(project_root=str(root), files=files, warnings=warnings)


__all__ = ["create_project", "add_feature", "build_feature", "detect_project_name"]
