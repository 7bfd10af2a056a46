"""
Structured model of the features wired into a generated project.

Adding a feature to an existing project does not append lines to the
entry point. Instead the entry point and README are parsed back into a
ProjectRegistry, the new feature is merged in and both files are rendered
again from the registry. Registering a feature that is already present
replaces its entry in place, so repeated additions are idempotent.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

EMPTY_SAMPLE_JSON = "{}"

_CONTROLLER_IMPORT_RE = re.compile(
    r"^import \{ \S+Controller \} from '\.\./Features/(?P<name>[^/']+)/delivery/controllers/[^']+';\s*$",
    re.MULTILINE,
)
_FEATURE_BINDING_IMPORT_RE = re.compile(
    r"^import \{[^}]*\} from '\.\./Features/(?P<name>[^/']+)/[^']*';?\s*$",
    re.MULTILINE,
)
_README_TITLE_RE = re.compile(r"^# (?P<title>.+?)\s*$", re.MULTILINE)
_README_CURL_RE = re.compile(
    r"^\s*curl -X POST \S*/(?P<name>[^/\s]+) -H \"Content-Type: application/json\" -d '(?P<payload>.*)'\s*$",
    re.MULTILINE,
)


@dataclass
class RegisteredFeature:
    """A feature wired into the entry point, with its README sample payload."""

    name: str
    sample_json: str = EMPTY_SAMPLE_JSON


@dataclass
class ProjectRegistry:
    """Ordered list of the features a project wires, plus its display name."""

    project_name: str
    features: List[RegisteredFeature] = field(default_factory=list)

    @property
    def feature_names(self) -> List[str]:
        return [f.name for f in self.features]

    def get(self, name: str) -> Optional[RegisteredFeature]:
        for feature in self.features:
            if feature.name == name:
                return feature
        return None

    def register(self, name: str, sample_json: str = EMPTY_SAMPLE_JSON) -> bool:
        """
        Add a feature, or refresh the sample of an existing one.

        Returns:
            True when the feature was not registered before
        """
        existing = self.get(name)
        if existing is not None:
            logger.debug(f"Feature '{name}' is already wired; refreshing its entry")
            existing.sample_json = sample_json
            return False
        self.features.append(RegisteredFeature(name=name, sample_json=sample_json))
        return True


def parse_entry_point(content: str) -> List[str]:
    """
    Recover the wired feature names from a generated Server/index.ts.

    Names are returned in the order their controller imports appear, each
    at most once, with their original case. A named import from a feature
    directory that is not a controller import is reported and skipped,
    since that feature would drop out of the re-rendered entry point.
    """
    names: List[str] = []
    for match in _CONTROLLER_IMPORT_RE.finditer(content):
        name = match.group("name")
        if name not in names:
            names.append(name)
    for match in _FEATURE_BINDING_IMPORT_RE.finditer(content):
        if match.group("name") not in names:
            logger.warning(
                f"Unrecognized import of feature '{match.group('name')}' in the entry point; "
                f"it will not be wired after regeneration: {match.group(0).strip()}"
            )
    return names


def parse_readme(content: str) -> Tuple[Optional[str], Dict[str, str]]:
    """
    Recover the project title and per-feature sample payloads from a README.

    Returns:
        (title or None, {feature name: sample JSON})
    """
    title_match = _README_TITLE_RE.search(content)
    title = title_match.group("title") if title_match else None
    samples: Dict[str, str] = {}
    for match in _README_CURL_RE.finditer(content):
        samples[match.group("name")] = match.group("payload")
    return title, samples


def load_registry(
    entry_point: str,
    readme: Optional[str] = None,
    fallback_project_name: str = "Project",
) -> ProjectRegistry:
    """
    Build the registry of an existing project from its entry point and README.

    The entry point decides which features are wired and in which order; the
    README contributes the project title and the sample payloads.
    """
    title, samples = parse_readme(readme) if readme else (None, {})
    registry = ProjectRegistry(project_name=title or fallback_project_name)
    for name in parse_entry_point(entry_point):
        registry.register(name, samples.get(name, EMPTY_SAMPLE_JSON))
    logger.debug(f"Loaded registry for '{registry.project_name}': {registry.feature_names}")
    return registry
