"""
Custom exception hierarchy for the tsclean generator.

Every error the CLI can report is a subclass of TscleanGeneratorError, which
carries optional context and recovery suggestions alongside the message.
Generation-time degradations (unknown field types, ignored rules) are not
errors and never raise; they are reported as warnings instead.
"""

from typing import Dict, Any, Optional, List


class TscleanGeneratorError(Exception):
    """
    Base exception for all tsclean generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [super().__str__()]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class UsageError(TscleanGeneratorError):
    """Raised when the command line cannot be interpreted."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            context=kwargs.get('context'),
            suggestions=kwargs.get('suggestions'),
            error_code="USAGE_ERROR"
        )


class ConfigurationError(TscleanGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify the value types of every key",
                "Remove unknown keys or fix their spelling",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class ProjectExistsError(TscleanGeneratorError):
    """Raised when the target directory of a new project already exists."""

    def __init__(self, project_root: str, **kwargs):
        super().__init__(
            f"Directory {project_root} already exists. "
            "Please remove it or choose a different name.",
            context={'project_root': project_root},
            suggestions=kwargs.get('suggestions'),
            error_code="PROJECT_EXISTS"
        )


class NotAProjectError(TscleanGeneratorError):
    """Raised when a feature is added outside of a generated project."""

    def __init__(self, project_root: str, entry_point: str = None, **kwargs):
        context = {'project_root': project_root}
        if entry_point:
            context['entry_point'] = entry_point
        super().__init__(
            "Error: Current directory is not a tsclean project. Run from the project root.",
            context=context,
            suggestions=kwargs.get('suggestions'),
            error_code="NOT_A_PROJECT"
        )


class EnvironmentCheckError(TscleanGeneratorError):
    """Raised when a toolchain preflight check fails."""

    def __init__(self, message: str, tool: str = None, **kwargs):
        context = kwargs.get('context', {})
        if tool:
            context['tool'] = tool

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Install the missing tool and make sure it is on PATH",
                "Re-run with --skip-checks to bypass the preflight",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="ENVIRONMENT_ERROR"
        )


class CodeGenerationError(TscleanGeneratorError):
    """Raised when a template cannot be rendered or a file cannot be written."""

    def __init__(self, message: str, template: str = None, feature: str = None, **kwargs):
        context = kwargs.get('context', {})
        if template:
            context['template'] = template
        if feature:
            context['feature'] = feature

        super().__init__(
            message,
            context=context,
            suggestions=kwargs.get('suggestions'),
            error_code="CODE_GENERATION_ERROR"
        )
