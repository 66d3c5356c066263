"""Whisker error hierarchy.

All whisker-specific errors inherit from WhiskerError for easy catching.
"""


class WhiskerError(Exception):
    """Base error for all whisker operations."""


class ConfigError(WhiskerError):
    """Invalid or missing configuration."""


class RouteResolutionError(WhiskerError):
    """The dynamic route configuration could not be resolved."""


class ExportError(WhiskerError):
    """Error during static generation outside a single route."""


class MinifyError(WhiskerError):
    """HTML minification failed for a rendered route."""


class RenderTimeoutError(WhiskerError):
    """A route did not finish rendering within the configured timeout."""
