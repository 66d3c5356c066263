"""HTML minification for generated pages, backed by htmlmin."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import htmlmin

from whisker._errors import ConfigError

# Applied when minification is enabled with ``minify: true``
DEFAULT_MINIFY_OPTIONS: dict[str, Any] = {
    "remove_comments": True,
    "remove_empty_space": True,
    "reduce_boolean_attributes": True,
    "remove_optional_attribute_quotes": False,
    "keep_pre": True,
}


class HtmlMinifier:
    """Callable that minifies an HTML string with fixed htmlmin options.

    Raises whatever htmlmin raises; the generator records it against the
    route being processed.
    """

    __slots__ = ("_options",)

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        self._options = dict(DEFAULT_MINIFY_OPTIONS if options is None else options)

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    def __call__(self, markup: str) -> str:
        return htmlmin.minify(markup, **self._options)


def minifier_from_config(value: bool | Mapping[str, Any] | None) -> HtmlMinifier | None:
    """Build the minifier described by the ``minify`` config value.

    ``None``/``False`` disable minification, ``True`` uses the default
    options, and a mapping is passed to htmlmin as keyword options.

    """
    if value is None or value is False:
        return None
    if value is True:
        return HtmlMinifier()
    if isinstance(value, Mapping):
        return HtmlMinifier(value)
    msg = f"minify must be a bool or a mapping of htmlmin options, got {type(value).__name__}"
    raise ConfigError(msg)
