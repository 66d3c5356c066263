"""Whisker configuration.

WhiskerConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from whisker._errors import ConfigError

_ROUTER_MODES = ("history", "hash")


def is_url(value: str) -> bool:
    """Return True if *value* is an absolute or protocol-relative URL."""
    return value.startswith(("http://", "https://", "//"))


@dataclass(frozen=True, slots=True)
class WhiskerConfig:
    """Configuration for a Whisker generation run.

    Attributes:
        root: Path to the site root directory (contains pages/, static/, etc.).
              Always resolved to an absolute path on construction.
        output: Output directory, wiped and rebuilt on every run.
        pages_dir: Directory containing Kida page templates.
        static_dir: Directory copied verbatim into the output root.
        assets_dir: Directory bundled by the build step.
        build_dir: Working directory for build artifacts.
        public_path: Path under the output root where build artifacts land.
            A full URL means the artifacts are served elsewhere and are
            copied to the output root itself.
        router_mode: ``"history"`` renders every route, ``"hash"`` renders
            only ``/``.
        generate_routes: Dynamic route configuration: a list of routes, a
            callable (sync or async) returning one, or a ``"module:attr"``
            string naming such a callable in the site root.
        interval: Delay in milliseconds between route starts within a batch.
        concurrency: Maximum number of routes rendered per batch.
        minify: ``False`` disables minification, ``True`` uses the default
            htmlmin options, a mapping passes options to htmlmin.
        do_build: Run the build step before generating.
        route_timeout: Seconds a single render may take before it is recorded
            as failed.  ``None`` waits indefinitely.

    """

    root: Path = field(default_factory=Path.cwd)
    output: Path = field(default_factory=lambda: Path("dist"))
    pages_dir: str = "pages"
    static_dir: str = "static"
    assets_dir: str = "assets"
    build_dir: str = ".whisker"
    public_path: str = "/_whisker/"
    router_mode: str = "history"
    generate_routes: Any = ()
    interval: float = 0.0
    concurrency: int = 500
    minify: bool | dict[str, Any] = False
    do_build: bool = True
    route_timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if self.router_mode not in _ROUTER_MODES:
            msg = f"router_mode must be one of {_ROUTER_MODES}, got {self.router_mode!r}"
            raise ConfigError(msg)
        if self.concurrency < 1:
            msg = f"concurrency must be at least 1, got {self.concurrency}"
            raise ConfigError(msg)
        if self.interval < 0:
            msg = f"interval must not be negative, got {self.interval}"
            raise ConfigError(msg)
        if self.route_timeout is not None and self.route_timeout <= 0:
            msg = f"route_timeout must be positive, got {self.route_timeout}"
            raise ConfigError(msg)

    @property
    def pages_path(self) -> Path:
        """Absolute path to the page templates directory."""
        return self.root / self.pages_dir

    @property
    def static_path(self) -> Path:
        """Absolute path to the static files directory."""
        return self.root / self.static_dir

    @property
    def assets_path(self) -> Path:
        """Absolute path to the assets directory consumed by the build step."""
        return self.root / self.assets_dir

    @property
    def build_path(self) -> Path:
        """Absolute path to the build artifacts directory."""
        return self.root / self.build_dir / "dist"

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output

    @property
    def public_path_is_external_url(self) -> bool:
        return is_url(self.public_path)

    @property
    def artifacts_output_path(self) -> Path:
        """Where build artifacts are copied inside the output directory."""
        if self.public_path_is_external_url:
            return self.output_path
        return self.output_path / self.public_path.strip("/")
