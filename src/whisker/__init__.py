"""Whisker — batched static-site generation from Kida page templates.

Renders every route of a site through a renderer, writes each page to
``<output>/<route>/index.html``, and reports per-route failures without
aborting the run.

Quick start::

    import whisker

    report = whisker.generate("my-site/")
    for failure in report.errors:
        print(failure.route, failure.kind)

Routes come from two places: the page templates under ``pages/`` and the
``generate.routes`` setting, which lists extra routes (with payloads) for
parameterized pages::

    # whisker.yaml
    generate:
      routes:
        - /posts/hello
        - route: /posts/world
          payload: {title: World}

"""

__version__ = "0.1.0-dev"
__all__ = [
    "Generator",
    "WhiskerConfig",
    "__version__",
    "generate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import whisker`` fast and free of the renderer stack.
    """
    if name == "WhiskerConfig":
        from whisker.config import WhiskerConfig

        return WhiskerConfig

    if name == "Generator":
        from whisker.export.generator import Generator

        return Generator

    if name == "generate":
        from whisker.app import generate

        return generate

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
