"""Top-level package for orgscribe."""

__version__ = "0.1.0"

from . import config, postprocess, storage, transcriber  # noqa: E402

__all__ = ["config", "postprocess", "storage", "transcriber", "__version__"]
