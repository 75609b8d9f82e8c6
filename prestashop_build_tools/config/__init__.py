"""
Configuration package façade.

* :class:`Manifest` – read-only dot-path accessor over ``composer.json``.
* :func:`load_build_config` / :func:`load_prefix_config` – merge CLI flags
  with manifest defaults into frozen pydantic models.
"""

from .loader import load_build_config, load_prefix_config  # noqa: F401
from .manifest import Manifest  # noqa: F401
from .schema import BuildConfig, PrefixConfig  # noqa: F401

__all__: list[str] = [
    "Manifest",
    "BuildConfig",
    "PrefixConfig",
    "load_build_config",
    "load_prefix_config",
]
