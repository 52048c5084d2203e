"""
Version information for lazyload.

``__version__`` comes from the installed distribution's metadata. Running
from a source checkout without installing falls back to the ``[project]``
version in pyproject.toml, and to a ``-dev`` placeholder when neither is
available.
"""

try:
    from importlib.metadata import version

    __version__ = version("lazyload")
except Exception:
    import tomllib
    from pathlib import Path

    try:
        pyproject_path = Path(__file__).resolve().parents[1] / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    except Exception:
        __version__ = "0.0.0-dev"
