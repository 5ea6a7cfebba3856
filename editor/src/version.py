"""Application version module.

Frozen builds set _BAKED_VERSION before packaging.
From source the VERSION file at the project root is used; an installed
copy falls back to the distribution metadata.
"""

from pathlib import Path

# Overwritten when packaging a frozen build.
_BAKED_VERSION = None

DISTRIBUTION_NAME = "layer-tagger"


def get_version() -> str:
    """Get the application version string (e.g. '0.3.0')."""
    if _BAKED_VERSION is not None:
        return _BAKED_VERSION

    # editor/src/version.py -> ../../VERSION
    version_file = Path(__file__).resolve().parent.parent.parent / "VERSION"
    try:
        return version_file.read_text().strip()
    except FileNotFoundError:
        pass

    from importlib import metadata
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"
