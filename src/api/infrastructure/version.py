"""Application version.

Installed builds report their distribution metadata; source checkouts
(tests, alembic run from the repo) read ``[project].version`` instead.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "helpdesk-tenancy"

# src/api/infrastructure/version.py -> repository root
PYPROJECT_PATH = Path(__file__).resolve().parents[3] / "pyproject.toml"


def read_pyproject_version(path: Path = PYPROJECT_PATH) -> str:
    """Read ``[project].version`` from a pyproject file."""
    with path.open("rb") as f:
        return tomllib.load(f)["project"]["version"]


def get_version() -> str:
    """Installed distribution version, or the checkout's pyproject version."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return read_pyproject_version()


__version__ = get_version()
