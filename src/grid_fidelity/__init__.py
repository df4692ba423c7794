"""Sparse spreadsheet grid model with cross-format fidelity checks."""

from grid_fidelity._version import __version__
from grid_fidelity.builder import *  # noqa: F403
from grid_fidelity.cell import *  # noqa: F403
from grid_fidelity.checker import *  # noqa: F403
from grid_fidelity.codecs import *  # noqa: F403
from grid_fidelity.constants import *  # noqa: F403
from grid_fidelity.document import *  # noqa: F403
from grid_fidelity.exceptions import *  # noqa: F403
from grid_fidelity.profiles import *  # noqa: F403
from grid_fidelity.streaming import *  # noqa: F403
from grid_fidelity.styles import *  # noqa: F403


def _get_version() -> str:
    return __version__
