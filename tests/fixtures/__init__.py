"""Shared pytest fixtures."""

from .core import *  # noqa: F401,F403
from .absences import *  # noqa: F401,F403
