"""Shared pytest fixtures."""

from .core import *  # noqa: F401,F403
from .dummies import *  # noqa: F401,F403
