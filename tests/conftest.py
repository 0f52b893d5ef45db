"""Shared pytest configuration for the inventory service."""

import os
from pathlib import Path

# Must be set before any src.inventory module loads its configuration
os.environ.setdefault("CONFIG_FILE", str(Path(__file__).parent / "config.test.yaml"))

from tests.fixtures import *  # noqa: E402,F401,F403
