"""
Per-user directory layout for the scenario manager.

    ~/.ee-scenario-manager/
        config.toml
        scenarios/<identifier>.lua

The dispatcher builds one EsmDirs at startup and hands the paths to every
component; nothing else computes or creates the root on its own.
"""
import os
import logging
from typing import Optional

from esm.errors import StoreError

logger = logging.getLogger("esm.dirs")

DEFAULT_ROOT_DIR = os.path.expanduser("~/.ee-scenario-manager")
CONFIG_FILE_NAME = "config.toml"
SCENARIOS_DIR_NAME = "scenarios"


class EsmDirs:
    """Resolved root, scenario store and config paths."""

    def __init__(self, root_dir: Optional[str] = None):
        self.root_dir = os.path.abspath(root_dir or DEFAULT_ROOT_DIR)
        self.scenarios_dir = os.path.join(self.root_dir, SCENARIOS_DIR_NAME)
        self.config_path = os.path.join(self.root_dir, CONFIG_FILE_NAME)

    def ensure_root(self) -> str:
        """Create the root directory if needed and return it."""
        _ensure_dir(self.root_dir, "root")
        return self.root_dir

    def ensure_scenarios_dir(self) -> str:
        """Create the scenario directory (and the root) if needed and return it."""
        self.ensure_root()
        _ensure_dir(self.scenarios_dir, "scenarios")
        return self.scenarios_dir


def _ensure_dir(path: str, label: str) -> None:
    if os.path.isdir(path):
        return
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise StoreError(f"Could not create {label} directory {path}", str(e)) from e
    logger.info(f"Created {label} directory: {path}")
