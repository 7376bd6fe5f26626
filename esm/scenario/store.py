"""
File-based store of installed scenarios.

The directory listing is the catalog: one `<identifier>.lua` file per
scenario, the identifier being the file stem.
"""
import os
import errno
import shutil
import logging
from dataclasses import dataclass
from typing import List

from esm.errors import (
    InvalidIdentifierError,
    ScenarioExistsError,
    ScenarioNotFoundError,
    StoreError,
)

logger = logging.getLogger("esm.scenario.store")

SCENARIO_EXTENSION = ".lua"


def validate_identifier(identifier: str) -> str:
    """
    Reject identifiers that cannot name a file directly inside the store.

    Returns the identifier unchanged when it is acceptable.
    """
    if not identifier or not identifier.strip():
        raise InvalidIdentifierError("Scenario identifier must not be empty")
    if "/" in identifier or "\\" in identifier or "\x00" in identifier:
        raise InvalidIdentifierError(f"Invalid scenario identifier: {identifier!r}",
                                     "path separators are not allowed")
    if identifier.startswith("."):
        raise InvalidIdentifierError(f"Invalid scenario identifier: {identifier!r}",
                                     "identifiers may not start with '.'")
    return identifier


@dataclass
class ScenarioEntry:
    """A scenario file found in the store."""
    identifier: str
    file_name: str
    path: str
    size: int


class ScenarioStore:
    """Manage the directory of installed scenario scripts."""

    def __init__(self, scenarios_dir: str):
        self.scenarios_dir = scenarios_dir

    def ensure_directory(self) -> str:
        """Create the store directory (and parents) if absent and return it."""
        if not os.path.isdir(self.scenarios_dir):
            try:
                os.makedirs(self.scenarios_dir, exist_ok=True)
            except OSError as e:
                raise StoreError(f"Could not create scenarios directory {self.scenarios_dir}",
                                 str(e)) from e
            logger.info(f"Created scenarios directory: {self.scenarios_dir}")
        return self.scenarios_dir

    def list(self) -> List[ScenarioEntry]:
        """Return one entry per `<identifier>.lua` file in the store, sorted by file name."""
        entries = []
        try:
            with os.scandir(self.scenarios_dir) as it:
                for dir_entry in it:
                    if not dir_entry.is_file() or not dir_entry.name.endswith(SCENARIO_EXTENSION):
                        continue
                    identifier = dir_entry.name[:-len(SCENARIO_EXTENSION)]
                    if not identifier or identifier.startswith("."):
                        continue
                    entries.append(ScenarioEntry(
                        identifier=identifier,
                        file_name=dir_entry.name,
                        path=dir_entry.path,
                        size=dir_entry.stat().st_size,
                    ))
        except OSError as e:
            raise StoreError(f"Could not read scenario directory {self.scenarios_dir}",
                             str(e)) from e
        entries.sort(key=lambda entry: entry.file_name)
        return entries

    def path_for(self, identifier: str) -> str:
        """Path of the scenario file for `identifier`. No I/O."""
        return os.path.join(self.scenarios_dir, identifier + SCENARIO_EXTENSION)

    def exists(self, identifier: str) -> bool:
        return os.path.exists(self.path_for(identifier))

    def remove(self, identifier: str) -> str:
        """
        Delete a single installed scenario.

        Returns:
            Path of the removed file

        Raises:
            ScenarioNotFoundError: if the scenario is not installed
            StoreError: if the file exists but could not be deleted
        """
        validate_identifier(identifier)
        path = self.path_for(identifier)
        if not os.path.exists(path):
            raise ScenarioNotFoundError(f"Scenario {identifier} is not installed")
        try:
            os.remove(path)
        except FileNotFoundError as e:
            raise ScenarioNotFoundError(f"Scenario {identifier} is not installed") from e
        except OSError as e:
            raise StoreError("Could not remove scenario file", str(e)) from e
        logger.info(f"Removed scenario {identifier}: {path}")
        return path

    def clear(self) -> str:
        """Delete the whole store directory tree. Callers confirm first."""
        if not os.path.exists(self.scenarios_dir):
            logger.info(f"Scenario directory already absent: {self.scenarios_dir}")
            return self.scenarios_dir
        try:
            shutil.rmtree(self.scenarios_dir)
        except OSError as e:
            raise StoreError("Could not remove scenario directory", str(e)) from e
        logger.info(f"Removed scenario directory: {self.scenarios_dir}")
        return self.scenarios_dir

    def install(self, source_path: str, identifier: str, overwrite_confirmed: bool = False) -> str:
        """
        Move a staged file into the store as `<identifier>.lua`.

        An existing scenario is only replaced when `overwrite_confirmed` is set;
        otherwise ScenarioExistsError is raised and nothing is touched.

        Returns:
            Destination path
        """
        validate_identifier(identifier)
        dest = self.path_for(identifier)
        if os.path.exists(dest) and not overwrite_confirmed:
            raise ScenarioExistsError(f"Scenario {identifier} is already installed", dest)

        self.ensure_directory()
        try:
            os.replace(source_path, dest)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise StoreError("Could not move file", str(e)) from e
            # Staging area on another filesystem: rename is not possible.
            logger.debug(f"Cross-device move from {source_path} to {dest}")
            try:
                shutil.move(source_path, dest)
            except OSError as move_error:
                raise StoreError("Could not move file", str(move_error)) from move_error
        logger.info(f"Installed scenario {identifier}: {dest}")
        return dest
