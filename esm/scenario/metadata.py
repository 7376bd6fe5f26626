"""
Scenario header parser.

Scenario scripts carry their metadata in a block of comment lines at the
very top of the file:

    -- Name: Waves
    -- Description: Waves of increasingly difficult enemies.
    --- Long description, one line per '--- ' comment.
    ---
    --- A bare '---' keeps a blank line.
    -- Type: Basic
    require("utils.lua")

The header ends at the first line that does not start with '--'. Anything
after that point is never looked at, even if it looks like metadata.
"""
import logging
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger("esm.scenario.metadata")

COMMENT_PREFIX = "--"
KEY_VALUE_PREFIX = "-- "
LONG_DESCRIPTION_PREFIX = "--- "
BLANK_LONG_DESCRIPTION = "---"


@dataclass
class ScenarioMetadata:
    """Fields extracted from a scenario header. Missing fields stay empty."""
    name: str = ""
    description: str = ""
    description_long: str = ""
    scenario_type: str = ""


def parse_scenario_metadata(path: str) -> ScenarioMetadata:
    """
    Parse the metadata header of the scenario file at `path`.

    Args:
        path: Path to a scenario script

    Returns:
        ScenarioMetadata, possibly with every field empty

    Raises:
        OSError: if the file cannot be opened or read
    """
    with open(path, "rb") as f:
        return parse_metadata_lines(_decoded_lines(f, path))


def parse_metadata_lines(lines: Iterable[str]) -> ScenarioMetadata:
    """Parse header lines (without line terminators) into ScenarioMetadata."""
    metadata = ScenarioMetadata()
    for line in lines:
        if not line.startswith(COMMENT_PREFIX):
            break

        # '-- ' and '--- ' are checked independently, in this order.
        if line.startswith(KEY_VALUE_PREFIX):
            _parse_key_value(line[len(KEY_VALUE_PREFIX):], metadata)

        if line.startswith(LONG_DESCRIPTION_PREFIX):
            metadata.description_long += line[len(LONG_DESCRIPTION_PREFIX):] + "\n"

        if line == BLANK_LONG_DESCRIPTION:
            metadata.description_long += "\n"
    return metadata


def _parse_key_value(text: str, metadata: ScenarioMetadata) -> None:
    key, sep, value = text.partition(":")
    if not sep:
        return
    key = key.lower().strip()
    value = value.strip()
    if key == "name":
        metadata.name = value
    elif key == "description":
        metadata.description = value
    elif key == "type":
        metadata.scenario_type = value


def _decoded_lines(f, path: str):
    # Lines that are not valid UTF-8 are skipped, the scan goes on.
    for raw in f:
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug(f"Skipping undecodable line in {path}")
            continue
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        yield line
