"""
Scenario handling for the scenario manager: header metadata parsing and the
on-disk store of installed scenario scripts.
"""

from .metadata import ScenarioMetadata, parse_scenario_metadata, parse_metadata_lines
from .store import ScenarioEntry, ScenarioStore, validate_identifier

__all__ = [
    'ScenarioMetadata',
    'parse_scenario_metadata',
    'parse_metadata_lines',
    'ScenarioEntry',
    'ScenarioStore',
    'validate_identifier',
]
