"""
Empty Epsilon scenario manager.

Installs, lists and removes scenario scripts kept under
~/.ee-scenario-manager/scenarios and stores a small user configuration.
"""

__version__ = "0.1.0"
