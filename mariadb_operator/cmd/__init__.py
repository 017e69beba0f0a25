"""
This module holds all of the command classes for the main entrypoint
"""

# Local
from .base import CmdBase
from .defaults_cmd import DefaultsCmd
from .evaluate_cmd import EvaluateCmd
