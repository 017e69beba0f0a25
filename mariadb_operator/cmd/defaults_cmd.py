"""
Print the image defaults resolved from the current environment
"""

# Standard
import argparse
import dataclasses

# First Party
import alog

# Local
from ..defaults import setup_defaults
from .base import CmdBase

log = alog.use_channel("MAIN")


class DefaultsCmd(CmdBase):
    __doc__ = __doc__

    name = "defaults"

    def cmd(self, args: argparse.Namespace):
        defaults = setup_defaults()
        log.debug2("Resolved defaults: %s", defaults)
        self.emit(dataclasses.asdict(defaults))
