#!/usr/bin/env python
"""
The main module provides the executable entrypoint for mariadb_operator
"""

# Standard
from typing import Dict, Tuple
import argparse

# First Party
import aconfig
import alog

# Local
from . import config
from .cmd import CmdBase, DefaultsCmd, EvaluateCmd
from .config import library_config

log = alog.use_channel("MAIN")

## Helpers #####################################################################


def add_library_config_args(parser, config_obj=None, path=None):
    """Automatically add args for all elements of the library config"""
    path = path or []
    setters = {}
    config_obj = config_obj or library_config
    for key, val in config_obj.items():
        sub_path = path + [key]

        # If this is a nested arg, recurse
        if isinstance(val, aconfig.AttributeAccessDict):
            setters.update(
                add_library_config_args(parser, config_obj=val, path=sub_path)
            )
            continue

        arg_name = ".".join(sub_path)
        dest_name = "_".join(sub_path)
        kwargs = {
            "default": val,
            "dest": dest_name,
            "help": f"Library config override for {arg_name}",
        }
        if isinstance(val, bool):
            kwargs["action"] = argparse.BooleanOptionalAction
        elif val is not None:
            kwargs["type"] = type(val)
        parser.add_argument(f"--{arg_name}", **kwargs)
        setters[dest_name] = sub_path
    return setters


def update_library_config(args, setters):
    """Update the library config values based on the parsed arguments"""
    for dest_name, config_path in setters.items():
        config_obj = library_config
        while len(config_path) > 1:
            config_obj = config_obj[config_path[0]]
            config_path = config_path[1:]
        config_obj[config_path[0]] = getattr(args, dest_name)


def add_command(
    subparsers: argparse._SubParsersAction,
    cmd: CmdBase,
) -> Tuple[argparse.ArgumentParser, Dict[str, str]]:
    """Add the command's subparser along with the library config flags"""
    parser = cmd.add_subparser(subparsers)
    library_args = parser.add_argument_group("Library Configuration")
    library_config_setters = add_library_config_args(library_args)
    return parser, library_config_setters


## Main ########################################################################


def main(argv=None):
    """The main module provides the executable entrypoint for mariadb_operator"""
    parser = argparse.ArgumentParser(description=__doc__)
    subparsers = parser.add_subparsers(
        help="Available commands", dest="command", required=True
    )
    setters = {}
    for cmd in [EvaluateCmd(), DefaultsCmd()]:
        _, cmd_setters = add_command(subparsers, cmd)
        setters.update(cmd_setters)
    args = parser.parse_args(argv)

    # Provide overrides to the library configs
    update_library_config(args, setters)

    # Reconfigure logging with any overrides
    config.configure_logging()

    args.func(args)


if __name__ == "__main__":  # pragma: no cover
    main()
