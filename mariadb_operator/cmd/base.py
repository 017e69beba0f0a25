"""
Shared plumbing for the mariadb_operator subcommands
"""

# Standard
import abc
import argparse

# Third Party
import yaml


class CmdBase(abc.ABC):
    """A subcommand of the main entrypoint. Subclasses set name and implement
    cmd(). The class docstring is used as the command help.
    """

    name: str = None

    def add_subparser(
        self,
        subparsers: argparse._SubParsersAction,
    ) -> argparse.ArgumentParser:
        """Register this command and route it to cmd()

        Args:
            subparsers (argparse._SubParsersAction): The subparser section for
                the central main parser

        Returns:
            subparser (argparse.ArgumentParser): The configured parser for this
                command
        """
        assert self.name, f"{type(self).__name__} has no command name"
        parser = subparsers.add_parser(self.name, help=self.__doc__)
        self.add_args(parser)
        parser.set_defaults(func=self.cmd)
        return parser

    def add_args(self, parser: argparse.ArgumentParser):
        """Add the command's own arguments. Commands without any skip this."""

    @abc.abstractmethod
    def cmd(self, args: argparse.Namespace):
        """Execute the command with the parsed arguments"""

    @staticmethod
    def emit(output: dict):
        """Print a command result to stdout as yaml, keeping key order"""
        print(yaml.safe_dump(output, sort_keys=False), end="")
