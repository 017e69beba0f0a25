"""
Evaluate the status of a MariaDB manifest against a set of sub-condition reports
"""

# Standard
from typing import List
import argparse

# Third Party
import yaml

# First Party
import alog

# Local
from ..adoption import resolve_adoption
from ..api import MariaDB
from ..conditions import Condition, ConditionStatus
from ..defaults import apply_defaults, setup_defaults
from ..exceptions import assert_config
from ..rbac import rbac_namespace, rbac_resource_name
from ..status import evaluate_status, status_changed
from .base import CmdBase

log = alog.use_channel("MAIN")


def parse_report(report: str) -> Condition:
    """Parse a report of the form TYPE=STATUS[:REASON[:MESSAGE]]"""
    type_name, sep, rest = report.partition("=")
    assert_config(
        bool(sep and type_name), f"Invalid report [{report}]. Expected TYPE=STATUS"
    )
    parts = rest.split(":", 2)
    parts += [""] * (3 - len(parts))
    status, reason, message = parts
    return Condition(
        type=type_name,
        status=ConditionStatus.parse(status),
        reason=reason,
        message=message,
    )


class EvaluateCmd(CmdBase):
    __doc__ = __doc__

    name = "evaluate"

    ## Interface ##

    def add_args(self, parser: argparse.ArgumentParser):
        runtime_args = parser.add_argument_group("Evaluate Configuration")
        runtime_args.add_argument(
            "--file",
            "-f",
            required=True,
            help="Path to the MariaDB manifest (yaml)",
        )
        runtime_args.add_argument(
            "--report",
            "-r",
            action="append",
            default=[],
            help="Sub-condition report TYPE=STATUS[:REASON[:MESSAGE]] (repeatable)",
        )

    def cmd(self, args: argparse.Namespace):
        with open(args.file, encoding="utf-8") as handle:
            manifest = yaml.safe_load(handle)
        resource = MariaDB.from_dict(manifest)
        reports: List[Condition] = [parse_report(report) for report in args.report]

        defaults = setup_defaults()
        status = evaluate_status(resource, defaults, reports)
        current = (manifest or {}).get("status") or {}
        updated = status.to_dict()
        log.info(
            "Status for %s/%s changed: %s",
            resource.namespace,
            resource.name,
            status_changed(current, updated),
        )

        external_mode, host = resolve_adoption(resource.spec)
        output = {
            "spec": apply_defaults(resource.spec, defaults).to_dict(),
            "status": updated,
            "rbac": {
                "name": rbac_resource_name(resource.name),
                "namespace": rbac_namespace(resource.namespace),
            },
            "adoption": {"externalMode": external_mode, "host": host},
        }
        self.emit(output)
