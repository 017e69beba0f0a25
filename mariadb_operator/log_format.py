"""
Custom logging format that adds the identity of the resource being evaluated
"""

# First Party
from alog import AlogJsonFormatter


class MariaDBJsonFormatter(AlogJsonFormatter):
    """Extends AlogJsonFormatter with the kind, name and namespace of the
    MariaDB resource. A log call can override the resource with
    extra={"resource": manifest}.
    """

    _FIELDS_TO_PRINT = AlogJsonFormatter._FIELDS_TO_PRINT + [
        "process",
        "thread",
        "threadName",
        "kind",
        "apiVersion",
        "resourceName",
        "resourceNamespace",
    ]

    def __init__(self, manifest=None):
        super().__init__()
        self.manifest = manifest

    def format(self, record):
        if resource := getattr(record, "resource", self.manifest):
            record.kind = resource.get("kind")
            record.apiVersion = resource.get("apiVersion")

            metadata = resource.get("metadata", {})
            record.resourceName = metadata.get("name")
            record.resourceNamespace = metadata.get("namespace")

        return super().format(record)
