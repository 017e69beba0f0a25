"""
Python representation of the MariaDB custom resource

The field names on the wire follow the CRD schema (camelCase). Each type knows
how to parse itself from a manifest dict and how to serialize back to one so
that the stored status round-trips unchanged.

apiVersion: mariadb.openstack.org/v1beta1
kind: MariaDB
metadata:
  name: openstack
  namespace: openstack
spec:
  secret: osp-secret
  storageClass: local-storage
  storageRequest: 500M
  containerImage: ""
  adoptionRedirect:
    host: 10.0.0.5
status:
  dbInitHash: ""
  conditions: [...]
"""

# Standard
from dataclasses import dataclass, field, replace
from typing import Optional

# First Party
import alog

# Local
from . import constants
from .conditions import Clock, Conditions, utc_now
from .exceptions import assert_config

log = alog.use_channel("API")


@dataclass(frozen=True)
class AdoptionRedirectSpec:
    """Redirection to a different DB instance during adoption"""

    # MariaDB host to redirect to (IP or name)
    host: str = ""

    def to_dict(self) -> dict:
        return {"host": self.host} if self.host else {}

    @classmethod
    def from_dict(cls, adoption_dict: Optional[dict]) -> "AdoptionRedirectSpec":
        adoption_dict = adoption_dict or {}
        assert_config(
            isinstance(adoption_dict, dict), "spec.adoptionRedirect must be a mapping"
        )
        host = adoption_dict.get("host") or ""
        assert_config(isinstance(host, str), "spec.adoptionRedirect.host must be a str")
        return cls(host=host)


@dataclass(frozen=True)
class MariaDBSpec:
    """The desired state of a MariaDB instance"""

    # Secret containing the root password
    secret: str
    storage_class: str
    storage_request: str
    # Set to the environment default by defaults.apply_defaults when empty
    container_image: str = ""
    adoption_redirect: AdoptionRedirectSpec = field(
        default_factory=AdoptionRedirectSpec
    )

    def with_container_image(self, container_image: str) -> "MariaDBSpec":
        return replace(self, container_image=container_image)

    def to_dict(self) -> dict:
        out = {
            "secret": self.secret,
            "storageClass": self.storage_class,
            "storageRequest": self.storage_request,
            "containerImage": self.container_image,
        }
        adoption = self.adoption_redirect.to_dict()
        if adoption:
            out["adoptionRedirect"] = adoption
        return out

    @classmethod
    def from_dict(cls, spec_dict: dict) -> "MariaDBSpec":
        assert_config(isinstance(spec_dict, dict), "spec must be a mapping")
        for key in ["secret", "storageClass", "storageRequest"]:
            assert_config(
                isinstance(spec_dict.get(key), str),
                f"spec.{key} is required and must be a str",
            )
        container_image = spec_dict.get("containerImage") or ""
        assert_config(
            isinstance(container_image, str), "spec.containerImage must be a str"
        )
        return cls(
            secret=spec_dict["secret"],
            storage_class=spec_dict["storageClass"],
            storage_request=spec_dict["storageRequest"],
            container_image=container_image,
            adoption_redirect=AdoptionRedirectSpec.from_dict(
                spec_dict.get("adoptionRedirect")
            ),
        )


@dataclass
class MariaDBStatus:
    """The observed state of a MariaDB instance"""

    # Owned by the db init collaborator. Carried through untouched.
    db_init_hash: str = ""
    conditions: Conditions = field(default_factory=Conditions)

    def to_dict(self) -> dict:
        out = {"dbInitHash": self.db_init_hash}
        if len(self.conditions):
            out["conditions"] = self.conditions.to_list()
        return out

    @classmethod
    def from_dict(
        cls, status_dict: Optional[dict], clock: Clock = utc_now
    ) -> "MariaDBStatus":
        status_dict = status_dict or {}
        assert_config(isinstance(status_dict, dict), "status must be a mapping")
        return cls(
            db_init_hash=status_dict.get("dbInitHash") or "",
            conditions=Conditions.from_list(status_dict.get("conditions"), clock=clock),
        )


@dataclass
class MariaDB:
    """A full MariaDB resource: identity, spec and status"""

    name: str
    namespace: str
    spec: MariaDBSpec
    status: MariaDBStatus = field(default_factory=MariaDBStatus)

    def to_dict(self) -> dict:
        return {
            "apiVersion": constants.API_VERSION,
            "kind": constants.KIND,
            "metadata": {"name": self.name, "namespace": self.namespace},
            "spec": self.spec.to_dict(),
            "status": self.status.to_dict(),
        }

    @classmethod
    def from_dict(cls, manifest: dict, clock: Clock = utc_now) -> "MariaDB":
        """Parse a full manifest

        Raises:
            ConfigError: if the manifest is not a mapping or a required spec
                field is missing or has the wrong type
        """
        assert_config(isinstance(manifest, dict), "manifest must be a mapping")
        kind = manifest.get("kind")
        if kind and kind != constants.KIND:
            log.warning("Parsing manifest of kind %s as %s", kind, constants.KIND)
        metadata = manifest.get("metadata") or {}
        assert_config(isinstance(metadata, dict), "metadata must be a mapping")
        name = metadata.get("name")
        assert_config(isinstance(name, str) and name, "metadata.name is required")
        return cls(
            name=name,
            namespace=metadata.get("namespace") or constants.DEFAULT_NAMESPACE,
            spec=MariaDBSpec.from_dict(manifest.get("spec")),
            status=MariaDBStatus.from_dict(manifest.get("status"), clock=clock),
        )
