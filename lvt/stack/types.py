"""
Deployment stack configuration.

A ``StackConfig`` collects the ``lvt gen stack`` flags and knows which
combinations make sense for each provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..faults.domains import StackFault

PROVIDERS = ("docker", "fly", "do", "k8s")
DATABASES = ("sqlite", "postgres", "none")
BACKUPS = ("litestream", "none")
REDIS = ("upstash", "fly", "none")
STORAGES = ("s3", "do-spaces", "b2", "none")
CI_PROVIDERS = ("github", "gitlab", "none")
INGRESSES = ("nginx", "traefik", "none")
REGISTRIES = ("ghcr", "docker", "gcr", "ecr")

MULTI_REGION_PROVIDERS = ("fly", "k8s")


@dataclass
class StackConfig:
    provider: str
    database: str = "sqlite"
    backup: str = "none"
    redis: str = "none"
    storage: str = "none"
    ci: str = "none"
    namespace: str = ""
    multi_region: bool = False
    ingress: str = ""
    registry: str = ""

    def apply_defaults(self) -> "StackConfig":
        """Fill in k8s-only defaults (nginx ingress, ghcr registry)."""
        if self.provider == "k8s":
            self.ingress = self.ingress or "nginx"
            self.registry = self.registry or "ghcr"
        return self

    def validate(self) -> None:
        """
        Check option values and provider-specific combinations.

        Raises:
            StackFault: On the first problem found.
        """
        if self.provider not in PROVIDERS:
            raise StackFault(f"invalid provider: {self.provider}. Valid: {', '.join(PROVIDERS)}")

        for flag, value, allowed in (
            ("--db", self.database, DATABASES),
            ("--backup", self.backup, BACKUPS),
            ("--redis", self.redis, REDIS),
            ("--storage", self.storage, STORAGES),
            ("--ci", self.ci, CI_PROVIDERS),
        ):
            if value not in allowed:
                raise StackFault(f"invalid {flag} value '{value}' (supported: {', '.join(allowed)})")

        if self.backup == "litestream":
            if self.storage == "none":
                raise StackFault("when --backup=litestream, --storage flag is required")
            if self.database != "sqlite":
                raise StackFault("--backup=litestream requires --db=sqlite")

        if self.namespace and self.provider != "k8s":
            raise StackFault("--namespace only applies to k8s provider")
        if self.ingress and self.ingress != "none" and self.provider != "k8s":
            raise StackFault("--ingress only applies to k8s provider")
        if self.registry and self.provider != "k8s":
            raise StackFault("--registry only applies to k8s provider")
        if self.ingress and self.ingress not in INGRESSES:
            raise StackFault(f"invalid --ingress value '{self.ingress}' (supported: {', '.join(INGRESSES)})")
        if self.registry and self.registry not in REGISTRIES:
            raise StackFault(f"invalid --registry value '{self.registry}' (supported: {', '.join(REGISTRIES)})")

        if self.multi_region and self.provider not in MULTI_REGION_PROVIDERS:
            raise StackFault("--multi-region only applies to fly and k8s providers")
        if self.redis == "fly" and self.provider != "fly":
            raise StackFault("--redis=fly only applies to fly provider")

    def to_dict(self) -> Dict[str, Any]:
        """Configuration block stored in ``.lvtstack``; empty optionals are omitted."""
        data: Dict[str, Any] = {
            "database": self.database,
            "backup": self.backup,
            "redis": self.redis,
            "storage": self.storage,
            "ci": self.ci,
        }
        if self.namespace:
            data["namespace"] = self.namespace
        if self.multi_region:
            data["multi_region"] = True
        if self.ingress:
            data["ingress"] = self.ingress
        if self.registry:
            data["registry"] = self.registry
        return data

    @classmethod
    def from_dict(cls, provider: str, data: Dict[str, Any]) -> "StackConfig":
        return cls(
            provider=provider,
            database=data.get("database", "sqlite"),
            backup=data.get("backup", "none"),
            redis=data.get("redis", "none"),
            storage=data.get("storage", "none"),
            ci=data.get("ci", "none"),
            namespace=data.get("namespace", ""),
            multi_region=bool(data.get("multi_region", False)),
            ingress=data.get("ingress", ""),
            registry=data.get("registry", ""),
        )
