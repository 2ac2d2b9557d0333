"""
Deployment stack generators - Docker, Fly.io, DigitalOcean and Kubernetes.

Each generator returns a mapping of project-relative paths to file
contents; ``generate_stack`` writes them and records checksums in
``.lvtstack``.

Usage::

    from lvt.stack import StackConfig, generate_stack

    config = StackConfig(provider="fly", backup="litestream", storage="s3")
    generate_stack(Path("."), config)
"""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Dict, List, Optional, Type, Union

from ..faults.domains import StackFault
from .tracking import TRACKING_FILE, TrackingFile, file_checksum
from .types import StackConfig

logger = logging.getLogger("lvt.stack.generators")

DEPLOY_DIR = "deploy"

LITESTREAM_VERSION = "v0.3.13"
LITESTREAM_SHA256 = "eb75a3de5cab03875cdae9f5f539e6aedadd66607003d9b1e7a9077948818ba0"

STORAGE_ENDPOINTS = {
    "s3": "",
    "do-spaces": "https://${SPACES_REGION}.digitaloceanspaces.com",
    "b2": "https://s3.${B2_REGION}.backblazeb2.com",
}

REGISTRY_HOSTS = {
    "ghcr": "ghcr.io/${GITHUB_REPOSITORY_OWNER}",
    "docker": "docker.io/${DOCKER_USERNAME}",
    "gcr": "gcr.io/${GCP_PROJECT}",
    "ecr": "${AWS_ACCOUNT_ID}.dkr.ecr.${AWS_REGION}.amazonaws.com",
}


# ═══════════════════════════════════════════════════════════════════════════
# Shared fragments
# ═══════════════════════════════════════════════════════════════════════════

def required_secrets(config: StackConfig) -> List[str]:
    """Environment secrets the generated stack expects at deploy time."""
    secrets = ["SESSION_SECRET"]
    if config.database == "postgres":
        secrets.append("DATABASE_URL")
    if config.redis != "none":
        secrets.append("REDIS_URL")
    if config.storage != "none":
        secrets.extend(["LITESTREAM_ACCESS_KEY_ID", "LITESTREAM_SECRET_ACCESS_KEY", "LITESTREAM_BUCKET"])
    return secrets


def dockerfile(name: str, config: StackConfig) -> str:
    """Multi-stage Go build; SQLite builds need CGO."""
    cgo = "1" if config.database == "sqlite" else "0"
    litestream = ""
    entrypoint = f'CMD ["/app/{name}"]'
    if config.backup == "litestream":
        tarball = f"litestream-{LITESTREAM_VERSION}-linux-amd64.tar.gz"
        litestream = textwrap.dedent(f"""\

            # Litestream for continuous SQLite replication
            ADD https://github.com/benbjohnson/litestream/releases/download/{LITESTREAM_VERSION}/{tarball} /tmp/litestream.tar.gz
            RUN echo "{LITESTREAM_SHA256}  /tmp/litestream.tar.gz" | sha256sum -c - && \\
                tar -C /usr/local/bin -xzf /tmp/litestream.tar.gz && \\
                rm /tmp/litestream.tar.gz
            COPY deploy/litestream.yml /etc/litestream.yml
            """)
        entrypoint = f'CMD ["litestream", "replicate", "-exec", "/app/{name}"]'

    return textwrap.dedent(f"""\
        # syntax=docker/dockerfile:1
        # Generated by: lvt gen stack {config.provider}

        FROM golang:1.22-bookworm AS builder
        WORKDIR /src
        COPY go.mod go.sum* ./
        RUN go mod download
        COPY . .
        RUN CGO_ENABLED={cgo} go build -o /out/{name} ./cmd/{name}

        FROM debian:bookworm-slim
        RUN apt-get update && \\
            apt-get install -y --no-install-recommends ca-certificates sqlite3 && \\
            rm -rf /var/lib/apt/lists/*
        WORKDIR /app
        COPY --from=builder /out/{name} /app/{name}
        """) + litestream + textwrap.dedent(f"""\

        ENV PORT=8080
        ENV LVT_DB_PATH=/data/app.db
        EXPOSE 8080
        {entrypoint}
        """)


def litestream_config(config: StackConfig, db_path: str = "/data/app.db") -> str:
    lines = [
        "dbs:",
        f"  - path: {db_path}",
        "    replicas:",
        "      - type: s3",
        "        bucket: ${LITESTREAM_BUCKET}",
        "        path: app.db",
    ]
    endpoint = STORAGE_ENDPOINTS.get(config.storage, "")
    if endpoint:
        lines.append(f"        endpoint: {endpoint}")
    lines += [
        "        access-key-id: ${LITESTREAM_ACCESS_KEY_ID}",
        "        secret-access-key: ${LITESTREAM_SECRET_ACCESS_KEY}",
    ]
    return "\n".join(lines) + "\n"


def env_example(config: StackConfig) -> str:
    lines = ["# Copy to .env and fill in real values", "PORT=8080"]
    if config.database == "sqlite":
        lines.append("LVT_DB_PATH=/data/app.db")
    lines.extend(f"{key}=" for key in required_secrets(config))
    return "\n".join(lines) + "\n"


# ═══════════════════════════════════════════════════════════════════════════
# Providers
# ═══════════════════════════════════════════════════════════════════════════

class StackGenerator:
    """Base class: ``generate`` returns ``{relative_path: content}``."""

    provider = ""
    deploy_command = ""

    def __init__(self, name: str, config: StackConfig):
        self.name = name
        self.config = config

    def deploy_path(self, filename: str) -> str:
        return f"{DEPLOY_DIR}/{filename}"

    def generate(self) -> Dict[str, str]:
        raise NotImplementedError

    def readme(self) -> str:
        secrets = "\n".join(f"- `{s}`" for s in required_secrets(self.config))
        return (
            f"# Deploying {self.name} ({self.provider})\n\n"
            f"Generated by `lvt gen stack {self.provider}`.\n\n"
            f"## Required secrets\n\n{secrets}\n\n"
            f"## Deploy\n\n```bash\n{self.deploy_command}\n```\n"
        )

    def _with_litestream(self, files: Dict[str, str]) -> Dict[str, str]:
        if self.config.backup == "litestream":
            files[self.deploy_path("litestream.yml")] = litestream_config(self.config)
        return files


class DockerGenerator(StackGenerator):
    provider = "docker"
    deploy_command = "docker compose -f deploy/docker-compose.yml up -d --build"

    def generate_compose(self) -> str:
        c = self.config
        services = textwrap.dedent("""\
            services:
              app:
                build:
                  context: ..
                  dockerfile: deploy/Dockerfile
                ports:
                  - "8080:8080"
                env_file:
                  - .env
            """)
        volumes: List[str] = []
        if c.database == "sqlite":
            services += "    volumes:\n      - app-data:/data\n"
            volumes.append("app-data")
        depends: List[str] = []
        if c.database == "postgres":
            depends.append("db")
        if c.redis != "none":
            depends.append("redis")
        if depends:
            services += "    depends_on:\n" + "".join(f"      - {d}\n" for d in depends)
        if c.database == "postgres":
            services += (
                "  db:\n"
                "    image: postgres:16-alpine\n"
                "    environment:\n"
                f"      POSTGRES_DB: {self.name}\n"
                f"      POSTGRES_USER: {self.name}\n"
                "      POSTGRES_PASSWORD: ${POSTGRES_PASSWORD:-change-me}\n"
                "    volumes:\n"
                "      - pg-data:/var/lib/postgresql/data\n"
            )
            volumes.append("pg-data")
        if c.redis != "none":
            services += "  redis:\n    image: redis:7-alpine\n"
        if volumes:
            services += "\nvolumes:\n" + "".join(f"  {v}:\n" for v in volumes)
        return services

    def generate_dockerignore(self) -> str:
        return "\n".join([".git", "*.db", "*.db-*", ".env", "deploy/.env", "tmp/"]) + "\n"

    def generate(self) -> Dict[str, str]:
        return self._with_litestream({
            self.deploy_path("Dockerfile"): dockerfile(self.name, self.config),
            self.deploy_path("docker-compose.yml"): self.generate_compose(),
            self.deploy_path(".dockerignore"): self.generate_dockerignore(),
            self.deploy_path(".env.example"): env_example(self.config),
            self.deploy_path("README.md"): self.readme(),
        })


class FlyGenerator(StackGenerator):
    provider = "fly"
    deploy_command = "fly deploy --config deploy/fly.toml --dockerfile deploy/Dockerfile"

    def generate_fly_toml(self) -> str:
        c = self.config
        toml = textwrap.dedent(f"""\
            app = "{self.name}"
            primary_region = "iad"

            [build]
              dockerfile = "Dockerfile"

            [env]
              PORT = "8080"

            [http_service]
              internal_port = 8080
              force_https = true
              auto_stop_machines = "stop"
              auto_start_machines = true
              min_machines_running = {2 if c.multi_region else 0}
            """)
        if c.database == "sqlite":
            toml += textwrap.dedent("""\

                [mounts]
                  source = "data"
                  destination = "/data"
                """)
        return toml

    def generate(self) -> Dict[str, str]:
        files = {
            self.deploy_path("fly.toml"): self.generate_fly_toml(),
            self.deploy_path("Dockerfile"): dockerfile(self.name, self.config),
            self.deploy_path(".env.example"): env_example(self.config),
            self.deploy_path("README.md"): self.readme(),
        }
        return self._with_litestream(files)


class DigitalOceanGenerator(StackGenerator):
    provider = "do"
    deploy_command = "doctl apps create --spec deploy/app-spec.yaml"

    def generate_app_spec(self) -> str:
        c = self.config
        spec = textwrap.dedent(f"""\
            name: {self.name}
            region: nyc
            services:
              - name: web
                dockerfile_path: deploy/Dockerfile
                source_dir: /
                http_port: 8080
                instance_count: 1
                instance_size_slug: basic-xxs
                envs:
                  - key: PORT
                    value: "8080"
            """)
        for secret in required_secrets(c):
            spec += f"      - key: {secret}\n        type: SECRET\n"
        if c.database == "postgres":
            spec += textwrap.dedent(f"""\
                databases:
                  - name: {self.name}-db
                    engine: PG
                    version: "16"
                """)
        return spec

    def generate(self) -> Dict[str, str]:
        return self._with_litestream({
            self.deploy_path("app-spec.yaml"): self.generate_app_spec(),
            self.deploy_path("Dockerfile"): dockerfile(self.name, self.config),
            self.deploy_path("README.md"): self.readme(),
        })


class KubernetesGenerator(StackGenerator):
    provider = "k8s"
    deploy_command = "kubectl apply -f deploy/"

    @property
    def namespace(self) -> str:
        return self.config.namespace or self.name

    @property
    def image(self) -> str:
        host = REGISTRY_HOSTS.get(self.config.registry or "ghcr", REGISTRY_HOSTS["ghcr"])
        return f"{host}/{self.name}:latest"

    def generate_namespace(self) -> str:
        return textwrap.dedent(f"""\
            apiVersion: v1
            kind: Namespace
            metadata:
              name: {self.namespace}
            """)

    def generate_deployment(self) -> str:
        c = self.config
        replicas = 1 if c.database == "sqlite" else (3 if c.multi_region else 2)
        manifest = textwrap.dedent(f"""\
            apiVersion: apps/v1
            kind: Deployment
            metadata:
              name: {self.name}
              namespace: {self.namespace}
            spec:
              replicas: {replicas}
              selector:
                matchLabels:
                  app: {self.name}
              template:
                metadata:
                  labels:
                    app: {self.name}
                spec:
                  containers:
                    - name: {self.name}
                      image: {self.image}
                      ports:
                        - containerPort: 8080
                      envFrom:
                        - configMapRef:
                            name: {self.name}-config
                        - secretRef:
                            name: {self.name}-secrets
                      readinessProbe:
                        httpGet:
                          path: /
                          port: 8080
            """)
        if c.database == "sqlite":
            manifest += (
                "          volumeMounts:\n"
                "            - name: data\n"
                "              mountPath: /data\n"
                "      volumes:\n"
                "        - name: data\n"
                "          persistentVolumeClaim:\n"
                f"            claimName: {self.name}-data\n"
            )
        return manifest

    def generate_service(self) -> str:
        return textwrap.dedent(f"""\
            apiVersion: v1
            kind: Service
            metadata:
              name: {self.name}
              namespace: {self.namespace}
            spec:
              selector:
                app: {self.name}
              ports:
                - port: 80
                  targetPort: 8080
            """)

    def generate_configmap(self) -> str:
        manifest = textwrap.dedent(f"""\
            apiVersion: v1
            kind: ConfigMap
            metadata:
              name: {self.name}-config
              namespace: {self.namespace}
            data:
              PORT: "8080"
            """)
        if self.config.database == "sqlite":
            manifest += '  LVT_DB_PATH: "/data/app.db"\n'
        return manifest

    def generate_secret(self) -> str:
        manifest = textwrap.dedent(f"""\
            # Copy to secret.yaml, fill in values, and keep it out of git.
            apiVersion: v1
            kind: Secret
            metadata:
              name: {self.name}-secrets
              namespace: {self.namespace}
            type: Opaque
            stringData:
            """)
        return manifest + "".join(f'  {s}: ""\n' for s in required_secrets(self.config))

    def generate_pvc(self) -> str:
        return textwrap.dedent(f"""\
            apiVersion: v1
            kind: PersistentVolumeClaim
            metadata:
              name: {self.name}-data
              namespace: {self.namespace}
            spec:
              accessModes:
                - ReadWriteOnce
              resources:
                requests:
                  storage: 1Gi
            """)

    def generate_ingress(self) -> str:
        return textwrap.dedent(f"""\
            apiVersion: networking.k8s.io/v1
            kind: Ingress
            metadata:
              name: {self.name}
              namespace: {self.namespace}
            spec:
              ingressClassName: {self.config.ingress}
              rules:
                - host: {self.name}.example.com
                  http:
                    paths:
                      - path: /
                        pathType: Prefix
                        backend:
                          service:
                            name: {self.name}
                            port:
                              number: 80
            """)

    def generate_litestream_configmap(self) -> str:
        body = textwrap.indent(litestream_config(self.config), "    ")
        return textwrap.dedent(f"""\
            apiVersion: v1
            kind: ConfigMap
            metadata:
              name: {self.name}-litestream
              namespace: {self.namespace}
            data:
              litestream.yml: |
            """) + body

    def generate(self) -> Dict[str, str]:
        c = self.config
        files = {
            self.deploy_path("namespace.yaml"): self.generate_namespace(),
            self.deploy_path("deployment.yaml"): self.generate_deployment(),
            self.deploy_path("service.yaml"): self.generate_service(),
            self.deploy_path("configmap.yaml"): self.generate_configmap(),
            self.deploy_path("secret.yaml.example"): self.generate_secret(),
            self.deploy_path("Dockerfile"): dockerfile(self.name, c),
            self.deploy_path("README.md"): self.readme(),
        }
        if c.database == "sqlite":
            files[self.deploy_path("pvc.yaml")] = self.generate_pvc()
        if c.ingress and c.ingress != "none":
            files[self.deploy_path("ingress.yaml")] = self.generate_ingress()
        if c.backup == "litestream":
            files[self.deploy_path("litestream-configmap.yaml")] = self.generate_litestream_configmap()
        return files


# ═══════════════════════════════════════════════════════════════════════════
# CI/CD
# ═══════════════════════════════════════════════════════════════════════════

DEPLOY_STEPS = {
    "docker": "docker build -f deploy/Dockerfile -t {name}:${{{{ github.sha }}}} .",
    "fly": "flyctl deploy --remote-only --config deploy/fly.toml --dockerfile deploy/Dockerfile",
    "do": "doctl apps create --spec deploy/app-spec.yaml --upsert",
    "k8s": "kubectl apply -f deploy/",
}


class CIGenerator:
    """GitHub Actions workflows or a GitLab pipeline for the stack."""

    def __init__(self, name: str, config: StackConfig):
        self.name = name
        self.config = config

    def deploy_step(self) -> str:
        return DEPLOY_STEPS[self.config.provider].format(name=self.name)

    def generate_github_test(self) -> str:
        return textwrap.dedent("""\
            name: Test
            on:
              push:
                branches: [main]
              pull_request:
            jobs:
              test:
                runs-on: ubuntu-latest
                steps:
                  - uses: actions/checkout@v4
                  - uses: actions/setup-go@v5
                    with:
                      go-version: "1.22"
                  - run: go vet ./...
                  - run: go test ./...
            """)

    def generate_github_deploy(self) -> str:
        return textwrap.dedent(f"""\
            name: Deploy ({self.config.provider})
            on:
              push:
                branches: [main]
            jobs:
              deploy:
                runs-on: ubuntu-latest
                steps:
                  - uses: actions/checkout@v4
                  - run: {self.deploy_step()}
            """)

    def generate_gitlab(self) -> str:
        return textwrap.dedent(f"""\
            stages:
              - test
              - deploy

            test:
              stage: test
              image: golang:1.22
              script:
                - go vet ./...
                - go test ./...

            deploy:
              stage: deploy
              only:
                - main
              script:
                - {self.deploy_step()}
            """)

    def generate(self) -> Dict[str, str]:
        if self.config.ci == "github":
            return {
                ".github/workflows/test.yml": self.generate_github_test(),
                f".github/workflows/deploy-{self.config.provider}.yml": self.generate_github_deploy(),
            }
        if self.config.ci == "gitlab":
            return {".gitlab-ci.yml": self.generate_gitlab()}
        return {}


GENERATORS: Dict[str, Type[StackGenerator]] = {
    "docker": DockerGenerator,
    "fly": FlyGenerator,
    "do": DigitalOceanGenerator,
    "k8s": KubernetesGenerator,
}


def render_stack(name: str, config: StackConfig) -> Dict[str, str]:
    """All files for ``config`` without touching the filesystem."""
    generator = GENERATORS[config.provider](name, config)
    files = generator.generate()
    files.update(CIGenerator(name, config).generate())
    return files


def generate_stack(
    base_path: Union[str, Path],
    config: StackConfig,
    *,
    force: bool = False,
    generator_version: str = "",
    name: Optional[str] = None,
) -> TrackingFile:
    """
    Write the stack for ``config`` under ``base_path`` and record it in
    ``.lvtstack``.

    Raises:
        StackFault: On invalid configuration, an existing stack without
            ``force``, or a failed write.
    """
    base = Path(base_path).resolve()
    config.apply_defaults().validate()

    tracking_path = base / TRACKING_FILE
    if tracking_path.exists() and not force:
        raise StackFault(
            "stack already exists (use --force to overwrite). "
            "Run 'lvt stack info' to see current stack configuration"
        )

    tracking = TrackingFile.new(config, generator_version)
    for rel_path, content in sorted(render_stack(name or base.name, config).items()):
        target = base / rel_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise StackFault(f"failed to write {rel_path}: {exc}") from exc
        tracking.add_file(rel_path, file_checksum(target))
        logger.debug("Wrote %s", rel_path)

    tracking.write(tracking_path)
    logger.info("Generated %s stack (%d files)", config.provider, len(tracking.files))
    return tracking
