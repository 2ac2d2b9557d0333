"""
Deployment stacks (stack/types.py, stack/generators.py, stack/tracking.py)
"""

import pytest
import yaml

from lvt.faults import StackFault
from lvt.stack import (
    TRACKING_FILE,
    StackConfig,
    file_checksum,
    generate_stack,
    read_tracking_file,
    render_stack,
    required_secrets,
)


# ============================================================================
# StackConfig
# ============================================================================

class TestStackConfigValidation:

    @pytest.mark.parametrize("config", [
        StackConfig("docker"),
        StackConfig("fly", backup="litestream", storage="s3", redis="fly", multi_region=True),
        StackConfig("do", database="postgres", ci="github"),
        StackConfig("k8s", namespace="prod", ingress="traefik", registry="ecr", multi_region=True),
    ])
    def test_valid(self, config):
        config.apply_defaults().validate()

    @pytest.mark.parametrize("config,message", [
        (StackConfig("heroku"), "invalid provider: heroku"),
        (StackConfig("docker", database="mysql"), "invalid --db value 'mysql'"),
        (StackConfig("docker", ci="jenkins"), "invalid --ci value 'jenkins'"),
        (StackConfig("docker", backup="litestream"), "--storage flag is required"),
        (StackConfig("docker", backup="litestream", storage="s3", database="postgres"), "requires --db=sqlite"),
        (StackConfig("docker", namespace="prod"), "--namespace only applies to k8s"),
        (StackConfig("fly", ingress="nginx"), "--ingress only applies to k8s"),
        (StackConfig("do", registry="ghcr"), "--registry only applies to k8s"),
        (StackConfig("k8s", ingress="haproxy"), "invalid --ingress value 'haproxy'"),
        (StackConfig("k8s", registry="quay"), "invalid --registry value 'quay'"),
        (StackConfig("docker", multi_region=True), "--multi-region only applies to fly and k8s"),
        (StackConfig("docker", redis="fly"), "--redis=fly only applies to fly"),
    ])
    def test_invalid(self, config, message):
        with pytest.raises(StackFault) as exc_info:
            config.validate()
        assert message in exc_info.value.message
        assert exc_info.value.code == "STACK_INVALID"

    def test_ingress_none_allowed_anywhere(self):
        StackConfig("docker", ingress="none").validate()

    def test_k8s_defaults(self):
        config = StackConfig("k8s").apply_defaults()
        assert (config.ingress, config.registry) == ("nginx", "ghcr")
        assert StackConfig("fly").apply_defaults().ingress == ""

    def test_dict_round_trip(self):
        config = StackConfig("k8s", namespace="prod", multi_region=True).apply_defaults()
        data = config.to_dict()
        assert data == {
            "database": "sqlite",
            "backup": "none",
            "redis": "none",
            "storage": "none",
            "ci": "none",
            "namespace": "prod",
            "multi_region": True,
            "ingress": "nginx",
            "registry": "ghcr",
        }
        assert StackConfig.from_dict("k8s", data) == config

    def test_optional_keys_omitted(self):
        assert set(StackConfig("docker").to_dict()) == {"database", "backup", "redis", "storage", "ci"}


class TestRequiredSecrets:

    def test_minimal(self):
        assert required_secrets(StackConfig("docker")) == ["SESSION_SECRET"]

    def test_full(self):
        config = StackConfig("fly", database="postgres", redis="upstash", storage="s3")
        assert required_secrets(config) == [
            "SESSION_SECRET",
            "DATABASE_URL",
            "REDIS_URL",
            "LITESTREAM_ACCESS_KEY_ID",
            "LITESTREAM_SECRET_ACCESS_KEY",
            "LITESTREAM_BUCKET",
        ]


# ============================================================================
# Rendering
# ============================================================================

class TestRenderStack:

    def test_docker(self):
        files = render_stack("blog", StackConfig("docker"))
        assert sorted(files) == [
            "deploy/.dockerignore",
            "deploy/.env.example",
            "deploy/Dockerfile",
            "deploy/README.md",
            "deploy/docker-compose.yml",
        ]
        assert 'CMD ["/app/blog"]' in files["deploy/Dockerfile"]
        assert "docker compose" in files["deploy/README.md"]

    def test_fly(self):
        files = render_stack("blog", StackConfig("fly"))
        assert sorted(files) == ["deploy/.env.example", "deploy/Dockerfile", "deploy/README.md", "deploy/fly.toml"]
        toml = files["deploy/fly.toml"]
        assert toml.startswith('app = "blog"')
        assert "[mounts]" in toml
        assert "min_machines_running = 0" in toml

    def test_fly_multi_region_postgres(self):
        toml = render_stack("blog", StackConfig("fly", database="postgres", multi_region=True))["deploy/fly.toml"]
        assert "min_machines_running = 2" in toml
        assert "[mounts]" not in toml

    def test_digitalocean(self):
        files = render_stack("blog", StackConfig("do", database="postgres"))
        assert sorted(files) == ["deploy/Dockerfile", "deploy/README.md", "deploy/app-spec.yaml"]
        spec = yaml.safe_load(files["deploy/app-spec.yaml"])
        assert spec["name"] == "blog"
        envs = {e["key"] for e in spec["services"][0]["envs"]}
        assert {"PORT", "SESSION_SECRET", "DATABASE_URL"} <= envs
        assert spec["databases"][0]["engine"] == "PG"

    def test_k8s_default(self):
        files = render_stack("blog", StackConfig("k8s").apply_defaults())
        assert sorted(files) == [
            "deploy/Dockerfile",
            "deploy/README.md",
            "deploy/configmap.yaml",
            "deploy/deployment.yaml",
            "deploy/ingress.yaml",
            "deploy/namespace.yaml",
            "deploy/pvc.yaml",
            "deploy/secret.yaml.example",
            "deploy/service.yaml",
        ]
        for name in ("namespace", "deployment", "service", "configmap", "pvc", "ingress"):
            docs = yaml.safe_load(files[f"deploy/{name}.yaml"])
            assert docs["metadata"]["namespace" if name != "namespace" else "name"] == "blog"

    def test_k8s_namespace_and_no_ingress(self):
        files = render_stack("blog", StackConfig("k8s", namespace="prod", ingress="none", database="postgres"))
        assert "deploy/ingress.yaml" not in files
        assert "deploy/pvc.yaml" not in files
        assert yaml.safe_load(files["deploy/namespace.yaml"])["metadata"]["name"] == "prod"

    def test_litestream(self):
        config = StackConfig("k8s", backup="litestream", storage="b2").apply_defaults()
        files = render_stack("blog", config)
        assert "deploy/litestream-configmap.yaml" in files
        assert "litestream" in files["deploy/Dockerfile"]

        docker = render_stack("blog", StackConfig("docker", backup="litestream", storage="s3"))
        assert "deploy/litestream.yml" in docker

    def test_github_ci(self):
        files = render_stack("blog", StackConfig("fly", ci="github"))
        test = yaml.safe_load(files[".github/workflows/test.yml"])
        assert "test" in test["jobs"]
        deploy = files[".github/workflows/deploy-fly.yml"]
        assert "flyctl deploy" in deploy

    def test_github_docker_deploy_uses_expression(self):
        deploy = render_stack("blog", StackConfig("docker", ci="github"))[".github/workflows/deploy-docker.yml"]
        assert "blog:${{ github.sha }}" in deploy

    def test_gitlab_ci(self):
        files = render_stack("blog", StackConfig("k8s", ci="gitlab").apply_defaults())
        pipeline = yaml.safe_load(files[".gitlab-ci.yml"])
        assert pipeline["stages"] == ["test", "deploy"]
        assert pipeline["deploy"]["script"] == ["kubectl apply -f deploy/"]


# ============================================================================
# Generation and tracking
# ============================================================================

class TestGenerateStack:

    def test_writes_files_and_tracking(self, tmp_path):
        tracking = generate_stack(tmp_path, StackConfig("docker", ci="github"), name="blog", generator_version="1.0.0")
        paths = [f.path for f in tracking.files]
        assert paths == sorted(paths)
        assert ".github/workflows/test.yml" in paths
        for tracked in tracking.files:
            assert file_checksum(tmp_path / tracked.path) == tracked.checksum

        loaded = read_tracking_file(tmp_path / TRACKING_FILE)
        assert loaded.provider == "docker"
        assert loaded.generator_version == "1.0.0"
        assert loaded.config == StackConfig("docker", ci="github")
        assert [f.path for f in loaded.files] == paths

    def test_existing_stack_requires_force(self, tmp_path):
        generate_stack(tmp_path, StackConfig("docker"))
        with pytest.raises(StackFault) as exc_info:
            generate_stack(tmp_path, StackConfig("fly"))
        assert "stack already exists" in exc_info.value.message

        tracking = generate_stack(tmp_path, StackConfig("fly"), force=True)
        assert read_tracking_file(tmp_path / TRACKING_FILE).provider == "fly"
        assert any(f.path == "deploy/fly.toml" for f in tracking.files)

    def test_invalid_config_writes_nothing(self, tmp_path):
        with pytest.raises(StackFault):
            generate_stack(tmp_path, StackConfig("docker", multi_region=True))
        assert list(tmp_path.iterdir()) == []

    def test_name_defaults_to_directory(self, tmp_path):
        root = tmp_path / "shop"
        root.mkdir()
        generate_stack(root, StackConfig("fly"))
        assert (root / "deploy" / "fly.toml").read_text().startswith('app = "shop"')


class TestTracking:

    def test_modifications_detected(self, tmp_path):
        generate_stack(tmp_path, StackConfig("docker"))
        (tmp_path / "deploy" / "Dockerfile").write_text("FROM scratch\n")
        (tmp_path / "deploy" / "README.md").unlink()

        tracking = read_tracking_file(tmp_path / TRACKING_FILE)
        assert tracking.check_modifications(tmp_path) == ["deploy/Dockerfile"]
        flagged = {f.path: f.modified for f in tracking.files}
        assert flagged["deploy/Dockerfile"] is True
        assert flagged["deploy/docker-compose.yml"] is False

    def test_unmodified(self, tmp_path):
        generate_stack(tmp_path, StackConfig("fly"))
        assert read_tracking_file(tmp_path / TRACKING_FILE).check_modifications(tmp_path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(StackFault) as exc_info:
            read_tracking_file(tmp_path / TRACKING_FILE)
        assert "no stack found" in exc_info.value.message

    @pytest.mark.parametrize("content", ["provider: [broken\n", "- just\n- a list\n"])
    def test_unreadable(self, tmp_path, content):
        path = tmp_path / TRACKING_FILE
        path.write_text(content)
        with pytest.raises(StackFault) as exc_info:
            read_tracking_file(path)
        assert "failed to read tracking file" in exc_info.value.message
