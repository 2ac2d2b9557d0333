"""
Kits and CSS helpers (kits/loader.py, kits/helpers.py)
"""

import pytest

from lvt.faults import GenerationFault, KitNotFoundFault
from lvt.kits import FRAMEWORKS, KitLoader, helpers_for, parse_manifest


def write_kit(root, name, body):
    kit_dir = root / ".lvt" / "kits" / name
    kit_dir.mkdir(parents=True)
    (kit_dir / "kit.yaml").write_text(body)
    return kit_dir


@pytest.fixture
def loader(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return KitLoader(tmp_path)


# ============================================================================
# Loading
# ============================================================================

class TestKitLoader:

    @pytest.mark.parametrize("name,css,layout", [
        ("multi", "tailwind", "multi"),
        ("single", "tailwind", "single"),
        ("simple", "pico", "simple"),
    ])
    def test_system_kits(self, loader, name, css, layout):
        kit = loader.load(name)
        assert kit.name == name
        assert kit.source == "system"
        assert kit.helpers.name == css
        assert kit.manifest.layout == layout

    def test_css_override(self, loader):
        assert loader.load("multi", "bulma").helpers.name == "bulma"

    def test_unknown_css(self, loader):
        with pytest.raises(GenerationFault) as exc_info:
            loader.load("multi", "bootstrap")
        assert "unknown CSS framework 'bootstrap'" in exc_info.value.message

    def test_unknown_kit(self, loader):
        with pytest.raises(KitNotFoundFault) as exc_info:
            loader.load("fancy")
        assert exc_info.value.message == "kit 'fancy' not found (available: multi, simple, single)"

    def test_project_kit(self, loader, tmp_path):
        write_kit(tmp_path, "custom", "name: custom\nversion: 0.2.0\ncss_framework: bulma\nlayout: multi\n")
        kit = loader.load("custom")
        assert kit.helpers.name == "bulma"
        assert kit.source.endswith("kit.yaml")
        assert loader.available() == ["custom", "multi", "simple", "single"]

    def test_project_kit_shadows_system(self, loader, tmp_path):
        write_kit(tmp_path, "multi", "name: multi\nversion: 2.0.0\ncss_framework: pico\nlayout: multi\n")
        assert loader.load("multi").helpers.name == "pico"

    def test_name_must_match_directory(self, loader, tmp_path):
        write_kit(tmp_path, "custom", "name: other\nversion: 1.0.0\n")
        with pytest.raises(GenerationFault) as exc_info:
            loader.load("custom")
        assert "must match directory name" in exc_info.value.message


class TestParseManifest:

    def test_defaults(self):
        manifest = parse_manifest("name: bare\nversion: 1.2.3\n")
        assert manifest.css_framework == "none"
        assert manifest.framework == "livetemplate"
        assert manifest.tags == []

    @pytest.mark.parametrize("text,message", [
        ("version: 1.0.0\n", "name is required"),
        ("name: k\nversion: one\n", "invalid version 'one'"),
        ("name: k\nversion: 1.0.0\ncss_framework: bootstrap\n", "unknown css_framework 'bootstrap'"),
        ("- a\n- b\n", "expected a mapping"),
        ("name: [unclosed\n", "invalid YAML"),
    ])
    def test_rejected(self, text, message):
        with pytest.raises(GenerationFault) as exc_info:
            parse_manifest(text)
        assert message in exc_info.value.message


# ============================================================================
# CSS helpers
# ============================================================================

class TestHelpers:

    def test_frameworks(self):
        assert sorted(FRAMEWORKS) == ["bulma", "none", "pico", "tailwind"]

    def test_case_insensitive_lookup(self):
        assert helpers_for("Tailwind").name == "tailwind"

    def test_unknown(self):
        with pytest.raises(KeyError):
            helpers_for("bootstrap")

    def test_roles(self):
        tailwind = helpers_for("tailwind")
        assert "max-w-7xl" in tailwind.cls("container")
        assert tailwind.cls("nonexistent") == ""
        assert tailwind.button("danger").startswith("bg-red-600")
        assert tailwind.button("unknown") == tailwind.button("primary")
        assert tailwind.needs_table_wrapper is True

    def test_framework_flags(self):
        assert helpers_for("bulma").needs_wrapper is True
        assert helpers_for("pico").needs_article is True
        assert helpers_for("pico").needs_table_wrapper is False
        none = helpers_for("none")
        assert none.cls("input") == ""
        assert none.button() == ""
        assert none.pagination_button("active") == ""
