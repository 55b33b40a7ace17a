"""
Tests for template redirection and output-manifest extension.

Pure unit tests: a stub parent generator stands in for the language generator.
"""

import os

import pytest

from clientgen_lib.config import GeneratorConfiguration
from clientgen_lib.generator import CSharpClientGenerator
from clientgen_lib.manifest import OutputManifest, SupportingFile
from clientgen_lib.specialization import (
    CSHARP_CONSOLA,
    ManifestAlreadyExtendedError,
    ManifestExtender,
    Specialization,
    Supplement,
    TemplateResolver,
    csharp_consola,
    template_path,
)

from conftest import StubParent

SUPPLEMENTS = (
    Supplement("apiSupplement", "apiSupplement.cs"),
    Supplement("clientSupplement", "clientSupplement.cs"),
    Supplement("modelSupplement", "modelSupplement.cs"),
)


# ═══════════════════════════════════════════════════════════════════
#  template_path / TemplateResolver
# ═══════════════════════════════════════════════════════════════════


class TestTemplatePath:
    def test_joins_with_platform_separator(self):
        assert template_path("csharpConsola", "apiSupplement") == "csharpConsola" + os.sep + "apiSupplement"


class TestTemplateResolver:
    def test_override_is_namespaced(self, stub_parent):
        """Members of the override set resolve to <namespace>/<name>."""
        resolver = TemplateResolver(
            "csharpConsola",
            {"apiSupplement", "clientSupplement", "modelSupplement"},
            stub_parent.full_template_file,
        )
        assert resolver.resolve("apiSupplement") == os.path.join("csharpConsola", "apiSupplement")
        assert stub_parent.resolved == []

    def test_miss_delegates_unchanged(self, stub_parent):
        """Non-members go to the parent with the same argument, result returned as-is."""
        resolver = TemplateResolver("csharpConsola", {"apiSupplement"}, stub_parent.full_template_file)
        assert resolver.resolve("modelDoc") == "parent::modelDoc"
        assert stub_parent.resolved == ["modelDoc"]

    def test_repeated_resolution_is_stable(self, stub_parent):
        resolver = TemplateResolver("ns", ["a", "b"], stub_parent.full_template_file)
        first = [resolver.resolve(n) for n in ("a", "x", "b", "a")]
        second = [resolver.resolve(n) for n in ("a", "x", "b", "a")]
        assert first == second
        assert first[0] == first[3] == os.path.join("ns", "a")

    def test_empty_override_set_always_delegates(self, stub_parent):
        resolver = TemplateResolver("csharpConsola", set(), stub_parent.full_template_file)
        for name in ("apiSupplement", "README.tmpl", ""):
            assert resolver.resolve(name) == f"parent::{name}"
        assert stub_parent.resolved == ["apiSupplement", "README.tmpl", ""]

    def test_parent_failure_propagates(self):
        def missing(name):
            raise FileNotFoundError(name)

        resolver = TemplateResolver("ns", {"a"}, missing)
        with pytest.raises(FileNotFoundError):
            resolver.resolve("b")

    def test_override_set_is_frozen(self, stub_parent):
        names = {"a"}
        resolver = TemplateResolver("ns", names, stub_parent.full_template_file)
        names.add("b")
        assert isinstance(resolver.override_set, frozenset)
        assert not resolver.overrides("b")


# ═══════════════════════════════════════════════════════════════════
#  ManifestExtender
# ═══════════════════════════════════════════════════════════════════


class TestManifestExtender:
    def test_appends_one_entry_per_supplement(self):
        config = GeneratorConfiguration({"sourceFolder": "src", "packageName": "MyApi", "clientPackage": "Client"})
        manifest = OutputManifest()
        ManifestExtender(SUPPLEMENTS).extend(config, manifest)

        assert len(manifest) == 3
        expected_dir = os.path.join("src", "MyApi", "Client")
        assert all(entry.folder == expected_dir for entry in manifest)
        assert [e.destination_filename for e in manifest] == [
            "apiSupplement.cs",
            "clientSupplement.cs",
            "modelSupplement.cs",
        ]
        assert [e.template_file for e in manifest] == ["apiSupplement", "clientSupplement", "modelSupplement"]

    def test_existing_entries_preserved(self):
        """Entries already in the manifest keep their order and content; new ones follow."""
        config = GeneratorConfiguration({"sourceFolder": "src", "packageName": "MyApi", "clientPackage": "Client"})
        manifest = OutputManifest()
        existing = [
            SupportingFile("README.tmpl", "", "README.md"),
            SupportingFile("ApiClient.tmpl", "src/MyApi/Client", "ApiClient.cs"),
        ]
        for entry in existing:
            manifest.add(entry)

        ManifestExtender(SUPPLEMENTS).extend(config, manifest)

        assert manifest.entries()[:2] == existing
        assert len(manifest) == 5

    def test_no_supplements_appends_nothing(self):
        manifest = OutputManifest()
        ManifestExtender(()).extend(GeneratorConfiguration(), manifest)
        assert len(manifest) == 0

    def test_incomplete_configuration_gives_shorter_path(self):
        """Missing keys are not rejected; the directory just degenerates."""
        manifest = OutputManifest()
        ManifestExtender(SUPPLEMENTS[:1]).extend(GeneratorConfiguration({"packageName": "MyApi"}), manifest)
        assert manifest[0].folder == os.path.join("", "MyApi", "")

    def test_second_extend_raises(self):
        config = GeneratorConfiguration({"sourceFolder": "src", "packageName": "P", "clientPackage": "C"})
        manifest = OutputManifest()
        extender = ManifestExtender(SUPPLEMENTS)
        extender.extend(config, manifest)
        with pytest.raises(ManifestAlreadyExtendedError):
            extender.extend(config, manifest)
        assert len(manifest) == 3


# ═══════════════════════════════════════════════════════════════════
#  Specialization
# ═══════════════════════════════════════════════════════════════════


class TestSpecialization:
    def test_process_opts_runs_parent_first(self):
        """Configuration read by the extender is the parent's finalized one."""

        class Finalizing(StubParent):
            def process_opts(self):
                super().process_opts()
                self.config["clientPackage"] = "Finalized"

        parent = Finalizing({"sourceFolder": "src", "packageName": "MyApi"})
        spec = Specialization("x", "x", (), SUPPLEMENTS, parent)
        spec.process_opts()

        assert parent.calls == ["process_opts"]
        assert {e.folder for e in parent.supporting_files} == {os.path.join("src", "MyApi", "Finalized")}

    def test_shares_parent_state(self, stub_parent):
        spec = Specialization("x", "ns", ("a",), (), stub_parent)
        assert spec.config is stub_parent.config
        assert spec.supporting_files is stub_parent.supporting_files

    def test_full_template_file_uses_resolver(self, stub_parent):
        spec = Specialization("x", "ns", ("a",), (), stub_parent)
        assert spec.full_template_file("a") == os.path.join("ns", "a")
        assert spec.full_template_file("b") == "parent::b"

    def test_supplements_follow_parent_entries(self):
        spec = csharp_consola(config={"packageName": "MyApi"})
        spec.process_opts()
        names = [e.destination_filename for e in spec.supporting_files]
        assert names[:4] == ["README.md", "ApiClient.cs", "Configuration.cs", "ApiException.cs"]
        assert names[-3:] == ["apiSupplement.cs", "clientSupplement.cs", "modelSupplement.cs"]


# ═══════════════════════════════════════════════════════════════════
#  csharp_consola
# ═══════════════════════════════════════════════════════════════════


class TestCSharpConsola:
    def test_name_and_parent(self):
        spec = csharp_consola()
        assert spec.name == CSHARP_CONSOLA == "csharpConsola"
        assert isinstance(spec.parent, CSharpClientGenerator)

    def test_full_variant(self):
        spec = csharp_consola()
        assert spec.resolver.override_set == {
            "packageSupplement.tmpl",
            "apiSupplement.tmpl",
            "clientSupplement.tmpl",
            "modelSupplement.tmpl",
            "referenceSupplement.tmpl",
        }
        assert len(spec.extender.supplements) == 3
        assert spec.full_template_file("apiSupplement.tmpl") == os.path.join("csharpConsola", "apiSupplement.tmpl")
        assert spec.full_template_file("README.tmpl") == os.path.join("csharp", "README.tmpl")

    def test_minimal_variant(self):
        spec = csharp_consola(variant="minimal")
        assert spec.resolver.override_set == {"packageSupplement.tmpl"}
        assert spec.extender.supplements == ()

    def test_unknown_variant(self):
        with pytest.raises(ValueError, match="variant"):
            csharp_consola(variant="legacy")

    def test_repeat_process_opts_skips_parent(self, stub_parent):
        spec = csharp_consola(parent=stub_parent)
        spec.process_opts()
        with pytest.raises(ManifestAlreadyExtendedError):
            spec.process_opts()
        assert stub_parent.calls == ["process_opts"]
        assert len(spec.supporting_files) == 3
        assert spec.extender.extended

    def test_explicit_parent(self, stub_parent):
        spec = csharp_consola(parent=stub_parent)
        assert spec.parent is stub_parent
        assert spec.full_template_file("README.tmpl") == "parent::README.tmpl"
