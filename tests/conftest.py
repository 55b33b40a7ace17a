"""
Shared test fixtures.
"""

from pathlib import Path

import pytest

from clientgen_lib.config import GeneratorConfiguration
from clientgen_lib.manifest import OutputManifest


class StubParent:
    """Stands in for a parent generator; records every call it receives."""

    def __init__(self, config=None):
        self.config = GeneratorConfiguration(config)
        self.supporting_files = OutputManifest()
        self.resolved = []
        self.calls = []

    def full_template_file(self, template_file):
        self.resolved.append(template_file)
        return f"parent::{template_file}"

    def process_opts(self):
        self.calls.append("process_opts")


@pytest.fixture
def stub_parent() -> StubParent:
    return StubParent({"sourceFolder": "src", "packageName": "MyApi", "clientPackage": "Client"})


@pytest.fixture
def description_file(tmp_path: Path) -> Path:
    path = tmp_path / "petstore.yaml"
    path.write_text(
        "info:\n"
        "  title: Petstore\n"
        "  version: 2.1.0\n"
        "  description: Sample pet store\n"
        "apis:\n"
        "  pet: [addPet, getPetById]\n"
        "  store: [placeOrder]\n"
        "models:\n"
        "  pet:\n"
        "    id: long\n"
        "    name: string\n",
        encoding="utf-8",
    )
    return path
