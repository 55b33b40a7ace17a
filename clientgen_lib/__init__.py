"""
clientgen_lib: A small library to generate API client sources from template documents,
with pluggable specializations that redirect templates and add supplement files.

Public API:
- get_generator(name: str, **kwargs) -> generator
- generate(generator, output_dir: str, dry_run: bool = False) -> list[str]
- load_config(path: str, overrides: Mapping | None = None) -> GeneratorConfiguration
- load_description(path: str) -> dict
- parse_params(param_args: list[str]) -> dict[str, str]

A specialization wraps a parent generator:
- Logical template names in its override set resolve to "<namespace>/<name>";
  all others resolve exactly as the parent resolves them.
- After the parent's option processing, it appends its supplement files under
  <sourceFolder>/<packageName>/<clientPackage> to the output manifest.
"""
from .config import GeneratorConfiguration, load_config, load_description, parse_params
from .generator import BaseGenerator, CSharpClientGenerator, generate
from .manifest import OutputManifest, SupportingFile
from .registry import get_generator, list_generators, register_generator
from .specialization import (
    ManifestAlreadyExtendedError,
    ManifestExtender,
    Specialization,
    Supplement,
    TemplateResolver,
    csharp_consola,
    template_path,
)
from .templating import TemplateError

__all__ = [
    "BaseGenerator",
    "CSharpClientGenerator",
    "GeneratorConfiguration",
    "ManifestAlreadyExtendedError",
    "ManifestExtender",
    "OutputManifest",
    "Specialization",
    "Supplement",
    "SupportingFile",
    "TemplateError",
    "TemplateResolver",
    "csharp_consola",
    "generate",
    "get_generator",
    "list_generators",
    "load_config",
    "load_description",
    "parse_params",
    "register_generator",
    "template_path",
]
