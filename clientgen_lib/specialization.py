"""
Generator specializations.

A specialization wraps a parent generator and changes two things about it:
which physical template document backs a logical template name, and which
extra files are scheduled for a run. Everything else is the parent's.
"""
import logging
import os
from typing import Any, Callable, Iterable, NamedTuple, Optional, Sequence

from .generator import CSharpClientGenerator
from .manifest import OutputManifest, SupportingFile
from .config import GeneratorConfiguration

logger = logging.getLogger(__name__)


class ManifestAlreadyExtendedError(RuntimeError):
    """Raised when a ManifestExtender is asked to extend a second time."""


class Supplement(NamedTuple):
    template_file: str
    destination_filename: str


def template_path(namespace: str, name: str) -> str:
    return os.path.join(namespace, name)


class TemplateResolver:
    """Redirect a fixed set of logical templates into a namespace; defer the rest to ``fallback``."""

    def __init__(self, namespace: str, overrides: Iterable[str], fallback: Callable[[str], str]) -> None:
        self.namespace = namespace
        self.override_set = frozenset(overrides)
        self.fallback = fallback

    def overrides(self, name: str) -> bool:
        return name in self.override_set

    def resolve(self, name: str) -> str:
        if self.overrides(name):
            return template_path(self.namespace, name)
        return self.fallback(name)


class ManifestExtender:
    """Appends supplement files under <sourceFolder>/<packageName>/<clientPackage>.

    Single use: a second call raises ManifestAlreadyExtendedError rather than
    duplicating entries. Configuration is not validated; empty values give a
    shorter directory.
    """

    def __init__(self, supplements: Sequence[Supplement]) -> None:
        self.supplements = tuple(supplements)
        self._extended = False

    @property
    def extended(self) -> bool:
        return self._extended

    def client_package_dir(self, config: GeneratorConfiguration) -> str:
        package_folder = os.path.join(config.source_folder, config.package_name)
        return os.path.join(package_folder, config.client_package)

    def extend(self, config: GeneratorConfiguration, manifest: OutputManifest) -> None:
        if self._extended:
            raise ManifestAlreadyExtendedError("Output manifest has already been extended for this run")
        self._extended = True
        client_dir = self.client_package_dir(config)
        for supplement in self.supplements:
            manifest.add(SupportingFile(supplement.template_file, client_dir, supplement.destination_filename))
        logger.debug("Added %d supplement file(s) under %s", len(self.supplements), client_dir)


class Specialization:
    def __init__(
        self,
        name: str,
        namespace: str,
        overrides: Iterable[str],
        supplements: Sequence[Supplement],
        parent: Any,
    ) -> None:
        self.name = name
        self.parent = parent
        self.resolver = TemplateResolver(namespace, overrides, parent.full_template_file)
        self.extender = ManifestExtender(supplements)

    @property
    def config(self) -> GeneratorConfiguration:
        return self.parent.config

    @property
    def supporting_files(self) -> OutputManifest:
        return self.parent.supporting_files

    def full_template_file(self, template_file: str) -> str:
        return self.resolver.resolve(template_file)

    def process_opts(self) -> None:
        # Checked before the parent runs so a repeat call leaves the manifest untouched
        if self.extender.extended:
            raise ManifestAlreadyExtendedError(f"{self.name} options were already processed for this run")
        self.parent.process_opts()
        self.extender.extend(self.parent.config, self.parent.supporting_files)


CSHARP_CONSOLA = "csharpConsola"

CONSOLA_VARIANTS = {
    "full": (
        (
            "packageSupplement.tmpl",
            "apiSupplement.tmpl",
            "clientSupplement.tmpl",
            "modelSupplement.tmpl",
            "referenceSupplement.tmpl",
        ),
        (
            Supplement("apiSupplement.tmpl", "apiSupplement.cs"),
            Supplement("clientSupplement.tmpl", "clientSupplement.cs"),
            Supplement("modelSupplement.tmpl", "modelSupplement.cs"),
        ),
    ),
    "minimal": (("packageSupplement.tmpl",), ()),
}


def csharp_consola(variant: str = "full", parent: Optional[Any] = None, **kwargs: Any) -> Specialization:
    """Build the csharpConsola specialization on top of a C# client generator.

    Two incompatible definitions of this generator exist; ``variant`` picks one:
    "full" overrides the five supplement partials and emits three supplement
    sources, "minimal" overrides only the package supplement and emits nothing.
    Remaining keyword arguments go to the parent generator when one is built.
    """
    if variant not in CONSOLA_VARIANTS:
        raise ValueError(f"Unknown {CSHARP_CONSOLA} variant {variant!r}; expected one of {sorted(CONSOLA_VARIANTS)}")
    overrides, supplements = CONSOLA_VARIANTS[variant]
    if parent is None:
        parent = CSharpClientGenerator(**kwargs)
    return Specialization(CSHARP_CONSOLA, CSHARP_CONSOLA, overrides, supplements, parent)
