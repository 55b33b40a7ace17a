import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import CLIENT_PACKAGE, PACKAGE_NAME, SOURCE_FOLDER, GeneratorConfiguration
from .manifest import OutputManifest, SupportingFile
from .templating import TEMPLATE_SUFFIX, render_template

logger = logging.getLogger(__name__)


def _ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def _create_path(base_dir: str, folder: str, filename: str) -> str:
    # folder may be empty (file at output root) or nested like "src/Pkg/Client"
    path = os.path.join(base_dir, folder, filename)
    dir_path = os.path.dirname(path)
    if dir_path:
        _ensure_dir(dir_path)
    return path


def _camelize(name: str) -> str:
    parts = [p for p in name.replace("-", "_").split("_") if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


class BaseGenerator:
    """Generic client generator: template lookup, configuration defaults and the output manifest.

    Language generators subclass this, set ``name``, ``embedded_template_dir``
    and ``defaults``, and append their default files in ``process_opts``.
    """

    name = "base"
    embedded_template_dir = ""
    defaults: Dict[str, Any] = {}

    def __init__(
        self,
        config: Optional[Union[GeneratorConfiguration, Mapping[str, Any]]] = None,
        template_dir: Optional[str] = None,
        description: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if isinstance(config, GeneratorConfiguration):
            self.config = config
        else:
            self.config = GeneratorConfiguration(config)
        self.template_dir = template_dir
        self.description: Dict[str, Any] = dict(description or {})
        self.supporting_files = OutputManifest()

    def full_template_file(self, template_file: str) -> str:
        """Locate a logical template: user template_dir first, then the embedded set.

        User hits come back absolute so they never collide with a packaged
        directory of the same name.
        """
        if self.template_dir:
            candidate = os.path.join(self.template_dir, template_file)
            if os.path.isfile(candidate):
                return os.path.abspath(candidate)
        return os.path.join(self.embedded_template_dir, template_file)

    def process_opts(self) -> None:
        for key, value in self.defaults.items():
            self.config.setdefault(key, value)
        info = self.description.get("info") or {}
        self.config.setdefault("appName", info.get("title", "Swagger Client"))
        self.config.setdefault("appVersion", info.get("version", "1.0.0"))
        self.config.setdefault("appDescription", info.get("description", ""))


class CSharpClientGenerator(BaseGenerator):
    name = "csharp"
    embedded_template_dir = "csharp"
    defaults = {
        SOURCE_FOLDER: "src",
        PACKAGE_NAME: "IO.Swagger",
        CLIENT_PACKAGE: "Client",
        "packageVersion": "1.0.0",
        "apiPackage": "Api",
        "modelPackage": "Model",
    }

    def process_opts(self) -> None:
        super().process_opts()
        cfg = self.config
        package_folder = os.path.join(cfg.source_folder, cfg.package_name)
        client_package_dir = os.path.join(package_folder, cfg.client_package)

        self.supporting_files.add(SupportingFile("README" + TEMPLATE_SUFFIX, "", "README.md"))
        for base in ("ApiClient", "Configuration", "ApiException"):
            self.supporting_files.add(SupportingFile(base + TEMPLATE_SUFFIX, client_package_dir, base + ".cs"))

        api_folder = os.path.join(package_folder, str(cfg["apiPackage"]))
        for api_name, operations in sorted((self.description.get("apis") or {}).items()):
            classname = _camelize(api_name) + "Api"
            lines = [f"        public void {_camelize(op)}() {{ }}" for op in operations]
            self.supporting_files.add(
                SupportingFile(
                    "api" + TEMPLATE_SUFFIX,
                    api_folder,
                    classname + ".cs",
                    {"classname": classname, "operations": "\n".join(lines)},
                )
            )

        model_folder = os.path.join(package_folder, str(cfg["modelPackage"]))
        for model_name, props in sorted((self.description.get("models") or {}).items()):
            classname = _camelize(model_name)
            lines = [f"        public {ptype} {_camelize(prop)} {{ get; set; }}" for prop, ptype in props.items()]
            self.supporting_files.add(
                SupportingFile(
                    "model" + TEMPLATE_SUFFIX,
                    model_folder,
                    classname + ".cs",
                    {"classname": classname, "properties": "\n".join(lines)},
                )
            )


def generate(generator: Any, output_dir: str, dry_run: bool = False) -> List[str]:
    """
    Run one generation cycle and return the paths of the files produced.

    - generator exposes process_opts(), full_template_file(), config and supporting_files;
      both language generators and specializations qualify.
    - process_opts() is invoked exactly once, before the manifest is read.
    - With dry_run, nothing is written; the planned paths are returned.
    """
    generator.process_opts()
    base_context = generator.config.as_context()
    written: List[str] = []

    for entry in generator.supporting_files:
        target = os.path.join(output_dir, entry.folder, entry.destination_filename)
        if dry_run:
            written.append(target)
            continue
        context = dict(base_context)
        if entry.context:
            context.update(entry.context)
        data = render_template(entry.template_file, context, generator.full_template_file)
        path = _create_path(output_dir, entry.folder, entry.destination_filename)
        with open(path, "w", encoding="utf-8") as f:
            f.write(data)
        logger.info("Wrote %s", path)
        written.append(path)

    return written
