import json
import logging
import os
from typing import Any, Dict, Iterator, List, Mapping, MutableMapping, Optional, Sequence

import yaml

logger = logging.getLogger(__name__)

SOURCE_FOLDER = "sourceFolder"
PACKAGE_NAME = "packageName"
CLIENT_PACKAGE = "clientPackage"


class GeneratorConfiguration(MutableMapping[str, Any]):
    """Key/value settings for one generation run.

    Behaves like a dict; the three keys used to place generated sources are
    also exposed as properties.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"GeneratorConfiguration({self._values!r})"

    def _str(self, key: str) -> str:
        val = self._values.get(key)
        return "" if val is None else str(val)

    @property
    def source_folder(self) -> str:
        return self._str(SOURCE_FOLDER)

    @property
    def package_name(self) -> str:
        return self._str(PACKAGE_NAME)

    @property
    def client_package(self) -> str:
        return self._str(CLIENT_PACKAGE)

    def as_context(self) -> Dict[str, Any]:
        """Return a plain dict copy suitable for template rendering."""
        return dict(self._values)


def parse_params(param_args: Optional[Sequence[str]]) -> Dict[str, str]:
    """
    Turn repeated -p flags into configuration properties.

    Each item is "name=value" or "name:value", optionally wrapped in one pair
    of quotes; the first separator splits. Later flags override earlier ones.

    Example: ["packageName=MyApi", "sourceFolder:lib"]
    -> {"packageName": "MyApi", "sourceFolder": "lib"}
    """
    result: Dict[str, str] = {}
    for raw in param_args or ():
        s = str(raw).strip() if raw is not None else ""
        if len(s) >= 2 and s[0] == s[-1] and s[0] in "\"'":
            s = s[1:-1]
        if not s:
            continue
        seps = [i for i in (s.find("="), s.find(":")) if i > 0]
        if not seps or min(seps) == len(s) - 1:
            raise ValueError(f"Invalid -p parameter format: {raw!r}. Expect key=value or key:value.")
        cut = min(seps)
        result[s[:cut].strip()] = s[cut + 1:].strip()
    return result


def _load_document(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith(".json"):
            return json.load(f)
        return yaml.safe_load(f)


def load_config(path: str, overrides: Optional[Mapping[str, Any]] = None) -> GeneratorConfiguration:
    """Load a YAML (or JSON) configuration file into a GeneratorConfiguration.

    ``overrides`` (typically from -p flags) take precedence over file values.
    An empty file yields an empty configuration.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Configuration file not found: {path}")
    data = _load_document(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a top-level mapping: {path}")
    config = GeneratorConfiguration(data)
    if overrides:
        config.update(overrides)
    logger.debug("Loaded configuration from %s: %d keys", path, len(config))
    return config


def load_description(path: str) -> Dict[str, Any]:
    """
    Load an API description document.

    Only the parts the templates consume are read:
    - info: mapping (title, version, description)
    - apis: mapping of api name -> list of operation names
    - models: mapping of model name -> mapping of property name -> type
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"API description not found: {path}")
    data = _load_document(path)
    if not isinstance(data, dict):
        raise ValueError(f"API description must contain a top-level mapping: {path}")

    info = data.get("info") or {}
    apis = data.get("apis") or {}
    models = data.get("models") or {}
    if not isinstance(info, dict) or not isinstance(apis, dict) or not isinstance(models, dict):
        raise ValueError("API description 'info', 'apis' and 'models' must be mappings")

    normalized_apis: Dict[str, List[str]] = {}
    for name, ops in apis.items():
        if ops is None:
            ops = []
        if not isinstance(ops, list):
            raise ValueError(f"Operations for api {name!r} must be a list")
        normalized_apis[str(name)] = [str(op) for op in ops]

    normalized_models: Dict[str, Dict[str, str]] = {}
    for name, props in models.items():
        if props is None:
            props = {}
        if not isinstance(props, dict):
            raise ValueError(f"Properties for model {name!r} must be a mapping")
        normalized_models[str(name)] = {str(k): str(v) for k, v in props.items()}

    return {"info": dict(info), "apis": normalized_apis, "models": normalized_models}
