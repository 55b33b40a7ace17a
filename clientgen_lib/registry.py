"""Registry of generators selectable by name (e.g. from the -l flag)."""
from typing import Any, Callable, Dict, List

from .generator import CSharpClientGenerator
from .specialization import CSHARP_CONSOLA, csharp_consola

_GENERATORS: Dict[str, Callable[..., Any]] = {
    CSharpClientGenerator.name: CSharpClientGenerator,
    CSHARP_CONSOLA: csharp_consola,
}


def register_generator(name: str, factory: Callable[..., Any]) -> None:
    if name in _GENERATORS:
        raise ValueError(f"Generator already registered: {name}")
    _GENERATORS[name] = factory


def get_generator(name: str, **kwargs: Any) -> Any:
    """Instantiate the generator registered under ``name``."""
    try:
        factory = _GENERATORS[name]
    except KeyError:
        raise KeyError(f"Unknown generator {name!r}; available: {', '.join(list_generators())}") from None
    return factory(**kwargs)


def list_generators() -> List[str]:
    return sorted(_GENERATORS)
