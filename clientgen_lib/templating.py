"""
Rendering of template documents.

Templates are plain text with two kinds of markers:
- ${key} placeholders, substituted from the rendering context. The case of the
  key selects the style of the value: ${name} as-is, ${Name} with its first
  character upper-cased, ${NAME} fully upper-cased.
- ${>partial} includes, replaced by the rendered text of the logical template
  "partial.tmpl" as located by the caller's resolver.
"""
import logging
import os
import re
from typing import Any, Callable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".tmpl"
TEMPLATES_ROOT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

PLACEHOLDER_PATTERN = re.compile(r"\$\{([a-zA-Z0-9_\-\.]+)\}")
PARTIAL_PATTERN = re.compile(r"\$\{>\s*([a-zA-Z0-9_\-\.]+)\s*\}")


class TemplateError(ValueError):
    """Raised when a template cannot be expanded (e.g. recursive partials)."""


def load_template(path: str, root: str = TEMPLATES_ROOT) -> str:
    """Read a template document.

    Relative paths are looked up under the packaged template root first, then
    as given; absolute paths are read directly.
    """
    candidate = path
    if not os.path.isabs(path) and os.path.isfile(os.path.join(root, path)):
        candidate = os.path.join(root, path)
    if not os.path.isfile(candidate):
        raise FileNotFoundError(f"Template not found: {path}")
    with open(candidate, "r", encoding="utf-8") as f:
        return f.read()


def _classify_key(k: str) -> Tuple[str, str]:
    """Return (lower-cased key, style) where style is "upper", "title" or "lower".

    ${APPNAME} is "upper", ${Classname} is "title"; anything else, including
    camelCase keys such as ${packageName}, renders the value unchanged.
    """
    letters = [ch for ch in k if ch.isalpha()]
    if letters and k.upper() == k:
        return k.lower(), "upper"
    if letters and letters[0].isupper() and "".join(letters[1:]).islower():
        return k.lower(), "title"
    return k.lower(), "lower"


def _apply_style(val: str, style: str) -> str:
    if style == "upper":
        return val.upper()
    if style == "title":
        return (val[:1].upper() + val[1:]) if val else val
    return val


def render_string(template: str, context: Mapping[str, Any]) -> str:
    """Substitute ${key} placeholders; unknown keys are left untouched."""

    def repl(match: re.Match[str]) -> str:
        raw_key = match.group(1)
        canonical_key, style = _classify_key(raw_key)
        # Exact key first, then a case-insensitive match, which keeps camelCase keys reachable from ${Key}
        val = context.get(raw_key)
        if val is None:
            for k in context.keys():
                if str(k).lower() == canonical_key:
                    val = context[k]
                    break
        if val is None:
            return match.group(0)
        if isinstance(val, list):
            val = val[0] if val else ""
        return _apply_style(str(val), style)

    return PLACEHOLDER_PATTERN.sub(repl, template)


def expand_partials(
    template: str,
    resolve: Callable[[str], str],
    loader: Callable[[str], str] = load_template,
    _stack: Optional[Tuple[str, ...]] = None,
) -> str:
    """Inline every ${>partial} using ``resolve`` to locate its document."""
    stack = _stack or ()

    def repl(match: re.Match[str]) -> str:
        logical = match.group(1) + TEMPLATE_SUFFIX
        if logical in stack:
            chain = " -> ".join(stack + (logical,))
            raise TemplateError(f"Recursive partial include: {chain}")
        path = resolve(logical)
        logger.debug("Partial %s resolved to %s", logical, path)
        body = loader(path)
        return expand_partials(body, resolve, loader, stack + (logical,))

    return PARTIAL_PATTERN.sub(repl, template)


def render_template(
    logical_name: str,
    context: Mapping[str, Any],
    resolve: Callable[[str], str],
    loader: Callable[[str], str] = load_template,
) -> str:
    """Resolve, load, expand partials of and render one logical template."""
    path = resolve(logical_name)
    logger.debug("Template %s resolved to %s", logical_name, path)
    body = expand_partials(loader(path), resolve, loader, (logical_name,))
    return render_string(body, context)
