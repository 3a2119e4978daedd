"""Template registry.

Each template is a remote repository bound to one exact combination of
required components and frontend. The catalog covers every supported
component combination (single, pairwise, full set) crossed with every
frontend variant (none, react, svelte).
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple

from hexstack.errors import RegistryError
from hexstack.registry.components import known_components


class Frontend(str, Enum):
    """Supported frontend frameworks."""
    REACT = "react"
    SVELTE = "svelte"


# Values meaning "no frontend"
NO_FRONTEND_VALUES = ("", "none")


def parse_frontend(value: Optional[str]) -> Optional[Frontend]:
    """Parse a frontend choice.

    Args:
        value: "react", "svelte", "none" or None (case-insensitive)

    Returns:
        Frontend, or None when no frontend was chosen

    Raises:
        ValueError: If the value is not a supported frontend
    """
    if value is None:
        return None
    if isinstance(value, Frontend):
        return value
    normalized = value.strip().lower()
    if normalized in NO_FRONTEND_VALUES:
        return None
    try:
        return Frontend(normalized)
    except ValueError:
        valid = ", ".join([f.value for f in Frontend] + ["none"])
        raise ValueError(f"Invalid frontend '{value}'. Valid values: {valid}")


@dataclass(frozen=True)
class ProjectTemplate:
    """A scaffold repository for one component/frontend combination."""
    key: str
    name: str
    github_url: str
    components: FrozenSet[str]
    frontend: Optional[Frontend] = None


def template_key(components: Iterable[str], frontend: Optional[Frontend] = None) -> str:
    """Derive the catalog key for a component set and frontend.

    Example: ({"wynd", "ripress"}, Frontend.REACT) -> "ripress_wynd_react"
    """
    parts = sorted(set(components))
    if frontend is not None:
        parts.append(frontend.value)
    return "_".join(parts)


# (required components, frontend, display name, repository)
_TEMPLATE_SPECS: Tuple[Tuple[Tuple[str, ...], Optional[Frontend], str, str], ...] = (
    (("ripress",), None, "Ripress Basic",
     "https://github.com/Guru901/ripress-only"),
    (("wynd",), None, "Wynd Basic",
     "https://github.com/Guru901/wynd-only"),
    (("ripress", "wynd"), None, "Ripress + Wynd",
     "https://github.com/Guru901/ripress-wynd"),

    (("ripress",), Frontend.REACT, "Ripress + React",
     "https://github.com/Guru901/ripress-react"),
    (("wynd",), Frontend.REACT, "Wynd + React",
     "https://github.com/Guru901/wynd-react"),
    (("ripress", "wynd"), Frontend.REACT, "Ripress + Wynd + React",
     "https://github.com/Guru901/ripress-wynd-react"),

    (("ripress",), Frontend.SVELTE, "Ripress + Svelte",
     "https://github.com/Guru901/ripress-svelte"),
    (("wynd",), Frontend.SVELTE, "Wynd + Svelte",
     "https://github.com/Guru901/wynd-svelte"),
    (("ripress", "wynd"), Frontend.SVELTE, "Ripress + Wynd + Svelte",
     "https://github.com/Guru901/ripress-wynd-svelte"),
)


def build_templates(
    specs: Sequence[Tuple[Tuple[str, ...], Optional[Frontend], str, str]],
    known: Optional[FrozenSet[str]] = None,
) -> Mapping[str, ProjectTemplate]:
    """Build a read-only template catalog from (components, frontend, name, url) rows.

    Raises:
        RegistryError: If a row names an unknown component, has no
            components, or duplicates another row's combination
    """
    known = known if known is not None else known_components()
    catalog = {}

    for components, frontend, name, url in specs:
        required = frozenset(c.lower() for c in components)
        if not required:
            raise RegistryError(f"Template '{name}' requires no components")

        unknown = required - known
        if unknown:
            raise RegistryError(
                f"Template '{name}' requires unknown components: {sorted(unknown)}"
            )

        key = template_key(required, frontend)
        if key in catalog:
            raise RegistryError(
                f"Templates '{catalog[key].name}' and '{name}' both map to '{key}'"
            )

        catalog[key] = ProjectTemplate(
            key=key,
            name=name,
            github_url=url,
            components=required,
            frontend=frontend,
        )

    return MappingProxyType(catalog)


def load_templates() -> Mapping[str, ProjectTemplate]:
    """Build the compiled-in template catalog."""
    return build_templates(_TEMPLATE_SPECS)


TEMPLATES = load_templates()


def lookup(key: str) -> Optional[ProjectTemplate]:
    """Get a template by key, or None."""
    return TEMPLATES.get(key)
