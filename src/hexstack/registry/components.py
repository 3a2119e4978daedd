"""Component registry.

Components are the capabilities a user can opt into (an HTTP layer, a
websocket layer). Identifiers are case-insensitive and stored lowercase.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Dependency:
    """A crate a component pulls into the generated project."""
    name: str
    version: Optional[str] = None
    features: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ComponentDescriptor:
    """Compiled-in metadata for one component."""
    id: str
    description: str
    dependencies: Tuple[Dependency, ...] = field(default_factory=tuple)
    template_file: Optional[str] = None


# (id, description)
_COMPONENTS = (
    ("ripress", "An HTTP Framework with best in class developer experience"),
    ("wynd", "An Event Driven WebSocket library"),
)


def load_components() -> Mapping[str, ComponentDescriptor]:
    """Build the read-only component catalog."""
    catalog = {
        component_id: ComponentDescriptor(
            id=component_id,
            description=description,
            dependencies=(Dependency(name=component_id),),
            template_file=component_id,
        )
        for component_id, description in _COMPONENTS
    }
    return MappingProxyType(catalog)


COMPONENTS = load_components()


def known_components() -> frozenset:
    """Identifiers of every registered component."""
    return frozenset(COMPONENTS)


def describe(component_id: str) -> Optional[ComponentDescriptor]:
    """Get the descriptor for a component, or None if it is unknown."""
    return COMPONENTS.get(component_id.lower())


def normalize_components(component_ids: Iterable[str]) -> List[str]:
    """Lowercase component identifiers, keeping order and duplicates."""
    return [c.lower() for c in component_ids]
