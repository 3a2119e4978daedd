"""Compiled-in catalogs of components and templates.

Both catalogs are built once at import time and are read-only.
"""

from hexstack.registry.components import (
    COMPONENTS,
    ComponentDescriptor,
    Dependency,
    describe,
    known_components,
    load_components,
    normalize_components,
)
from hexstack.registry.templates import (
    TEMPLATES,
    Frontend,
    ProjectTemplate,
    build_templates,
    load_templates,
    lookup,
    parse_frontend,
    template_key,
)

__all__ = [
    # Components
    "COMPONENTS",
    "ComponentDescriptor",
    "Dependency",
    "describe",
    "known_components",
    "load_components",
    "normalize_components",
    # Templates
    "TEMPLATES",
    "Frontend",
    "ProjectTemplate",
    "build_templates",
    "load_templates",
    "lookup",
    "parse_frontend",
    "template_key",
]
