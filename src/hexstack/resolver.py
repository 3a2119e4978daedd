"""Template resolution.

Maps a set of selected components plus an optional frontend to at most one
template. Candidates are tried most-specific first:

- A multi-component template matches only when the selection equals its
  required set exactly, so a selected capability is never silently dropped.
- A single-component template matches whenever its component is selected,
  since no combined template exists for the larger selection.

Unknown component ids never match a template but still count toward the
exact-equality check.
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from hexstack.registry.templates import (
    TEMPLATES,
    Frontend,
    ProjectTemplate,
    parse_frontend,
)

Candidate = Tuple[str, FrozenSet[str]]


def candidate_table(
    templates: Mapping[str, ProjectTemplate],
) -> Mapping[Optional[Frontend], Tuple[Candidate, ...]]:
    """Build the priority-ordered candidate list for each frontend variant.

    Within a list, larger required sets come first; ties are ordered by key.
    """
    table: Dict[Optional[Frontend], List[Candidate]] = {None: []}
    for frontend in Frontend:
        table[frontend] = []

    for template in templates.values():
        table.setdefault(template.frontend, []).append((template.key, template.components))

    return MappingProxyType({
        frontend: tuple(sorted(candidates, key=lambda c: (-len(c[1]), c[0])))
        for frontend, candidates in table.items()
    })


CANDIDATES = candidate_table(TEMPLATES)


def matches(required: FrozenSet[str], selected: FrozenSet[str]) -> bool:
    """Check whether a template's required set matches a selection."""
    if not required <= selected:
        return False
    if len(required) > 1:
        return required == selected
    return True


def resolve(
    components: Iterable[str],
    frontend: Optional[Union[str, Frontend]] = None,
    templates: Optional[Mapping[str, ProjectTemplate]] = None,
) -> Optional[ProjectTemplate]:
    """Pick the template for a selection.

    Args:
        components: Selected component ids (any case, duplicates allowed)
        frontend: Frontend, its string value, "none" or None
        templates: Catalog to resolve against (defaults to TEMPLATES)

    Returns:
        The matching ProjectTemplate, or None if nothing matches
    """
    selected = frozenset(c.lower() for c in components)
    frontend = parse_frontend(frontend)

    if templates is None:
        templates, table = TEMPLATES, CANDIDATES
    else:
        table = candidate_table(templates)

    for key, required in table.get(frontend, ()):
        if matches(required, selected):
            template = templates.get(key)
            if template is not None:
                return template

    return None
