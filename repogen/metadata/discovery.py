"""
Discovery of data-context types and their entity sets.

A data context is any class whose base chain reaches one of the configured
context base types. An entity set is a generic property whose rendered
type name contains the collection marker (``DbSet<Student>``).
"""
import logging
from typing import Iterable, List, Optional, Sequence

from repogen.core.config import settings
from repogen.core.errors import ContextNotFoundError
from repogen.metadata.naming import render_name
from repogen.metadata.types import TypeDescriptor

log = logging.getLogger(__name__)


def is_data_context(type_: Optional[TypeDescriptor], base_types: Optional[Iterable[str]] = None) -> bool:
    """Check if a type inherits, directly or transitively, from a context base type."""
    if type_ is None or type_.is_interface:
        return False
    markers = set(settings.context_base_types if base_types is None else base_types)
    return any(base.full_name in markers for base in type_.base_chain)


def is_entity_set(type_: TypeDescriptor, marker: Optional[str] = None) -> bool:
    """Check if a property type is a queryable entity set."""
    marker = settings.collection_marker if marker is None else marker
    return type_.is_generic and marker in render_name(type_)


def list_context_candidates(
    types: Iterable[Optional[TypeDescriptor]],
    base_types: Optional[Iterable[str]] = None,
) -> List[TypeDescriptor]:
    """Filter loaded types down to data contexts, keeping enumeration order."""
    markers = list(settings.context_base_types if base_types is None else base_types)
    return [t for t in types if t is not None and is_data_context(t, markers)]


def select_context(candidates: Sequence[TypeDescriptor], name_filter: Optional[str] = None) -> TypeDescriptor:
    """Pick the context to generate for.

    With a filter, only candidates whose simple name matches exactly
    (case-sensitive) are considered. The first remaining candidate wins.
    """
    if name_filter is not None and name_filter.strip():
        candidates = [c for c in candidates if c.name == name_filter]
        if not candidates:
            raise ContextNotFoundError(f"No DbContext named '{name_filter}' was found.")
    if not candidates:
        raise ContextNotFoundError("No DbContext was found.")
    if len(candidates) > 1:
        log.info("Found %d DbContext types, using %s", len(candidates), candidates[0].full_name)
    return candidates[0]


def extract_entities(context: TypeDescriptor, marker: Optional[str] = None) -> List[TypeDescriptor]:
    """Entity types of a context, in property declaration order."""
    return [
        prop.type.generic_arguments[0]
        for prop in context.properties
        if is_entity_set(prop.type, marker)
    ]
