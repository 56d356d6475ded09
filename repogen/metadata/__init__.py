from repogen.metadata.types import TypeDescriptor, PropertyDescriptor, TypeLoadError, CatalogLoadResult
from repogen.metadata.catalog import load_catalog, parse_catalog, parse_manifest
from repogen.metadata.naming import render_name
from repogen.metadata.discovery import (
    is_data_context,
    is_entity_set,
    list_context_candidates,
    select_context,
    extract_entities,
)
