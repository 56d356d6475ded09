"""
Type catalog loader.

A type catalog is the metadata view of one compiled assembly, exported as a
JSON (or YAML) manifest:

    {
      "assembly": "ContosoUniversity",
      "types": [
        {
          "name": "SchoolContext",
          "namespace": "ContosoUniversity.Models",
          "baseType": "Microsoft.EntityFrameworkCore.DbContext",
          "properties": [
            {"name": "Students",
             "type": {"name": "DbSet`1",
                      "namespace": "Microsoft.EntityFrameworkCore",
                      "genericArguments": ["ContosoUniversity.Models.Student"]}}
          ]
        }
      ]
    }

Type references are either full-name strings or inline objects (needed for
constructed generic types). Names that are not declared in the manifest
resolve to external descriptors with no members.

Loading tolerates broken entries: each one is reported as a TypeLoadError
and every other type is still returned.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from repogen.core.errors import CatalogError
from repogen.metadata.types import (
    CatalogLoadResult,
    PropertyDescriptor,
    TypeDescriptor,
    TypeLoadError,
)

log = logging.getLogger(__name__)

YAML_SUFFIXES = {".yml", ".yaml"}


def _split_full_name(full_name: str) -> Tuple[str, str]:
    """Split 'Ns.Sub.Name' into ('Ns.Sub', 'Name')."""
    namespace, _, name = full_name.rpartition(".")
    return namespace, name


class _TypeResolver:
    """Resolves type references against the declared types of one manifest."""

    def __init__(self, declared: Dict[str, TypeDescriptor]):
        self.declared = declared
        self.external: Dict[str, TypeDescriptor] = {}

    def _named(self, full_name: str) -> TypeDescriptor:
        if full_name in self.declared:
            return self.declared[full_name]
        if full_name not in self.external:
            namespace, name = _split_full_name(full_name)
            self.external[full_name] = TypeDescriptor(name=name, namespace=namespace)
        return self.external[full_name]

    def resolve(self, ref: Any) -> TypeDescriptor:
        if isinstance(ref, str):
            full_name = ref.strip()
            if not full_name:
                raise ValueError("empty type reference")
            return self._named(full_name)

        if isinstance(ref, dict):
            name = ref.get("name")
            if not isinstance(name, str) or not name:
                raise ValueError(f"type reference without a name: {ref!r}")
            namespace = ref.get("namespace") or ""
            arguments = tuple(self.resolve(arg) for arg in ref.get("genericArguments") or [])
            if not arguments:
                return self._named(f"{namespace}.{name}" if namespace else name)
            # Constructed generic type, e.g. DbSet<Student>
            return TypeDescriptor(name=name, namespace=namespace, generic_arguments=arguments)

        raise ValueError(f"unsupported type reference: {ref!r}")


def _entry_label(entry: Any, index: int) -> str:
    if isinstance(entry, dict) and entry.get("name"):
        namespace = entry.get("namespace") or ""
        return f"{namespace}.{entry['name']}" if namespace else entry["name"]
    return f"<entry {index}>"


def _resolve_base(entry: Dict[str, Any], resolver: _TypeResolver) -> Optional[TypeDescriptor]:
    base_ref = entry.get("baseType")
    return resolver.resolve(base_ref) if base_ref else None


def _resolve_members(
    entry: Dict[str, Any], resolver: _TypeResolver
) -> Tuple[Tuple[TypeDescriptor, ...], Tuple[PropertyDescriptor, ...]]:
    generic_arguments = tuple(resolver.resolve(arg) for arg in entry.get("genericArguments") or [])

    properties: List[PropertyDescriptor] = []
    for prop in entry.get("properties") or []:
        if not isinstance(prop, dict) or not prop.get("name"):
            raise ValueError(f"property without a name: {prop!r}")
        if "type" not in prop:
            raise ValueError(f"property '{prop['name']}' has no type")
        properties.append(PropertyDescriptor(name=prop["name"], type=resolver.resolve(prop["type"])))

    return generic_arguments, tuple(properties)


def parse_catalog(data: Any) -> CatalogLoadResult:
    """Build descriptors from a decoded manifest."""
    if not isinstance(data, dict) or not isinstance(data.get("types"), list):
        raise CatalogError("The type catalog does not contain a 'types' list.")

    result = CatalogLoadResult(assembly=str(data.get("assembly") or ""))

    def fail(label: str, reason: str) -> None:
        log.warning("Skipping type %s: %s", label, reason)
        result.errors.append(TypeLoadError(type_name=label, reason=reason))

    # Declare every type first so members may reference each other in any order.
    declared: Dict[str, TypeDescriptor] = {}
    pending: List[Tuple[Dict[str, Any], TypeDescriptor]] = []
    for index, entry in enumerate(data["types"]):
        label = _entry_label(entry, index)
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str) or not entry["name"]:
            fail(label, "missing type name")
            continue
        if label in declared:
            fail(label, "duplicate type name")
            continue
        descriptor = TypeDescriptor(
            name=entry["name"],
            namespace=entry.get("namespace") or "",
            is_interface=bool(entry.get("isInterface", False)),
        )
        declared[label] = descriptor
        pending.append((entry, descriptor))

    resolver = _TypeResolver(declared)

    # Inheritance links first: a type whose members fail to load is dropped,
    # but its subclasses still see it in their base chain.
    resolvable: List[Tuple[Dict[str, Any], TypeDescriptor]] = []
    for entry, descriptor in pending:
        try:
            descriptor.base_type = _resolve_base(entry, resolver)
        except (ValueError, TypeError) as e:
            fail(descriptor.full_name, str(e))
            continue
        resolvable.append((entry, descriptor))

    loaded: List[TypeDescriptor] = []
    for entry, descriptor in resolvable:
        try:
            generic_arguments, properties = _resolve_members(entry, resolver)
        except (ValueError, TypeError) as e:
            fail(descriptor.full_name, str(e))
            continue
        descriptor.generic_arguments = generic_arguments
        descriptor.properties = properties
        loaded.append(descriptor)

    for descriptor in loaded:
        # base_chain stops early only when it runs into a repeated type
        chain = descriptor.base_chain
        last = chain[-1] if chain else descriptor
        if last.base_type is not None:
            fail(descriptor.full_name, "circular base type")
        else:
            result.types.append(descriptor)

    log.info("Loaded %d types from %s (%d failed)",
             len(result.types), result.assembly or "catalog", len(result.errors))
    return result


def parse_manifest(text: str, fmt: str = "json") -> CatalogLoadResult:
    """Decode manifest text (``json`` or ``yaml``) and build descriptors."""
    try:
        if fmt == "yaml":
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"The type catalog could not be parsed: {e}") from e
    return parse_catalog(data)


def load_catalog(path: Path) -> CatalogLoadResult:
    """Read a catalog manifest from disk. YAML is chosen by file suffix."""
    path = Path(path)
    if not path.is_file():
        raise CatalogError(f"Unable to find type catalog '{path}'.")
    fmt = "yaml" if path.suffix.lower() in YAML_SUFFIXES else "json"
    return parse_manifest(path.read_text(encoding="utf-8"), fmt)
