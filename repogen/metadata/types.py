"""Dataclasses describing reflected type metadata."""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(eq=False)
class PropertyDescriptor:
    """A declared property of a type."""
    name: str
    type: "TypeDescriptor" = field(repr=False)


@dataclass(eq=False)
class TypeDescriptor:
    """Read-only view of one type from a compiled assembly.

    ``name`` is the raw simple name as the runtime reports it, so generic
    definitions keep their arity suffix (``DbSet`1``). Descriptors compare
    by identity; the catalog loader hands out one object per declared type.
    """
    name: str
    namespace: str = ""
    generic_arguments: Tuple["TypeDescriptor", ...] = ()
    base_type: Optional["TypeDescriptor"] = field(default=None, repr=False)
    properties: Tuple[PropertyDescriptor, ...] = field(default=(), repr=False)
    is_interface: bool = False

    @property
    def is_generic(self) -> bool:
        return len(self.generic_arguments) > 0

    @property
    def full_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    @property
    def base_chain(self) -> Tuple["TypeDescriptor", ...]:
        """Base types, nearest first. Stops at the first repeated type."""
        chain: List[TypeDescriptor] = []
        seen = {id(self)}
        current = self.base_type
        while current is not None and id(current) not in seen:
            chain.append(current)
            seen.add(id(current))
            current = current.base_type
        return tuple(chain)


@dataclass
class TypeLoadError:
    """A type that could not be resolved while reading a catalog."""
    type_name: str
    reason: str


@dataclass
class CatalogLoadResult:
    """Types read from one assembly, plus the ones that failed to load."""
    assembly: str
    types: List[TypeDescriptor] = field(default_factory=list)
    errors: List[TypeLoadError] = field(default_factory=list)
