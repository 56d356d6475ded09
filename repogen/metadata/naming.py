"""Display names for reflected types."""
import re

from repogen.metadata.types import TypeDescriptor

_ARITY_SUFFIX = re.compile(r"`\d+$")


def strip_arity(name: str) -> str:
    """Remove a CLR generic arity suffix: 'DbSet`1' -> 'DbSet'."""
    return _ARITY_SUFFIX.sub("", name)


def render_name(type_: TypeDescriptor) -> str:
    """Render a type the way it is written in C# source.

    Generic arguments are rendered recursively and joined with a bare
    comma, e.g. ``Dictionary<String,List<Int32>>``.
    """
    if not type_.is_generic:
        return type_.name
    arguments = ",".join(render_name(arg) for arg in type_.generic_arguments)
    return f"{strip_arity(type_.name)}<{arguments}>"
