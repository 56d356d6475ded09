"""Entity-specific rendering functions for repository generation."""
from repogen.metadata.types import TypeDescriptor
from repogen.generators.repository_gen.render import render_namespace
from repogen.generators.repository_gen.utils import (
    BASE_REPOSITORY,
    BASE_REPOSITORY_INTERFACE,
    entity_name,
    generic_of,
    repository_interface_name,
    repository_name,
)


def render_entity_repository(entity: TypeDescriptor) -> str:
    """Generate <Entity>Repository.cs: an empty repository class and its marker interface."""
    name = entity_name(entity)

    body = [
        f"    public class {repository_name(entity)} : {generic_of(BASE_REPOSITORY, name)}, {repository_interface_name(entity)}",
        "    {",
        "",
        "    }",
        "",
        f"    public interface {repository_interface_name(entity)} : {generic_of(BASE_REPOSITORY_INTERFACE, name)}",
        "    {",
        "",
        "    }",
    ]
    usings = ["System", "System.Linq", "System.Collections.Generic"]
    return render_namespace(entity.namespace, usings, body)
