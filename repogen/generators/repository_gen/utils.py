"""Naming conventions shared by every repository template."""
from repogen.metadata.naming import render_name
from repogen.metadata.types import TypeDescriptor

BASE_REPOSITORY = "EFRepository"
BASE_REPOSITORY_INTERFACE = "IRepository"
UNIT_OF_WORK_INTERFACE = "IUnitOfWork"
UNIT_OF_WORK = "EFUnitOfWork"
REPOSITORY_HELPER = "RepositoryHelper"

SOURCE_SUFFIX = ".cs"


def entity_name(entity: TypeDescriptor) -> str:
    """Name an entity is referred to by in generated code (not escaped)."""
    return render_name(entity)


def repository_name(entity: TypeDescriptor) -> str:
    """Per-entity repository class, e.g. StudentRepository."""
    return f"{entity_name(entity)}Repository"


def repository_interface_name(entity: TypeDescriptor) -> str:
    """Per-entity marker interface, e.g. IStudentRepository."""
    return f"I{repository_name(entity)}"


def generic_of(name: str, argument: str) -> str:
    """Close a generic name over one argument: EFRepository<Student>."""
    return f"{name}<{argument}>"


def source_file(name: str) -> str:
    return f"{name}{SOURCE_SUFFIX}"


def repository_file(entity: TypeDescriptor) -> str:
    """Filename of the per-entity repository."""
    return source_file(repository_name(entity))
