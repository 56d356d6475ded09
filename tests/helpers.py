"""Descriptor builders shared by the tests."""
from repogen.metadata.types import PropertyDescriptor, TypeDescriptor

EF_NAMESPACE = "Microsoft.EntityFrameworkCore"
DB_CONTEXT = TypeDescriptor(name="DbContext", namespace=EF_NAMESPACE)


def entity(name, namespace="ContosoUniversity.Models"):
    return TypeDescriptor(name=name, namespace=namespace)


def db_set(entity_type):
    return TypeDescriptor(name="DbSet`1", namespace=EF_NAMESPACE, generic_arguments=(entity_type,))


def context(name, entities=(), namespace="ContosoUniversity.Data", base_type=DB_CONTEXT):
    properties = tuple(
        PropertyDescriptor(name=f"{e.name}s", type=db_set(e)) for e in entities
    )
    return TypeDescriptor(name=name, namespace=namespace, base_type=base_type, properties=properties)
