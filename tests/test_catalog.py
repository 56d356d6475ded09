"""Unit tests for the type catalog loader."""
import json
from pathlib import Path

import pytest

from repogen.core.errors import CatalogError
from repogen.metadata.catalog import load_catalog, parse_catalog, parse_manifest
from repogen.metadata.discovery import list_context_candidates

TESTS_DIR = Path(__file__).parent
FIXTURES = TESTS_DIR / "fixtures"


class TestLoadCatalog:
    """Loading the ContosoUniversity fixture."""

    def test_loads_resolvable_types_in_manifest_order(self):
        result = load_catalog(FIXTURES / "school_catalog.json")

        assert result.assembly == "ContosoUniversity"
        assert [t.name for t in result.types] == [
            "Student",
            "Course",
            "Enrollment",
            "ISchoolContext",
            "SchoolContext",
            "ReportingContext",
        ]

    def test_broken_entries_do_not_hide_other_types(self):
        result = load_catalog(FIXTURES / "school_catalog.json")

        assert len(result.errors) == 2
        assert result.errors[0].type_name == "<entry 7>"
        assert result.errors[0].reason == "missing type name"
        assert result.errors[1].type_name == "ContosoUniversity.Data.LegacyContext"
        assert "has no type" in result.errors[1].reason

    def test_references_resolve_to_declared_descriptors(self):
        result = load_catalog(FIXTURES / "school_catalog.json")
        by_name = {t.name: t for t in result.types}

        enrollment = by_name["Enrollment"]
        assert enrollment.properties[0].type is by_name["Student"]
        assert enrollment.properties[1].type is by_name["Course"]

        # Student -> Enrollment -> Student cycle is representable
        enrollments = by_name["Student"].properties[2].type
        assert enrollments.is_generic
        assert enrollments.generic_arguments[0] is enrollment

    def test_base_chain_is_transitive(self):
        result = load_catalog(FIXTURES / "school_catalog.json")
        by_name = {t.name: t for t in result.types}

        chain = by_name["ReportingContext"].base_chain
        assert [t.full_name for t in chain] == [
            "ContosoUniversity.Data.SchoolContext",
            "Microsoft.EntityFrameworkCore.DbContext",
        ]

    def test_external_types_are_shared(self):
        result = load_catalog(FIXTURES / "school_catalog.json")
        by_name = {t.name: t for t in result.types}

        student_id = by_name["Student"].properties[0].type
        course_id = by_name["Course"].properties[0].type
        assert student_id.full_name == "System.Int32"
        assert student_id is course_id

    def test_yaml_manifest(self):
        result = load_catalog(FIXTURES / "school_catalog.yaml")

        assert [t.name for t in result.types] == ["Student", "SchoolContext"]
        assert result.errors == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Unable to find type catalog"):
            load_catalog(tmp_path / "missing.json")


class TestParseCatalog:
    """Manifest shapes that are accepted or rejected."""

    def test_invalid_json(self):
        with pytest.raises(CatalogError, match="could not be parsed"):
            parse_manifest("{not json", "json")

    def test_types_list_is_required(self):
        with pytest.raises(CatalogError, match="'types' list"):
            parse_catalog({"assembly": "x"})
        with pytest.raises(CatalogError):
            parse_catalog(["not", "a", "dict"])

    def test_circular_base_types_are_skipped(self):
        result = parse_catalog({
            "types": [
                {"name": "A", "namespace": "N", "baseType": "N.B"},
                {"name": "B", "namespace": "N", "baseType": "N.A"},
                {"name": "Self", "namespace": "N", "baseType": "N.Self"},
                {"name": "Fine", "namespace": "N"},
            ]
        })

        assert [t.name for t in result.types] == ["Fine"]
        assert {e.type_name for e in result.errors} == {"N.A", "N.B", "N.Self"}
        assert all(e.reason == "circular base type" for e in result.errors)

    def test_duplicate_names(self):
        result = parse_catalog({
            "types": [
                {"name": "Student", "namespace": "M"},
                {"name": "Student", "namespace": "M"},
            ]
        })

        assert len(result.types) == 1
        assert result.errors[0].reason == "duplicate type name"

    def test_bad_reference_is_reported(self):
        result = parse_catalog({
            "types": [
                {"name": "Ctx", "properties": [{"name": "Items", "type": 42}]},
                {"name": "Other"},
            ]
        })

        assert [t.name for t in result.types] == ["Other"]
        assert "unsupported type reference" in result.errors[0].reason

    def test_global_namespace(self):
        result = parse_manifest(json.dumps({"types": [{"name": "Thing"}]}))

        thing = result.types[0]
        assert thing.namespace == ""
        assert thing.full_name == "Thing"

    def test_broken_base_type_keeps_subclasses_as_contexts(self):
        result = parse_catalog({
            "types": [
                {
                    "name": "AppContextBase",
                    "namespace": "N",
                    "baseType": "Microsoft.EntityFrameworkCore.DbContext",
                    "properties": [{"name": "Broken"}],
                },
                {"name": "SchoolContext", "namespace": "N", "baseType": "N.AppContextBase"},
            ]
        })

        assert [t.name for t in result.types] == ["SchoolContext"]
        assert result.errors[0].type_name == "N.AppContextBase"
        assert [t.full_name for t in result.types[0].base_chain] == [
            "N.AppContextBase",
            "Microsoft.EntityFrameworkCore.DbContext",
        ]
        assert [c.name for c in list_context_candidates(result.types)] == ["SchoolContext"]
