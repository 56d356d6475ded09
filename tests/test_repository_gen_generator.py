"""Tests for the repository generation orchestrator."""
import io
import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from repogen.core.errors import ContextNotFoundError
from repogen.core.reporting import Reporter
from repogen.generators.repository_gen import writer
from repogen.generators.repository_gen.generator import generate_repositories, render_repository_files
from repogen.generators.repository_gen.types import GenerationOptions
from repogen.generators.repository_gen.writer import write_file
from tests.helpers import context, entity

CONTEXT_FILES = [
    "EFRepository.cs",
    "EFUnitOfWork.cs",
    "IRepository.cs",
    "IUnitOfWork.cs",
    "RepositoryHelper.cs",
]


def test_school_context_end_to_end():
    """A context with one Students set produces exactly six files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir) / "Models"
        school = context("SchoolContext", [entity("Student")])

        files = generate_repositories([school], GenerationOptions(output_dir=out_dir))

        assert [f.path for f in files] == CONTEXT_FILES + ["StudentRepository.cs"]
        assert sorted(p.name for p in out_dir.iterdir()) == [
            "EFRepository.cs",
            "EFUnitOfWork.cs",
            "IRepository.cs",
            "IUnitOfWork.cs",
            "RepositoryHelper.cs",
            "StudentRepository.cs",
        ]

        student_repository = (out_dir / "StudentRepository.cs").read_text(encoding="utf-8")
        assert "StudentRepository : EFRepository<Student>, IStudentRepository" in student_repository
        assert "IStudentRepository : IRepository<Student>" in student_repository

        for file in files:
            assert (out_dir / file.path).read_text(encoding="utf-8") == file.content


def test_files_are_written_in_graph_order():
    out = io.StringIO()
    reporter = Reporter(verbose=True, out=out)
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir)
        school = context("SchoolContext", [entity("Student"), entity("Course")])

        generate_repositories([school], GenerationOptions(output_dir=out_dir, verbose=True), reporter)

        lines = out.getvalue().splitlines()
        expected = CONTEXT_FILES + ["StudentRepository.cs", "CourseRepository.cs"]
        assert lines == [f"Creating {out_dir / name}" for name in expected]


def test_quiet_reporter_prints_nothing():
    out = io.StringIO()
    with tempfile.TemporaryDirectory() as temp_dir:
        generate_repositories(
            [context("SchoolContext", [entity("Student")])],
            GenerationOptions(output_dir=Path(temp_dir)),
            Reporter(verbose=False, out=out),
        )

    assert out.getvalue() == ""


def test_empty_entity_graph_still_writes_context_files():
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir)

        files = generate_repositories([context("EmptyContext")], GenerationOptions(output_dir=out_dir))

        assert [f.path for f in files] == CONTEXT_FILES
        helper = (out_dir / "RepositoryHelper.cs").read_text(encoding="utf-8")
        assert "GetUnitOfWork()" in helper
        assert "Repository Get" not in helper


def test_context_filter_selects_by_name():
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir)
        school = context("SchoolContext", [entity("Student")])
        reporting = context("ReportingContext", [entity("Enrollment")])

        files = generate_repositories(
            [school, reporting],
            GenerationOptions(output_dir=out_dir, context_name="ReportingContext"),
        )

        assert files[-1].path == "EnrollmentRepository.cs"
        assert "new ReportingContext()" in (out_dir / "EFUnitOfWork.cs").read_text(encoding="utf-8")


def test_unmatched_context_writes_nothing():
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir) / "out"

        with pytest.raises(ContextNotFoundError):
            generate_repositories(
                [context("SchoolContext")],
                GenerationOptions(output_dir=out_dir, context_name="Missing"),
            )
        with pytest.raises(ContextNotFoundError):
            generate_repositories([], GenerationOptions(output_dir=out_dir))

        assert not out_dir.exists()


def test_generation_is_idempotent():
    school = context("SchoolContext", [entity("Student"), entity("Course")])
    with tempfile.TemporaryDirectory() as first, tempfile.TemporaryDirectory() as second:
        generate_repositories([school], GenerationOptions(output_dir=Path(first)))
        generate_repositories([school], GenerationOptions(output_dir=Path(second)))

        for name in CONTEXT_FILES + ["StudentRepository.cs", "CourseRepository.cs"]:
            assert (Path(first) / name).read_bytes() == (Path(second) / name).read_bytes()


def test_render_repository_files_is_pure():
    school = context("SchoolContext", [entity("Student")])

    assert render_repository_files(school, [entity("Student")])[-1].path == "StudentRepository.cs"
    assert render_repository_files(school, []) == render_repository_files(school, [])


def test_failed_write_keeps_earlier_files():
    calls = []

    def flaky_write(file, out_dir, reporter=None):
        calls.append(file.path)
        if len(calls) == 3:
            raise OSError("disk full")
        return write_file(file, out_dir, reporter)

    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir)
        with patch.object(writer, "write_file", side_effect=flaky_write):
            with pytest.raises(OSError, match="disk full"):
                generate_repositories(
                    [context("SchoolContext", [entity("Student")])],
                    GenerationOptions(output_dir=out_dir),
                )

        assert sorted(p.name for p in out_dir.iterdir()) == ["EFRepository.cs", "EFUnitOfWork.cs"]
        assert calls == CONTEXT_FILES[:3]


def test_missing_context_is_not_logged_as_error(caplog):
    with tempfile.TemporaryDirectory() as temp_dir:
        with caplog.at_level(logging.DEBUG, logger="repogen"):
            with pytest.raises(ContextNotFoundError):
                generate_repositories([], GenerationOptions(output_dir=Path(temp_dir)))

    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert any(r.getMessage().startswith("Generation stopped") for r in caplog.records)


def test_write_files_returns_paths_in_order():
    files = render_repository_files(context("SchoolContext", [entity("Student")]), [entity("Student")])
    with tempfile.TemporaryDirectory() as temp_dir:
        paths = writer.write_files(files, Path(temp_dir))

        assert [p.name for p in paths] == CONTEXT_FILES + ["StudentRepository.cs"]
