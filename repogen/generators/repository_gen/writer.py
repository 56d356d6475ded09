"""File writer for repository generation."""
from pathlib import Path
from typing import List, Optional

from repogen.core.reporting import Reporter
from repogen.generators.repository_gen.types import GeneratedFile


def write_file(file: GeneratedFile, out_dir: Path, reporter: Optional[Reporter] = None) -> Path:
    """
    Write one generated file, creating the output directory if needed.

    Args:
        file: GeneratedFile to write
        out_dir: Base output directory path
        reporter: Receives a verbose "Creating <path>" line after the write

    Returns:
        Path of the written file
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    file_path = out_dir / file.path
    file_path.write_text(file.content, encoding="utf-8", newline="\n")
    if reporter is not None:
        reporter.write_verbose(f"Creating {file_path}")
    return file_path


def write_files(files: List[GeneratedFile], out_dir: Path, reporter: Optional[Reporter] = None) -> List[Path]:
    """
    Write generated files in order. A failed write stops the run; files
    written before it are left in place.
    """
    return [write_file(file, out_dir, reporter) for file in files]
