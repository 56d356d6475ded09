"""
Project resolution, build and metadata export.

Resolves exactly one MSBuild project file, builds it with the configured
build command, locates the compiled assembly and runs the metadata
exporter over it to obtain a type catalog.
"""
import logging
import re
import shlex
import subprocess
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from repogen.core.config import settings
from repogen.core.errors import (
    ArtifactNotFoundError,
    BuildError,
    ProjectResolutionError,
)
from repogen.core.reporting import Reporter
from repogen.metadata.catalog import parse_manifest
from repogen.metadata.types import CatalogLoadResult

log = logging.getLogger(__name__)

# Project-system files from the DNX era, never buildable
IGNORED_PROJECT_SUFFIXES = {".xproj"}


@dataclass(frozen=True)
class ProjectInfo:
    """Build properties read from a project file."""
    path: Path
    assembly_name: str
    target_framework: str
    output_path: str

    @property
    def project_dir(self) -> Path:
        return self.path.parent

    @property
    def target_file_name(self) -> str:
        return f"{self.assembly_name}.dll"


def find_project_files(path: Optional[str] = None) -> List[Path]:
    """List candidate project files for a path.

    ``None`` means the current directory and relative paths are taken from
    it. A path that is not a directory is assumed to be the project file
    itself. At most two files are returned, which is enough to tell
    "one" from "many".
    """
    cwd = Path.cwd()
    target = cwd if path is None else cwd / path

    if not target.is_dir():
        return [target]

    projects = sorted(
        p for p in target.glob("*.*proj")
        if p.is_file() and p.suffix.lower() not in IGNORED_PROJECT_SUFFIXES
    )
    return projects[:2]


def resolve_project(path: Optional[str] = None) -> Path:
    """Return the single project file for a path, or raise ProjectResolutionError."""
    projects = find_project_files(path)

    if not projects:
        if path is not None:
            raise ProjectResolutionError(f"No project was found in '{path}'. Change the current working directory or use the --project option.")
        raise ProjectResolutionError("No project was found. Change the current working directory or use the --project option.")
    if len(projects) > 1:
        if path is not None:
            raise ProjectResolutionError(f"More than one project was found in '{path}'. Specify which one to use with the --project option.")
        raise ProjectResolutionError("More than one project was found in the current working directory. Use the --project option.")
    return projects[0]


_CONDITION = re.compile(r"'([^']*)'\s*==\s*'([^']*)'")


def _local_name(element: ET.Element) -> str:
    return element.tag.rsplit("}", 1)[-1]


def _applies_to(element: ET.Element, configuration: str) -> bool:
    """False when the element's Condition selects a different $(Configuration)."""
    condition = element.get("Condition")
    if not condition:
        return True
    match = _CONDITION.search(condition)
    if not match:
        return True
    left = [part.strip() for part in match.group(1).split("|")]
    right = [part.strip() for part in match.group(2).split("|")]
    if "$(Configuration)" not in left:
        return True
    index = left.index("$(Configuration)")
    return index < len(right) and right[index].lower() == configuration.lower()


def _read_properties(root: ET.Element, configuration: str) -> Dict[str, str]:
    """First value of every property that applies to a configuration, ignoring XML namespaces."""
    properties: Dict[str, str] = {}
    for group in root.iter():
        if _local_name(group) != "PropertyGroup" or not _applies_to(group, configuration):
            continue
        for prop in group:
            name = _local_name(prop)
            if not _applies_to(prop, configuration):
                continue
            if prop.text and prop.text.strip() and name not in properties:
                properties[name] = prop.text.strip()
    return properties


def read_project(project_file: Path, configuration: Optional[str] = None) -> ProjectInfo:
    """Read the build properties needed to find the compiled assembly."""
    configuration = configuration or settings.build_configuration
    try:
        root = ET.parse(project_file).getroot()
    except (ET.ParseError, OSError) as e:
        raise ProjectResolutionError(f"Unable to read project '{project_file}': {e}") from e

    properties = _read_properties(root, configuration)
    assembly_name = properties.get("AssemblyName", project_file.stem)
    target_framework = properties.get("TargetFramework") or properties.get("TargetFrameworks", "").split(";")[0]

    output_path = properties.get("OutputPath")
    if not output_path:
        output_path = f"bin/{configuration}/{target_framework}"

    return ProjectInfo(
        path=project_file,
        assembly_name=assembly_name,
        target_framework=target_framework,
        output_path=output_path.replace("\\", "/"),
    )


def _run(command: List[str], cwd: Path) -> subprocess.CompletedProcess:
    log.debug("Executing: %s (cwd=%s)", " ".join(command), cwd)
    try:
        return subprocess.run(command, cwd=cwd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise BuildError(f"Unable to run '{command[0]}': {e}") from e


def build_project(project: ProjectInfo, reporter: Reporter, configuration: Optional[str] = None) -> None:
    """Build the project with the configured build command."""
    configuration = configuration or settings.build_configuration
    command = shlex.split(settings.build_command) + [str(project.path), "--configuration", configuration]

    reporter.write_information("Build started...")
    result = _run(command, project.project_dir)
    if result.returncode != 0:
        log.error("Build output:\n%s%s", result.stdout, result.stderr)
        raise BuildError("Build failed. Use dotnet build to see the errors.")
    reporter.write_information("Build succeeded.")


def locate_artifact(project: ProjectInfo) -> Path:
    """Path of the compiled assembly; it must exist."""
    target_dir = (project.project_dir / project.output_path).resolve()
    artifact = target_dir / project.target_file_name
    if not artifact.is_file():
        raise ArtifactNotFoundError(f"Unable to find assembly '{artifact}'.")
    return artifact


def export_catalog(artifact: Path) -> CatalogLoadResult:
    """Run the metadata exporter over an assembly and parse its JSON output."""
    command = shlex.split(settings.metadata_exporter) + [str(artifact)]
    result = _run(command, artifact.parent)
    if result.returncode != 0:
        log.error("Metadata exporter output:\n%s", result.stderr)
        raise BuildError(f"Unable to read type metadata from '{artifact}'.")
    return parse_manifest(result.stdout, "json")


def build_and_load(project_path: Optional[str], reporter: Reporter) -> CatalogLoadResult:
    """Resolve, build and load the type catalog of one project."""
    project = read_project(resolve_project(project_path))
    build_project(project, reporter)
    return export_catalog(locate_artifact(project))
