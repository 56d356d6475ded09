"""Orchestrator for repository code generation."""
import logging
import uuid
from pathlib import Path
from typing import List, Optional, Sequence

from repogen.core.config import settings
from repogen.core.errors import CommandError
from repogen.core.reporting import Reporter
from repogen.core.workflow import GenerationStage
from repogen.metadata.discovery import extract_entities, select_context
from repogen.metadata.types import TypeDescriptor
from repogen.generators.repository_gen.types import GeneratedFile, GenerationOptions
from repogen.generators.repository_gen.render import (
    render_ef_repository,
    render_ef_unit_of_work,
    render_irepository,
    render_iunit_of_work,
    render_repository_helper,
)
from repogen.generators.repository_gen.render_entity import render_entity_repository
from repogen.generators.repository_gen.utils import (
    BASE_REPOSITORY,
    BASE_REPOSITORY_INTERFACE,
    REPOSITORY_HELPER,
    UNIT_OF_WORK,
    UNIT_OF_WORK_INTERFACE,
    repository_file,
    source_file,
)
from repogen.generators.repository_gen.writer import write_files

log = logging.getLogger(__name__)


def render_context_files(context: TypeDescriptor, entities: Sequence[TypeDescriptor]) -> List[GeneratedFile]:
    """Render the five context-level files, in their fixed order."""
    return [
        GeneratedFile(path=source_file(BASE_REPOSITORY), content=render_ef_repository(context)),
        GeneratedFile(path=source_file(UNIT_OF_WORK), content=render_ef_unit_of_work(context)),
        GeneratedFile(path=source_file(BASE_REPOSITORY_INTERFACE), content=render_irepository(context)),
        GeneratedFile(path=source_file(UNIT_OF_WORK_INTERFACE), content=render_iunit_of_work(context)),
        GeneratedFile(path=source_file(REPOSITORY_HELPER), content=render_repository_helper(context, entities)),
    ]


def render_entity_files(entities: Sequence[TypeDescriptor]) -> List[GeneratedFile]:
    """Render one repository file per entity, in graph order."""
    return [
        GeneratedFile(path=repository_file(entity), content=render_entity_repository(entity))
        for entity in entities
    ]


def render_repository_files(context: TypeDescriptor, entities: Sequence[TypeDescriptor]) -> List[GeneratedFile]:
    """Render every file for a context without touching the filesystem."""
    return render_context_files(context, entities) + render_entity_files(entities)


def generate_repositories(
    candidates: Sequence[TypeDescriptor],
    options: GenerationOptions,
    reporter: Optional[Reporter] = None,
) -> List[GeneratedFile]:
    """
    Generate repository-pattern sources for one data context.

    Args:
        candidates: Data-context types in enumeration order
        options: Output directory, context name filter and verbosity
        reporter: Receives one verbose line per written file

    Returns:
        List of GeneratedFile objects, in the order they were written

    Raises:
        ContextNotFoundError: when no candidate matches; nothing is written
    """
    if reporter is None:
        reporter = Reporter(verbose=options.verbose)
    run_id = uuid.uuid4().hex[:8]
    out_dir = Path(options.output_dir)

    def enter(stage: GenerationStage) -> None:
        log.info("Entering stage", extra={"run_id": run_id, "stage": stage.value})

    try:
        enter(GenerationStage.RESOLVE_CONTEXT)
        context = select_context(candidates, options.context_name)

        enter(GenerationStage.EXTRACT_GRAPH)
        entities = extract_entities(context, settings.collection_marker)
        log.info("Found %d entity sets on %s", len(entities), context.full_name,
                 extra={"run_id": run_id, "stage": GenerationStage.EXTRACT_GRAPH.value})

        enter(GenerationStage.RENDER_CONTEXT_FILES)
        context_files = render_context_files(context, entities)
        write_files(context_files, out_dir, reporter)

        enter(GenerationStage.RENDER_ENTITY_FILES)
        entity_files = render_entity_files(entities)
        write_files(entity_files, out_dir, reporter)
    except CommandError as e:
        log.debug("Generation stopped: %s", e, extra={"run_id": run_id, "stage": GenerationStage.FAILED.value})
        raise
    except Exception:
        log.error("Generation failed", extra={"run_id": run_id, "stage": GenerationStage.FAILED.value})
        raise

    enter(GenerationStage.DONE)
    return context_files + entity_files
