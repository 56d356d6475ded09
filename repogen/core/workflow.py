from enum import Enum

class GenerationStage(str, Enum):
    RESOLVE_CONTEXT = "RESOLVE_CONTEXT"
    EXTRACT_GRAPH = "EXTRACT_GRAPH"
    RENDER_CONTEXT_FILES = "RENDER_CONTEXT_FILES"
    RENDER_ENTITY_FILES = "RENDER_ENTITY_FILES"
    DONE = "DONE"
    FAILED = "FAILED"
