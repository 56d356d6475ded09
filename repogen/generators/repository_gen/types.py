"""Dataclasses for repository generation."""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class GenerationOptions:
    """Per-invocation settings for the generate command."""
    output_dir: Path
    context_name: Optional[str] = None
    verbose: bool = False


@dataclass(frozen=True)
class GeneratedFile:
    """Represents a generated file."""
    path: str  # Relative path from output directory
    content: str  # File contents
