from .context import NO_INTERNAL_DATA_MARKER, ContextAssembler, citation_marker
from .generate import GroundedGenerator
from .prompts import (
    APOLOGY_MESSAGE,
    DEFAULT_SYSTEM_PROMPT,
    load_system_prompt,
    reset_system_prompt,
    save_system_prompt,
)
from .web import WebSearcher

__all__ = [
    "NO_INTERNAL_DATA_MARKER",
    "ContextAssembler",
    "citation_marker",
    "GroundedGenerator",
    "APOLOGY_MESSAGE",
    "DEFAULT_SYSTEM_PROMPT",
    "load_system_prompt",
    "reset_system_prompt",
    "save_system_prompt",
    "WebSearcher",
]
