"""Fact extraction over PHP syntax trees."""

from src.analysis.behavior_extractor import BehaviorExtractor, is_chained_instantiation
from src.analysis.heuristics import is_event_dispatch, is_queue_dispatch
from src.analysis.pipeline import analyze_file, analyze_source
from src.analysis.scope import ScopeContextStack
from src.analysis.structure_extractor import apply_structure, extract_structure
from src.analysis.traversal import FactTraversal, analyze
from src.analysis.type_formatter import format_type

__all__ = [
    "BehaviorExtractor",
    "FactTraversal",
    "ScopeContextStack",
    "analyze",
    "analyze_file",
    "analyze_source",
    "apply_structure",
    "extract_structure",
    "format_type",
    "is_chained_instantiation",
    "is_event_dispatch",
    "is_queue_dispatch",
]
