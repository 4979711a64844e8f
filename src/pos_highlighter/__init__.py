"""
pos_highlighter package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .analysis import AnalysisError, analyze_text
from .config import HighlighterConfig, config_from_dict, config_from_yaml, load_config
from .context import ActiveViewHandle, HighlightSession
from .editing_state import EditingState, EditingStateScheduler
from .exclusion_zones import is_excluded_content
from .matching import build_exclusion_set, get_match_ranges, process_category
from .preferences import HighlightPreferences
from .taggers import build_tagger_from_config, create_tagger

__all__ = [
    "ActiveViewHandle",
    "AnalysisError",
    "EditingState",
    "EditingStateScheduler",
    "HighlightPreferences",
    "HighlightSession",
    "HighlighterConfig",
    "analyze_text",
    "build_exclusion_set",
    "build_tagger_from_config",
    "config_from_dict",
    "config_from_yaml",
    "create_tagger",
    "get_match_ranges",
    "is_excluded_content",
    "load_config",
    "process_category",
]

__version__ = "0.1.0"
