# ============================================================================
# src/contract_extraction/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .pipeline_config import PipelineSettings, pipeline_settings
from .logging_config import LoggingSettings, logging_settings
