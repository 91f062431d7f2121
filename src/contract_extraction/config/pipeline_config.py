# ============================================================================
# src/contract_extraction/config/pipeline_config.py
# ============================================================================
"""
Pipeline Settings
- Project root
- Feature flag for the classification/hinting pipeline
- Registry location
- Pattern execution budget
"""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Root project directory
    PROJECT_ROOT: Path = Field(
        default_factory=lambda: Path(__file__).parent.parent.parent.parent,
        description="Root directory of the project; relative paths resolve against it"
    )

    CONTRACT_HINTS_ENABLED: bool = Field(
        default=True,
        description="Process-wide switch. When off, callers send the base prompt straight to the LLM."
    )
    REGISTRY_PATH: Path = Field(
        default=Path("data/registry/contract_types.yaml"),
        description="Declarative document type / field registry, loaded once at startup"
    )
    PATTERN_TIMEOUT_SECONDS: float = Field(
        default=1.0,
        gt=0.0, le=30.0,
        description="Time budget for running all regex patterns of a single field"
    )

    @property
    def registry_file(self) -> Path:
        """REGISTRY_PATH, anchored at PROJECT_ROOT when relative."""
        if self.REGISTRY_PATH.is_absolute():
            return self.REGISTRY_PATH
        return self.PROJECT_ROOT / self.REGISTRY_PATH


pipeline_settings = PipelineSettings()
