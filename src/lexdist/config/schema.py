"""Pydantic v2 configuration models for lexdist."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class AlgorithmType(str, Enum):
    LEVENSHTEIN = "levenshtein"
    DAMERAU_LEVENSHTEIN = "damerau_levenshtein"
    JARO_WINKLER = "jaro_winkler"
    LCS = "lcs"


class BuildSettings(BaseModel):
    """Sampling parameters and optimisation toggles for a matrix build."""

    model_config = ConfigDict(extra="forbid")

    num_samples: int = Field(default=3, ge=1)
    max_sample_size: int = Field(default=200, ge=1)
    use_parallelization: bool = True
    use_sampling: bool = True
    use_normalized_form_matching: bool = True
    use_semantic_bonus: bool = True
    normalized: bool = True
    max_workers: int | None = Field(default=None, ge=1)


class SourceDef(BaseModel):
    """A single dictionary file.

    ``code`` and ``name`` are detected from the filename when omitted.
    """

    path: Path
    code: str | None = None
    name: str | None = None


class GraphConfig(BaseModel):
    threshold: float = Field(default=0.5, ge=0.0, le=1.0)


class PipelineConfig(BaseModel):
    """Top-level configuration."""

    sources: list[SourceDef] = Field(default_factory=list)
    algorithm: AlgorithmType = AlgorithmType.LEVENSHTEIN
    build: BuildSettings = Field(default_factory=BuildSettings)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    output_dir: Path = Path("output")
    log_level: str = "INFO"
