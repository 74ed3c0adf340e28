"""Configuration loading and adapter factory.

Reads an optional YAML config file, overlays environment variables
(THEMATICMAP__{section}__{key}, double underscore separator, e.g.
THEMATICMAP__THEMATIC_MAP__MINFREQ=3) and wires the configured adapters
into a :class:`ThematicMapService`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Walk up from this file (thematicmap/config.py) to the project root and load .env
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

from thematicmap.domain.errors import InvalidInputError
from thematicmap.ports.community_detection import CommunityDetectionPort
from thematicmap.ports.renderer import RendererPort
from thematicmap.services.similarity import SIMILARITY_KINDS
from thematicmap.services.thematic_map import ThematicMapService

log = logging.getLogger(__name__)

ENV_PREFIX = "THEMATICMAP__"

# ID: keyword plus, DE: author keywords, TI: title terms, AB: abstract terms
FIELDS = ("ID", "DE", "TI", "AB")


@dataclass
class ThematicMapConfig:
    field: str = "ID"
    n: int = 250
    minfreq: int = 5
    stemming: bool = False
    size: float = 0.5
    repel: bool = True
    seed: int = 1234
    similarity: str = "association"
    lowercase: bool = True
    centrality_scale: float = 10.0
    density_scale: float = 100.0
    label_words: int = 3
    top_words: int = 10


@dataclass
class CommunityDetectionConfig:
    adapter: str = "louvain"
    resolution: float = 1.0


@dataclass
class RenderingConfig:
    adapter: str = "plotly"
    width: int = 900
    height: int = 800
    quadrant_titles: bool = True


@dataclass
class Settings:
    thematic_map: ThematicMapConfig = field(default_factory=ThematicMapConfig)
    community_detection: CommunityDetectionConfig = field(
        default_factory=CommunityDetectionConfig
    )
    rendering: RenderingConfig = field(default_factory=RenderingConfig)


def load_config(path: str | None = None) -> dict[str, Any]:
    """Return the raw YAML mapping; no *path* means an empty config."""
    if path is None:
        return {}
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(p) as f:
        return yaml.safe_load(f) or {}


def load_settings(
    path: str | None = None,
    overrides: dict[str, dict[str, Any]] | None = None,
) -> Settings:
    """Load settings from YAML, overlay env vars then *overrides*, and validate.

    *overrides* has the same ``{section: {key: value}}`` shape as the YAML
    file; ``None`` values are skipped so unset CLI options fall through.
    """
    settings = Settings()
    _apply(settings, load_config(path), source="config")
    _apply(settings, _env_overrides(), source="environment", coerce=True)
    if overrides:
        cleaned = {
            section: {k: v for k, v in values.items() if v is not None}
            for section, values in overrides.items()
        }
        _apply(settings, cleaned, source="override")
    validate_settings(settings)
    return settings


def _env_overrides() -> dict[str, dict[str, str]]:
    """Collect THEMATICMAP__SECTION__KEY variables as ``{section: {key: value}}``."""
    cfg: dict[str, dict[str, str]] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        parts = key[len(ENV_PREFIX):].lower().split("__")
        if len(parts) != 2:
            log.warning("Ignoring malformed environment variable %s", key)
            continue
        section, name = parts
        cfg.setdefault(section, {})[name] = value
    return cfg


def _apply(
    settings: Settings,
    cfg: dict[str, Any],
    *,
    source: str,
    coerce: bool = False,
) -> Settings:
    known = {f.name for f in fields(settings)}
    for section, values in cfg.items():
        if section not in known:
            log.warning("Ignoring unknown %s section %s", source, section)
            continue
        section_obj = getattr(settings, section)
        for key, value in (values or {}).items():
            if not hasattr(section_obj, key):
                log.warning("Ignoring unknown %s key %s.%s", source, section, key)
                continue
            if coerce:
                value = _coerce(getattr(section_obj, key), value, f"{section}.{key}")
            setattr(section_obj, key, value)
    return settings


def _coerce(current: Any, raw: str, name: str) -> Any:
    """Convert a string to the type of the field's current value."""
    if isinstance(current, bool):
        return raw.lower() in ("true", "1", "yes")
    try:
        if isinstance(current, int):
            return int(raw)
        if isinstance(current, float):
            return float(raw)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid value {raw!r} for {name}") from exc
    return raw


def validate_settings(settings: Settings) -> None:
    tm = settings.thematic_map
    if tm.field not in FIELDS:
        raise InvalidInputError(f"Unknown field '{tm.field}'; expected one of {', '.join(FIELDS)}")
    if tm.n < 1:
        raise InvalidInputError(f"n must be >= 1, got {tm.n}")
    if tm.minfreq < 0:
        raise InvalidInputError(f"minfreq must be >= 0, got {tm.minfreq}")
    if not 0 < tm.size <= 1:
        raise InvalidInputError(f"size must be in (0, 1], got {tm.size}")
    if tm.similarity not in SIMILARITY_KINDS:
        raise InvalidInputError(f"Unknown similarity '{tm.similarity}'")
    if tm.label_words < 1 or tm.top_words < 1:
        raise InvalidInputError("label_words and top_words must be >= 1")
    if tm.stemming and tm.field in ("ID", "DE"):
        log.warning("stemming only applies to TI/AB terms; ignored for field %s", tm.field)


# ── Adapter factories ──


def build_community_detection(cfg: CommunityDetectionConfig) -> CommunityDetectionPort:
    if cfg.adapter == "louvain":
        from thematicmap.adapters.community.louvain import LouvainCommunityDetection
        return LouvainCommunityDetection(resolution=cfg.resolution)

    elif cfg.adapter == "leiden":
        from thematicmap.adapters.community.leiden import LeidenCommunityDetection
        return LeidenCommunityDetection(resolution=cfg.resolution)

    raise ValueError(f"Unknown community_detection adapter: {cfg.adapter}")


def build_renderer(cfg: RenderingConfig) -> RendererPort:
    if cfg.adapter == "plotly":
        from thematicmap.adapters.rendering.plotly_map import PlotlyQuadrantRenderer
        return PlotlyQuadrantRenderer(
            width=cfg.width,
            height=cfg.height,
            show_quadrant_titles=cfg.quadrant_titles,
        )

    raise ValueError(f"Unknown rendering adapter: {cfg.adapter}")


# ── Top-level builder ──


def build_service(settings: Settings) -> ThematicMapService:
    """Wire the configured detector into the pipeline service."""
    tm = settings.thematic_map

    log.info("  → building community detection (%s) …", settings.community_detection.adapter)
    detector = build_community_detection(settings.community_detection)

    return ThematicMapService(
        detector,
        n=tm.n,
        minfreq=tm.minfreq,
        seed=tm.seed,
        similarity=tm.similarity,
        lowercase=tm.lowercase,
        centrality_scale=tm.centrality_scale,
        density_scale=tm.density_scale,
        label_words=tm.label_words,
        top_words=tm.top_words,
        size=tm.size,
        repel=tm.repel,
    )
