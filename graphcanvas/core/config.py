"""
Central configuration management for GraphCanvas.

Loads settings from environment variables and provides typed access.
Column-role term lists are plain data so new header synonyms can be added
through the environment (JSON lists) without touching the inference code.
"""
from pathlib import Path
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class ImportSettings(BaseSettings):
    """Header heuristics and scatter boxes for CSV import.

    Each term list is scanned against the headers of an imported file; the
    first header (in file order) containing any term wins the role.
    """
    node_id_terms: list[str] = Field(
        default=["id", "编号", "key", "code", "部门"],
        alias="NODE_ID_TERMS",
        description="Header terms identifying the node id column",
    )
    node_label_terms: list[str] = Field(
        default=["label", "name", "title", "名称", "姓名", "单位", "人员"],
        alias="NODE_LABEL_TERMS",
        description="Header terms identifying the node label column",
    )
    edge_source_terms: list[str] = Field(
        default=["source", "from", "src", "start", "编号1", "项目", "上级", "部门"],
        alias="EDGE_SOURCE_TERMS",
    )
    edge_target_terms: list[str] = Field(
        default=["target", "to", "tgt", "end", "编号2", "单位", "人员", "负责人"],
        alias="EDGE_TARGET_TERMS",
    )
    edge_label_terms: list[str] = Field(
        default=["label", "rel", "type", "relation", "关系", "类型", "职务"],
        alias="EDGE_LABEL_TERMS",
    )

    # Imported nodes are scattered around the origin inside these boxes
    node_scatter_width: float = Field(default=800.0, alias="NODE_SCATTER_WIDTH")
    node_scatter_height: float = Field(default=600.0, alias="NODE_SCATTER_HEIGHT")
    placeholder_scatter_width: float = Field(default=1000.0, alias="PLACEHOLDER_SCATTER_WIDTH")
    placeholder_scatter_height: float = Field(default=800.0, alias="PLACEHOLDER_SCATTER_HEIGHT")


class LayoutSettings(BaseSettings):
    """ForceAtlas2 auto-layout configuration."""
    iterations: int = Field(default=150, alias="LAYOUT_ITERATIONS")
    gravity: float = Field(default=0.001, alias="LAYOUT_GRAVITY")
    scaling_ratio: float = Field(default=2000.0, alias="LAYOUT_SCALING_RATIO")
    node_size: float = Field(
        default=50.0,
        alias="LAYOUT_NODE_SIZE",
        description="Uniform size used for overlap prevention",
    )
    seed: int | None = Field(default=None, alias="LAYOUT_SEED")


class AnalyticsSettings(BaseSettings):
    """Centrality and community detection parameters."""
    bridge_threshold: float = Field(
        default=0.5,
        alias="BRIDGE_THRESHOLD",
        description="Fraction of the max betweenness above which a node is a bridge",
    )
    pagerank_alpha: float = Field(default=0.85, alias="PAGERANK_ALPHA")
    louvain_seed: int | None = Field(default=None, alias="LOUVAIN_SEED")


class Settings(BaseSettings):
    """Main settings aggregator."""
    importing: ImportSettings = Field(default_factory=ImportSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)

    # Project root
    project_root: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience function
def load_dotenv_if_exists():
    """Load .env file from the project root if it exists."""
    from dotenv import load_dotenv
    env_path = Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    # Settings are cached; drop the cache so new variables are picked up
    get_settings.cache_clear()
