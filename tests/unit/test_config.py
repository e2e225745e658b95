"""
Unit tests for settings loading.
"""
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from graphcanvas.core.config import ImportSettings, LayoutSettings, Settings, get_settings


class TestSettings:

    def test_defaults(self):
        s = Settings()
        assert s.layout.iterations == 150
        assert s.layout.gravity == 0.001
        assert s.layout.scaling_ratio == 2000
        assert s.analytics.bridge_threshold == 0.5
        assert s.analytics.pagerank_alpha == 0.85
        assert "id" in s.importing.node_id_terms
        assert "编号" in s.importing.node_id_terms

    def test_env_overrides_term_list(self, monkeypatch):
        monkeypatch.setenv("NODE_ID_TERMS", '["ident", "key"]')
        assert ImportSettings().node_id_terms == ["ident", "key"]

    def test_env_overrides_layout(self, monkeypatch):
        monkeypatch.setenv("LAYOUT_ITERATIONS", "25")
        monkeypatch.setenv("LAYOUT_SEED", "3")
        layout = LayoutSettings()
        assert layout.iterations == 25
        assert layout.seed == 3

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()
