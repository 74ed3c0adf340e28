"""Tests for config loading, env overlay and adapter factories."""

import logging

import pytest

from thematicmap.config import (
    CommunityDetectionConfig,
    RenderingConfig,
    build_community_detection,
    build_renderer,
    load_config,
    load_settings,
)
from thematicmap.domain.errors import InvalidInputError


class TestLoadSettings:
    def test_defaults_without_file(self):
        settings = load_settings(None)

        tm = settings.thematic_map
        assert (tm.field, tm.n, tm.minfreq, tm.size, tm.repel) == ("ID", 250, 5, 0.5, True)
        assert tm.stemming is False
        assert settings.community_detection.adapter == "louvain"

    def test_yaml_values(self, tmp_path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text(
            "thematic_map:\n"
            "  field: DE\n"
            "  minfreq: 2\n"
            "community_detection:\n"
            "  adapter: leiden\n"
            "  resolution: 0.8\n"
        )

        settings = load_settings(str(cfg))

        assert settings.thematic_map.field == "DE"
        assert settings.thematic_map.minfreq == 2
        assert settings.thematic_map.n == 250
        assert settings.community_detection.adapter == "leiden"
        assert settings.community_detection.resolution == 0.8

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("thematic_map:\n  minfreq: 2\n")
        monkeypatch.setenv("THEMATICMAP__THEMATIC_MAP__MINFREQ", "7")
        monkeypatch.setenv("THEMATICMAP__THEMATIC_MAP__REPEL", "false")
        monkeypatch.setenv("THEMATICMAP__THEMATIC_MAP__SIZE", "0.25")

        tm = load_settings(str(cfg)).thematic_map

        assert tm.minfreq == 7
        assert tm.repel is False
        assert tm.size == 0.25

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    @pytest.mark.parametrize(
        "body",
        [
            "thematic_map:\n  field: XX\n",
            "thematic_map:\n  n: 0\n",
            "thematic_map:\n  minfreq: -1\n",
            "thematic_map:\n  size: 2.0\n",
            "thematic_map:\n  similarity: cosine\n",
        ],
    )
    def test_invalid_values(self, tmp_path, body):
        cfg = tmp_path / "config.yaml"
        cfg.write_text(body)
        with pytest.raises(InvalidInputError):
            load_settings(str(cfg))

    def test_stemming_on_keywords_warns(self, tmp_path, caplog):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("thematic_map:\n  field: ID\n  stemming: true\n")

        with caplog.at_level(logging.WARNING, logger="thematicmap.config"):
            load_settings(str(cfg))

        assert "stemming" in caplog.text

    def test_unknown_env_key_warns(self, monkeypatch, caplog):
        monkeypatch.setenv("THEMATICMAP__THEMATIC_MAP__MINFRQ", "3")
        monkeypatch.setenv("THEMATICMAP__PLOTTING__WIDTH", "10")

        with caplog.at_level(logging.WARNING, logger="thematicmap.config"):
            tm = load_settings(None).thematic_map

        assert tm.minfreq == 5
        assert "thematic_map.minfrq" in caplog.text
        assert "plotting" in caplog.text

    def test_unknown_yaml_key_warns(self, tmp_path, caplog):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("thematic_map:\n  minfreqs: 3\n")

        with caplog.at_level(logging.WARNING, logger="thematicmap.config"):
            load_settings(str(cfg))

        assert "thematic_map.minfreqs" in caplog.text

    def test_env_value_of_wrong_type(self, monkeypatch):
        monkeypatch.setenv("THEMATICMAP__THEMATIC_MAP__N", "many")
        with pytest.raises(InvalidInputError):
            load_settings(None)

    def test_overrides_win_over_env_and_yaml(self, tmp_path, monkeypatch):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("thematic_map:\n  minfreq: 2\n  n: 50\n")
        monkeypatch.setenv("THEMATICMAP__THEMATIC_MAP__MINFREQ", "7")

        settings = load_settings(
            str(cfg),
            overrides={
                "thematic_map": {"minfreq": 3, "n": None},
                "community_detection": {"adapter": "leiden"},
            },
        )

        assert settings.thematic_map.minfreq == 3
        assert settings.thematic_map.n == 50
        assert settings.community_detection.adapter == "leiden"

    def test_overrides_are_validated(self):
        with pytest.raises(InvalidInputError):
            load_settings(None, overrides={"thematic_map": {"minfreq": -1}})

    def test_stemming_warning_logged_once(self, tmp_path, caplog):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("thematic_map:\n  field: DE\n  stemming: true\n")

        with caplog.at_level(logging.WARNING, logger="thematicmap.config"):
            load_settings(str(cfg), overrides={"thematic_map": {"minfreq": 1}})

        stemming = [r for r in caplog.records if "stemming" in r.getMessage()]
        assert len(stemming) == 1


class TestFactories:
    def test_unknown_detector(self):
        with pytest.raises(ValueError):
            build_community_detection(CommunityDetectionConfig(adapter="spectral"))

    def test_unknown_renderer(self):
        with pytest.raises(ValueError):
            build_renderer(RenderingConfig(adapter="ggplot"))

    def test_louvain_detector(self):
        pytest.importorskip("igraph")
        from thematicmap.adapters.community.louvain import LouvainCommunityDetection

        det = build_community_detection(CommunityDetectionConfig())
        assert isinstance(det, LouvainCommunityDetection)
