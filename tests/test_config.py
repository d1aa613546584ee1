"""Test configuration loading."""

from artlens.config import ArtLensConfig, _flatten_yaml
from artlens.pipeline.orchestrator import Thresholds


def test_default_config():
    config = ArtLensConfig()
    assert config.port == 8350
    assert config.default_language == "es"
    assert config.qwen_vl_model == "qwen-vl-max-latest"
    assert config.qwen_text_model == "qwen-flash"
    assert config.daily_recognition_limit == 5


def test_threshold_defaults():
    config = ArtLensConfig()
    assert config.high_confidence_threshold == 0.99
    assert config.min_confidence_threshold == 0.6
    assert config.vision_fallback_threshold == 0.98
    assert config.vision_fallback_reinvoke is False
    assert config.artwork_match_min_similarity == 0.90


def test_web_defaults():
    config = ArtLensConfig()
    assert config.max_fetch_urls == 5
    assert config.fetch_timeout_s == 10.0
    assert config.render_timeout_s == 30.0
    assert config.max_content_bytes == 5_000_000
    assert config.min_scraped_text_length == 100
    assert config.blocked_result_hosts == ["collinsdictionary"]


def test_thresholds_from_config():
    config = ArtLensConfig(high_confidence_threshold=0.95, vision_fallback_threshold=0.9)
    thresholds = Thresholds.from_config(config)
    assert thresholds == Thresholds(high_confidence=0.95, base=0.6, vision_fallback=0.9)


def test_flatten_yaml_sections():
    flat = _flatten_yaml({"port": 9000, "qwen": {"api_key": "k", "vl_model": "m"}})
    assert flat == {"port": 9000, "qwen_api_key": "k", "qwen_vl_model": "m"}


def test_from_yaml(tmp_path):
    path = tmp_path / "artlens.yaml"
    path.write_text(
        "artlens:\n"
        "  port: 9001\n"
        "  high_confidence_threshold: 0.97\n"
        "  qwen:\n"
        "    api_key: secret\n",
        encoding="utf-8",
    )
    config = ArtLensConfig.from_yaml(path)
    assert config.port == 9001
    assert config.high_confidence_threshold == 0.97
    assert config.qwen_api_key == "secret"


def test_from_yaml_missing_file(tmp_path):
    config = ArtLensConfig.from_yaml(tmp_path / "nope.yaml")
    assert config.port == 8350
