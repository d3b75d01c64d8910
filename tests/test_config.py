import pytest

from prbench.config import (
    COUNTER_INTRO,
    REPORT_PREAMBLE,
    STATISTICAL_INTRO,
    TRUNCATION_NOTICE,
    PipelineConfig,
    get_log_level,
)


class TestPipelineConfigFromEnv:
    """Test PipelineConfig.from_env() behavior."""

    def test_defaults(self, clean_env: None) -> None:
        config = PipelineConfig.from_env()
        assert config == PipelineConfig()
        assert config.github_token is None
        assert config.marker_label == "benchmark"
        assert config.target_package == "kimchi"
        assert config.api_url == "https://api.github.com"
        assert config.max_output_chars is None
        assert config.skip_provision is False

    def test_loads_token(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "ghp-secret")
        assert PipelineConfig.from_env().github_token == "ghp-secret"

    def test_gh_token_fallback_is_deprecated(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GH_TOKEN", "ghp-old")
        with pytest.warns(DeprecationWarning, match="GH_TOKEN"):
            config = PipelineConfig.from_env()
        assert config.github_token == "ghp-old"

    def test_blank_token_falls_back(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "  ")
        monkeypatch.setenv("GH_TOKEN", "ghp-old")
        with pytest.warns(DeprecationWarning):
            config = PipelineConfig.from_env()
        assert config.github_token == "ghp-old"

    def test_overrides(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRBENCH_MARKER_LABEL", "perf")
        monkeypatch.setenv("PRBENCH_TARGET_PACKAGE", "poly-commitment")
        monkeypatch.setenv("PRBENCH_IAI_BENCH", "ipa_iai")
        monkeypatch.setenv("PRBENCH_CRITERION_BENCH", "ipa_criterion")
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")
        monkeypatch.setenv("PRBENCH_PUBLISH_TIMEOUT", "5")
        monkeypatch.setenv("PRBENCH_MAX_OUTPUT_CHARS", "30000")
        monkeypatch.setenv("PRBENCH_SKIP_PROVISION", "true")

        config = PipelineConfig.from_env()

        assert config.marker_label == "perf"
        assert config.target_package == "poly-commitment"
        assert config.iai_bench == "ipa_iai"
        assert config.criterion_bench == "ipa_criterion"
        assert config.api_url == "https://ghe.example.com/api/v3"
        assert config.publish_timeout == 5.0
        assert config.max_output_chars == 30000
        assert config.skip_provision is True

    @pytest.mark.parametrize("value", ["0", "-3", "abc"])
    def test_invalid_timeout(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("PRBENCH_PUBLISH_TIMEOUT", value)
        with pytest.raises(RuntimeError, match="PRBENCH_PUBLISH_TIMEOUT"):
            PipelineConfig.from_env()

    @pytest.mark.parametrize("value", ["0", "lots"])
    def test_invalid_max_chars(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("PRBENCH_MAX_OUTPUT_CHARS", value)
        with pytest.raises(RuntimeError, match="PRBENCH_MAX_OUTPUT_CHARS"):
            PipelineConfig.from_env()

    def test_config_is_frozen(self, mock_config: PipelineConfig) -> None:
        with pytest.raises(AttributeError):
            mock_config.github_token = "new"  # type: ignore[misc]


class TestLogLevel:
    def test_default(self, clean_env: None) -> None:
        assert get_log_level() == "INFO"

    def test_env(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRBENCH_LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"


class TestReportTemplate:
    def test_loaded_from_yaml(self) -> None:
        assert REPORT_PREAMBLE.startswith("Hello there")
        assert "criterion" in STATISTICAL_INTRO
        assert "iai" in COUNTER_INTRO
        assert "{max_chars}" in TRUNCATION_NOTICE
