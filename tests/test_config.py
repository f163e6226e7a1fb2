"""Tests for configuration loading."""

import pytest

from s3etag.config import MAX_WORKERS, load_config
from s3etag.plan import InvalidConfiguration

MB = 1024 * 1024


class TestDefaults:
    """Test default values."""

    def test_default_policy_is_8mb(self):
        """Threshold and chunk size default to 8MB."""
        config = load_config()
        assert config.threshold == 8 * MB
        assert config.chunksize == 8 * MB

    def test_default_workers(self):
        assert load_config().workers == 1


class TestEnvironmentVariables:
    """Test loading config from environment variables."""

    def test_threshold_from_env(self, monkeypatch):
        monkeypatch.setenv("S3ETAG_THRESHOLD", "16MB")
        assert load_config().threshold == 16 * MB

    def test_chunksize_from_env(self, monkeypatch):
        monkeypatch.setenv("S3ETAG_CHUNKSIZE", "5MB")
        assert load_config().chunksize == 5 * MB

    def test_cli_args_override_env(self, monkeypatch):
        """CLI arguments should take precedence over env vars."""
        monkeypatch.setenv("S3ETAG_CHUNKSIZE", "5MB")
        config = load_config(cli_chunksize="64MB")
        assert config.chunksize == 64 * MB

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("S3ETAG_THRESHOLD", "lots")
        with pytest.raises(InvalidConfiguration) as exc_info:
            load_config()
        assert exc_info.value.parameter == "threshold"


class TestConfigFile:
    """Test loading config from TOML file."""

    def test_sizes_from_config_file(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text(
            'multipart_threshold = "64MB"\nmultipart_chunksize = 16777216\n'
        )

        config = load_config(config_file=str(config_file))
        assert config.threshold == 64 * MB
        assert config.chunksize == 16 * MB

    def test_workers_from_config_file(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("workers = 4\n")

        assert load_config(config_file=str(config_file)).workers == 4

    def test_env_overrides_config_file(self, tmp_path, monkeypatch):
        """Env vars should take precedence over config file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('multipart_chunksize = "16MB"\n')
        monkeypatch.setenv("S3ETAG_CHUNKSIZE", "32MB")

        config = load_config(config_file=str(config_file))
        assert config.chunksize == 32 * MB

    def test_missing_default_config_file_is_ok(self, tmp_path, monkeypatch):
        """Missing default config files should not raise."""
        monkeypatch.setattr(
            "s3etag.config.DEFAULT_CONFIG_PATHS", [tmp_path / "absent.toml"]
        )
        config = load_config()
        assert config.threshold == 8 * MB

    def test_missing_explicit_config_file(self):
        """A config file named explicitly must exist."""
        with pytest.raises(InvalidConfiguration) as exc_info:
            load_config(config_file="/nonexistent/path/config.toml")
        assert "/nonexistent/path/config.toml" in str(exc_info.value)

    def test_config_path_is_directory(self, tmp_path):
        """An unreadable config path is a configuration error."""
        with pytest.raises(InvalidConfiguration) as exc_info:
            load_config(config_file=str(tmp_path))
        assert "Cannot read config file" in str(exc_info.value)

    def test_malformed_config_file(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("multipart_threshold = \n")

        with pytest.raises(InvalidConfiguration):
            load_config(config_file=str(config_file))

    def test_wrong_type_in_config_file(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("multipart_threshold = [1, 2]\n")

        with pytest.raises(InvalidConfiguration):
            load_config(config_file=str(config_file))

    def test_default_config_path(self, tmp_path, monkeypatch):
        """The first existing default path is used."""
        config_file = tmp_path / ".s3etag.toml"
        config_file.write_text('multipart_threshold = "1KB"\n')
        monkeypatch.setattr("s3etag.config.DEFAULT_CONFIG_PATHS", [config_file])

        assert load_config().threshold == 1024


class TestValidation:
    """Test rejection of invalid policies."""

    @pytest.mark.parametrize("value", ["0", "0MB", "0.0KB"])
    def test_zero_threshold(self, value):
        with pytest.raises(InvalidConfiguration):
            load_config(cli_threshold=value)

    def test_zero_chunksize(self):
        with pytest.raises(InvalidConfiguration):
            load_config(cli_chunksize="0")

    def test_unknown_suffix(self):
        with pytest.raises(InvalidConfiguration):
            load_config(cli_chunksize="8XB")

    def test_workers_capped(self):
        assert load_config(workers=1000).workers == MAX_WORKERS

    @pytest.mark.parametrize("workers", [0, -2])
    def test_invalid_workers(self, workers):
        with pytest.raises(InvalidConfiguration):
            load_config(workers=workers)

    def test_options_pass_through(self):
        config = load_config(files=["a", "b"], check=True, use_mmap=False)
        assert config.files == ["a", "b"]
        assert config.check is True
        assert config.use_mmap is False
