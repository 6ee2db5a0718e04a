"""Tests for configuration loading and JSON helpers."""

import json
import logging
from pathlib import Path

import pytest

import poolcore
from poolcore.config import (
    DEFAULT_CONFIG_PATH,
    get_config,
    get_golf_settings,
    get_sportradar_api_key,
    get_timeouts,
    load_config,
)
from poolcore.logging_config import PROVIDER_LOGGERS, setup_logging
from poolcore.schemas import GridNumbersRecord, PoolConfig
from poolcore.utils import load_json, load_json_safe, parse_timestamp, save_json


class TestConfig:
    """Tests for the configuration layer."""

    def test_default_config_file(self):
        """Test the shipped config file validates."""
        config = load_config(DEFAULT_CONFIG_PATH)
        assert config.golf.counted_golfers == 4
        assert config.golf.missed_cut_policy == 'fixed_round'

    def test_default_config_ships_inside_package(self):
        """Test the default config lives in the package so installs find it."""
        assert DEFAULT_CONFIG_PATH.parent.parent == Path(poolcore.__file__).parent
        assert DEFAULT_CONFIG_PATH.exists()

    def test_missing_config_uses_defaults(self, tmp_path, monkeypatch):
        """Test a missing config file falls back to built-in defaults."""
        monkeypatch.setenv('POOLCORE_CONFIG', str(tmp_path / 'missing.json'))

        config = get_config()

        assert config == PoolConfig()
        assert config.golf.missed_cut_round_score == 80

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_environment_override(self, tmp_path, monkeypatch):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'espn_timeout_seconds': 3, 'golf': {'missed_cut_round_score': 82}}))
        monkeypatch.setenv('POOLCORE_CONFIG', str(path))

        assert get_golf_settings().missed_cut_round_score == 82
        assert get_timeouts() == {'espn': 3, 'golf': 15.0}

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'golf': {'best_of': 3}}))
        with pytest.raises(ValueError, match='Schema validation failed'):
            load_config(path)

    def test_base_url_trailing_slash(self):
        config = PoolConfig(sportradar_base_url='https://golf.example/v3/')
        assert config.sportradar_base_url == 'https://golf.example/v3'

    def test_api_key(self, monkeypatch):
        monkeypatch.setenv('SPORTRADAR_API_KEY', 'abc')
        assert get_sportradar_api_key() == 'abc'
        monkeypatch.delenv('SPORTRADAR_API_KEY')
        assert get_sportradar_api_key() == ''


class TestJsonHelpers:
    """Tests for JSON file helpers."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / 'missing.json')

    def test_malformed_json(self, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('{not json')
        with pytest.raises(json.JSONDecodeError):
            load_json(path)

    def test_safe_default(self, tmp_path):
        assert load_json_safe(tmp_path / 'missing.json', default={}) == {}

    def test_save_model(self, tmp_path):
        """Test pydantic models are dumped before writing."""
        path = tmp_path / 'nested' / 'grid.json'
        record = GridNumbersRecord(rows=list(range(10)), cols=list(range(9, -1, -1)))

        save_json(path, record)

        loaded = load_json(path, schema=GridNumbersRecord)
        assert loaded.to_grid().cols[0] == 9

    def test_invalid_grid_record(self, tmp_path):
        path = tmp_path / 'grid.json'
        path.write_text(json.dumps({'rows': [0] * 10, 'cols': list(range(10))}))
        with pytest.raises(ValueError):
            load_json(path, schema=GridNumbersRecord)


class TestTimestamps:
    """Tests for timestamp parsing."""

    def test_z_suffix(self):
        parsed = parse_timestamp('2026-04-09T12:00:00Z')
        assert parsed.tzinfo is not None
        assert parsed.hour == 12

    def test_empty(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp('') is None


class TestLogging:
    """Tests for logging setup."""

    def test_file_logging(self, tmp_path):
        logger = setup_logging(log_dir=tmp_path, level=logging.DEBUG, log_to_console=False)
        logger.info('hello')
        for handler in logger.handlers:
            handler.flush()

        (log_file,) = tmp_path.glob('poolcore_*.log')
        assert 'hello' in log_file.read_text()

        for handler in logger.handlers:
            handler.close()
        logger.handlers = []

    def test_provider_level_independent_of_scoring(self, tmp_path):
        """Test adapter request tracing can be enabled without scoring debug output."""
        logger = setup_logging(
            log_dir=tmp_path, level=logging.INFO, log_to_console=False, provider_level=logging.DEBUG
        )
        logging.getLogger('poolcore.espn').debug('GET scoreboard')
        logging.getLogger('poolcore.scoring').debug('entry incomplete')
        for handler in logger.handlers:
            handler.flush()

        (log_file,) = tmp_path.glob('poolcore_*.log')
        contents = log_file.read_text()
        assert 'GET scoreboard' in contents
        assert 'entry incomplete' not in contents

        for handler in logger.handlers:
            handler.close()
        logger.handlers = []
        for name in PROVIDER_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)

    def test_console_only(self, tmp_path):
        logger = setup_logging(log_dir=tmp_path, log_to_file=False)
        assert len(logger.handlers) == 1
        assert list(tmp_path.iterdir()) == []
        logger.handlers = []
