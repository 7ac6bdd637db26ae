"""Tests for configuration persistence."""

import json

import pytest
import yaml

from padic_hensel.core.context import PrecisionConfig, PrecisionContext
from padic_hensel.roots.hensel import HenselConfig
from padic_hensel.utils.io import load_config, load_context, save_config, save_context


class TestConfigIO:
    """Test saving and loading of session configuration."""

    def test_yaml_round_trip(self, tmp_path):
        config = PrecisionConfig(precision=64, print_digits=12, hensel_depth=5)
        path = tmp_path / "session.yaml"
        save_config(config, str(path))

        with open(path) as f:
            assert yaml.safe_load(f)["precision"] == 64
        assert load_config(str(path)) == config

    def test_json_round_trip(self, tmp_path):
        config = PrecisionConfig(precision=200)
        path = tmp_path / "nested" / "session.json"
        save_config(config, str(path))

        with open(path) as f:
            assert json.load(f)["print_digits"] == 20
        assert load_config(str(path)) == config

    def test_hensel_config(self, tmp_path):
        """None fields survive both formats."""
        config = HenselConfig(max_depth=3)
        for name in ["search.yml", "search.json"]:
            path = tmp_path / name
            save_config(config, str(path))
            loaded = load_config(str(path), HenselConfig)
            assert loaded == config
            assert loaded.newton_rounds is None

    def test_missing_keys_take_defaults(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("precision: 30\n")
        config = load_config(str(path))
        assert config.precision == 30
        assert config.hensel_depth == PrecisionConfig().hensel_depth

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == PrecisionConfig()

    def test_unknown_keys_rejected(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"precision": 10, "digits": 4}))
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_context_round_trip(self, tmp_path):
        context = PrecisionContext(precision=77, print_digits=9, hensel_depth=2)
        path = tmp_path / "context.yaml"
        save_context(context, str(path))

        loaded = load_context(str(path))
        assert loaded.precision == 77
        assert loaded.print_digits == 9
        assert loaded.hensel_depth == 2
        assert loaded.truncation_modulus(3) == 3 ** 77


if __name__ == "__main__":
    pytest.main([__file__])
