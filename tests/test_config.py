"""
Tests for NavigationConfig and its YAML loading.
"""

import pytest

from python_smartnav import ConfigurationError, NavigationConfig
from python_smartnav.constants import SMARTNAV_BREAKOUT_TAGS, SMARTNAV_MAX_CHARCOUNT


class TestDefaults:
    """Tests for default settings."""

    def test_defaults_match_constants(self) -> None:
        """Test the defaults are the calibrated constants."""
        config = NavigationConfig()

        assert config.max_charcount == SMARTNAV_MAX_CHARCOUNT == 1500
        assert config.breakout_tags == SMARTNAV_BREAKOUT_TAGS
        assert config.collection_annotations == ("Link",)
        assert config.collection_min_items == 3
        assert config.structural_queries is True

    def test_breakout_xpath_covers_tags_and_roles(self) -> None:
        """Test the union query has one branch per tag and role."""
        config = NavigationConfig(breakout_tags=["P", "ul"], breakout_roles=["button"])

        assert config.breakout_tags == ("p", "ul")
        assert config.breakout_xpath == './/p | .//ul | .//*[@role="button"]'


class TestValidation:
    """Tests for value validation."""

    def test_non_positive_threshold(self) -> None:
        """Test a zero threshold is rejected."""
        with pytest.raises(ConfigurationError, match="max_charcount"):
            NavigationConfig(max_charcount=0)

    def test_min_items_too_small(self) -> None:
        """Test folding needs at least two items."""
        with pytest.raises(ConfigurationError, match="collection_min_items"):
            NavigationConfig(collection_min_items=1)

    def test_bad_tag_name(self) -> None:
        """Test a tag that would break the query is rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            NavigationConfig(breakout_tags=["p", "div/span"])

        assert exc_info.value.errors == ["breakout tag 'div/span' is not a valid element name"]
        assert "  • breakout tag 'div/span'" in str(exc_info.value)

    def test_bad_role_name(self) -> None:
        """Test a role containing a quote is rejected."""
        with pytest.raises(ConfigurationError, match="breakout role"):
            NavigationConfig(breakout_roles=['bad"role'])


class TestFromDict:
    """Tests for building settings from mappings."""

    def test_overrides(self) -> None:
        """Test given keys override the defaults."""
        config = NavigationConfig.from_dict({"max_charcount": 200, "breakout_tags": ["h1"]})

        assert config.max_charcount == 200
        assert config.breakout_tags == ("h1",)
        assert config.collection_min_items == 3

    def test_section_wrapper(self) -> None:
        """Test settings may sit under a smartnav key."""
        config = NavigationConfig.from_dict({"smartnav": {"collection_min_items": 4}})
        assert config.collection_min_items == 4

    def test_unknown_keys(self) -> None:
        """Test unknown keys are reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            NavigationConfig.from_dict({"max_chars": 10}, source="nav.yaml")

        assert exc_info.value.errors == ["unknown key 'max_chars'"]
        assert exc_info.value.source == "nav.yaml"

    def test_list_fields_must_be_lists(self) -> None:
        """Test a scalar where a list is expected is rejected."""
        with pytest.raises(ConfigurationError, match="must be a list"):
            NavigationConfig.from_dict({"breakout_roles": "button"})

    def test_not_a_mapping(self) -> None:
        """Test non-mapping data is rejected."""
        with pytest.raises(ConfigurationError, match="mapping"):
            NavigationConfig.from_dict(["max_charcount"])

    def test_invalid_value_keeps_source(self) -> None:
        """Test validation errors name the source."""
        with pytest.raises(ConfigurationError, match=r"\(in settings.yaml\)"):
            NavigationConfig.from_dict({"max_charcount": -5}, source="settings.yaml")

    def test_round_trip(self) -> None:
        """Test to_dict output rebuilds an equal configuration."""
        config = NavigationConfig(max_charcount=900, collection_annotations=("Link", "Button"))
        assert NavigationConfig.from_dict(config.to_dict()) == config


class TestFromYaml:
    """Tests for loading settings from YAML files."""

    def test_load_file(self, tmp_path) -> None:
        """Test a YAML file with a smartnav section."""
        path = tmp_path / "nav.yaml"
        path.write_text(
            "smartnav:\n"
            "  max_charcount: 800\n"
            "  collection_annotations: [Link, Button]\n"
            "  structural_queries: false\n",
            encoding="utf-8",
        )

        config = NavigationConfig.from_yaml(path)

        assert config.max_charcount == 800
        assert config.collection_annotations == ("Link", "Button")
        assert config.structural_queries is False

    def test_missing_file(self, tmp_path) -> None:
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            NavigationConfig.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path) -> None:
        """Test a parse failure becomes a ConfigurationError."""
        path = tmp_path / "broken.yaml"
        path.write_text("smartnav: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="parse"):
            NavigationConfig.from_yaml(path)

    def test_empty_file_uses_defaults(self, tmp_path, caplog) -> None:
        """Test an empty file logs a warning and returns the defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with caplog.at_level("WARNING"):
            config = NavigationConfig.from_yaml(path)

        assert config == NavigationConfig()
        assert "is empty" in caplog.text
