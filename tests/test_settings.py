"""Tests for BlogSettings."""

import pytest
import os
import json
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from studyblog_pkg.settings import BlogSettings


class TestBlogSettings:
    """Test cases for configuration loading."""

    def test_defaults_without_config_file(self, temp_dir):
        settings = BlogSettings(temp_dir).load_settings()

        assert settings == BlogSettings.DEFAULT_SETTINGS
        assert settings['excerpt_length'] == 200
        assert settings['extension'] == '.md'

    def test_load_yaml(self, temp_dir):
        Path(temp_dir, 'studyblog.yml').write_text("site_title: My Notes\nposts: notes\n", encoding='utf-8')

        loader = BlogSettings(temp_dir)
        settings = loader.load_settings()

        assert settings['site_title'] == 'My Notes'
        assert settings['posts'] == 'notes'
        assert settings['output'] == 'output'
        assert loader.config_file_path.endswith('studyblog.yml')

    def test_load_json(self, temp_dir):
        Path(temp_dir, 'studyblog.json').write_text(json.dumps({'minify': True}), encoding='utf-8')

        settings = BlogSettings(temp_dir).load_settings()

        assert settings['minify'] is True

    def test_yml_preferred_over_json(self, temp_dir):
        Path(temp_dir, 'studyblog.yml').write_text("site_title: From YAML\n", encoding='utf-8')
        Path(temp_dir, 'studyblog.json').write_text(json.dumps({'site_title': 'From JSON'}), encoding='utf-8')

        assert BlogSettings(temp_dir).load_settings()['site_title'] == 'From YAML'

    def test_invalid_yaml_keeps_defaults(self, temp_dir):
        Path(temp_dir, 'studyblog.yml').write_text("site_title: [unclosed\n", encoding='utf-8')

        settings = BlogSettings(temp_dir).load_settings()

        assert settings == BlogSettings.DEFAULT_SETTINGS

    def test_non_mapping_config_rejected(self, temp_dir):
        config_path = Path(temp_dir, 'studyblog.yml')
        config_path.write_text("- just\n- a list\n", encoding='utf-8')

        with pytest.raises(ValueError, match="must contain a mapping"):
            BlogSettings(temp_dir)._load_config_file(str(config_path))

    def test_invalid_json_raises_value_error(self, temp_dir):
        config_path = Path(temp_dir, 'studyblog.json')
        config_path.write_text("{not json", encoding='utf-8')

        with pytest.raises(ValueError, match="Invalid JSON"):
            BlogSettings(temp_dir)._load_config_file(str(config_path))

    def test_merge_with_args(self, temp_dir):
        loader = BlogSettings(temp_dir)
        loader.load_settings()

        merged = loader.merge_with_args({'output': 'public', 'site_tagline': None})

        assert merged['output'] == 'public'
        assert merged['site_tagline'] is None
        assert merged['posts'] == 'posts'

    @pytest.mark.parametrize('file_format', ['yml', 'json'])
    def test_sample_config_round_trip(self, temp_dir, file_format):
        loader = BlogSettings(temp_dir)
        config_path = loader.create_sample_config(file_format)

        assert os.path.basename(config_path) == f'studyblog.{file_format}'
        settings = BlogSettings(temp_dir).load_settings()
        assert settings['site_title'] == 'Study Blog'
        assert settings['highlight_style'] == 'default'
        assert settings['minify'] is False

    def test_sample_config_unknown_format(self, temp_dir):
        with pytest.raises(ValueError, match="Unsupported"):
            BlogSettings(temp_dir).create_sample_config('toml')
        assert os.listdir(temp_dir) == []
