#!/usr/bin/env python3
"""
Settings loader for Study Blog.
Supports configuration from studyblog.yml, studyblog.yaml, or studyblog.json files.
"""

import os
import json
import logging
import yaml
from typing import Dict, Any, Optional


class BlogSettings:
    """Load and manage Study Blog configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'posts': 'posts',
        'output': 'output',
        'templates': None,
        'assets': None,
        'site_title': 'Study Blog',
        'site_tagline': None,
        'highlight_style': 'default',
        'excerpt_length': 200,
        'extension': '.md',
        'minify': False,
        'lang': 'en'
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['studyblog.yml', 'studyblog.yaml', 'studyblog.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None
        self.logger = logging.getLogger('StudyBlog')

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            try:
                loaded_settings = self._load_config_file(config_file)
                if loaded_settings:
                    self.settings.update(loaded_settings)
                    self.logger.info(f"Loaded configuration from: {os.path.relpath(config_file)}")
            except (ValueError, IOError, OSError) as e:
                self.logger.warning(f"Failed to load config file {config_file}: {e}")

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """Return the first config file present in config_dir, if any."""
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    loaded = yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    loaded = json.load(f) or {}
                else:
                    raise ValueError(f"Unsupported config file format: {file_ext}")
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        except PermissionError:
            raise PermissionError(f"Permission denied reading configuration file: {config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping")
        return loaded

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        if file_format not in ['yml', 'yaml', 'json']:
            raise ValueError(f"Unsupported config file format: {file_format}")

        filename = f'studyblog.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    f.write("# Study Blog configuration\n\n")
                    f.write("# Site information\n")
                    f.write("site_title: Study Blog\n")
                    f.write("site_tagline: Notes from things I am learning\n\n")
                    f.write("# Build settings\n")
                    f.write("posts: posts\n")
                    f.write("output: output\n")
                    f.write("# templates: templates\n")
                    f.write("# assets: assets\n\n")
                    f.write("# Content settings\n")
                    f.write("excerpt_length: 200\n")
                    f.write("highlight_style: default  # any Pygments style name\n\n")
                    f.write("# Development settings\n")
                    f.write("minify: false\n")
                elif file_format == 'json':
                    sample_config = {
                        'site_title': 'Study Blog',
                        'site_tagline': 'Notes from things I am learning',
                        'posts': 'posts',
                        'output': 'output',
                        'excerpt_length': 200,
                        'highlight_style': 'default',
                        'minify': False
                    }
                    json.dump(sample_config, f, indent=2)
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        for key, value in args_dict.items():
            if value is not None:
                merged[key] = value

        return merged
