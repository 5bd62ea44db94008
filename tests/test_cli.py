"""Tests for the command-line interface."""

import pytest
import os
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from studyblog_pkg import cli


class TestCli:
    """Test cases for cli.main."""

    def test_build_from_arguments(self, mock_posts_dir, mock_output_dir, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)

        cli.main(['--posts', mock_posts_dir, '--output', mock_output_dir, '--site-title', 'CLI Blog'])

        index = Path(mock_output_dir, 'index.html').read_text(encoding='utf-8')
        assert 'CLI Blog' in index
        assert Path(mock_output_dir, 'posts', 'welcome', 'index.html').exists()

    def test_config_file_is_used(self, mock_posts_dir, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        Path(temp_dir, 'studyblog.yml').write_text(
            f"posts: {mock_posts_dir}\noutput: site\nsite_title: From Config\n", encoding='utf-8'
        )

        cli.main([])

        index = Path(temp_dir, 'site', 'index.html').read_text(encoding='utf-8')
        assert 'From Config' in index

    def test_arguments_override_config(self, mock_posts_dir, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        Path(temp_dir, 'studyblog.yml').write_text(
            f"posts: {mock_posts_dir}\noutput: site\nsite_title: From Config\n", encoding='utf-8'
        )

        cli.main(['--site-title', 'From Args'])

        index = Path(temp_dir, 'site', 'index.html').read_text(encoding='utf-8')
        assert 'From Args' in index

    def test_missing_posts_dir_exits_with_error(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)

        with pytest.raises(SystemExit) as exc_info:
            cli.main(['--posts', os.path.join(temp_dir, 'nonexistent')])

        assert exc_info.value.code == 1
        assert 'Error: Content directory not found' in capsys.readouterr().err

    def test_init_creates_config_and_sample_posts(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)

        cli.main(['--init', 'yml'])

        assert Path(temp_dir, 'studyblog.yml').exists()
        assert Path(temp_dir, 'posts', 'welcome.md').exists()
        assert Path(temp_dir, 'posts', 'python', 'testing', '02.pytest-fixtures.md').exists()

        cli.main([])

        assert Path(temp_dir, 'output', 'posts', 'python', '01.getting-started', 'index.html').exists()

    def test_init_failure_exits_with_error(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)
        Path(temp_dir, 'blocker').write_text('not a directory', encoding='utf-8')

        with pytest.raises(SystemExit) as exc_info:
            cli.main(['--init', 'yml', '--posts', os.path.join(temp_dir, 'blocker')])

        assert exc_info.value.code == 1
        assert 'Error:' in capsys.readouterr().err

    def test_sample_posts_are_not_overwritten(self, temp_dir):
        posts_dir = os.path.join(temp_dir, 'posts')
        os.makedirs(posts_dir)
        Path(posts_dir, 'welcome.md').write_text('mine', encoding='utf-8')

        created = cli.create_sample_posts(posts_dir)

        assert Path(posts_dir, 'welcome.md').read_text(encoding='utf-8') == 'mine'
        assert len(created) == len(cli.SAMPLE_POSTS) - 1

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            cli.main(['--version'])
        assert '1.0.0' in capsys.readouterr().out
