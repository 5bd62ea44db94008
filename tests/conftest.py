"""Test configuration and fixtures for Study Blog tests."""

import pytest
import tempfile
import shutil
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def mock_posts_dir(temp_dir):
    """
    Create a posts tree:

        posts/
            drafts/                              (empty, no posts)
            javascript/undated-note.md           (no front matter)
            python/01.intro-to-testing.md        (no title)
            python/testing/02.pytest-fixtures.md
            welcome.md
    """
    posts_dir = Path(temp_dir) / 'posts'
    (posts_dir / 'drafts').mkdir(parents=True)
    (posts_dir / 'javascript').mkdir()
    (posts_dir / 'python' / 'testing').mkdir(parents=True)

    (posts_dir / 'welcome.md').write_text("""---
title: Welcome
date: 2024-03-01
excerpt: Start here.
---

Welcome to the blog.
""", encoding='utf-8')

    (posts_dir / 'python' / '01.intro-to-testing.md').write_text("""---
date: 2024-01-01
---

Why we write tests at all.

```python
def test_answer():
    assert 6 * 7 == 42
```
""", encoding='utf-8')

    (posts_dir / 'python' / 'testing' / '02.pytest-fixtures.md').write_text("""---
title: Pytest fixtures
date: 2024-02-15
---

Fixtures are injected by name.
""", encoding='utf-8')

    (posts_dir / 'javascript' / 'undated-note.md').write_text(
        "Closures capture variables, not values.\n", encoding='utf-8'
    )

    return str(posts_dir)


@pytest.fixture
def mock_output_dir(temp_dir):
    """Output directory path (not created)."""
    return str(Path(temp_dir) / 'output')


@pytest.fixture
def log_dir(temp_dir):
    return str(Path(temp_dir) / 'logs')


@pytest.fixture
def write_post(temp_dir):
    """Write a post below <temp_dir>/posts and return the posts directory."""
    posts_dir = Path(temp_dir) / 'posts'
    posts_dir.mkdir(exist_ok=True)

    def _write(relative_path, text):
        path = posts_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
        return str(posts_dir)

    return _write
