#!/usr/bin/env python3
"""
Command-line interface for Study Blog.
"""

import os
import sys
import time
import argparse
from typing import List, Optional
from . import __version__
from .core import StudyBlog
from .settings import BlogSettings

SAMPLE_POSTS = {
    'welcome.md': """---
title: "Welcome to Study Blog"
date: 2025-01-01
excerpt: "How this blog turns a folder of markdown notes into a site."
---

Every markdown file under `posts/` becomes a page. The first folder a post
lives in is its **category**; deeper folders become its subcategory.
""",
    'python/01.getting-started.md': """---
date: 2025-01-02
---

This post has no title in its front matter, so the file name is used:
the leading `01.` is dropped and hyphens become spaces.

```python
def greet(name):
    return f"Hello, {name}!"
```
""",
    'python/testing/02.pytest-fixtures.md': """---
title: "Pytest fixtures"
date: 2025-01-03
---

Fixtures live in `conftest.py` and are injected by name.
""",
}


def create_sample_posts(posts_dir: str = 'posts') -> List[str]:
    """Create a small sample post tree. Existing files are left alone."""
    created = []
    for relative_path, text in SAMPLE_POSTS.items():
        post_path = os.path.join(posts_dir, *relative_path.split('/'))
        if os.path.exists(post_path):
            print(f"Sample post already exists: {post_path}")
            continue
        os.makedirs(os.path.dirname(post_path), exist_ok=True)
        with open(post_path, 'w', encoding='utf-8') as f:
            f.write(text)
        print(f"Created sample post: {post_path}")
        created.append(post_path)
    return created


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Study Blog - static blog generator')
    parser.add_argument('--posts', type=str,
                        help='Directory tree containing markdown posts')
    parser.add_argument('--output', type=str,
                        help='Output directory for generated site')
    parser.add_argument('--templates', type=str,
                        help='Templates directory overriding the built-in templates')
    parser.add_argument('--assets', type=str,
                        help='Assets directory to copy to output instead of the built-in assets')
    parser.add_argument('--site-title', type=str, help='Site title')
    parser.add_argument('--site-tagline', type=str, help='Site tagline')
    parser.add_argument('--highlight-style', type=str,
                        help='Pygments style used for code blocks')
    parser.add_argument('--excerpt-length', type=int,
                        help='Characters of body text used when a post has no excerpt')
    parser.add_argument('--minify', action='store_true', default=None,
                        help='Minify CSS and JS assets')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and sample posts')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        if args.init:
            settings_loader = BlogSettings()
            config_path = settings_loader.create_sample_config(args.init)
            print(f"Created sample configuration file: {config_path}")
            create_sample_posts(args.posts or BlogSettings.DEFAULT_SETTINGS['posts'])
            print("\nEdit the configuration file and posts, then run 'studyblog' to build your site.")
            return

        settings_loader = BlogSettings()
        settings_loader.load_settings()

        args_dict = {k: v for k, v in vars(args).items() if v is not None and k != 'init'}
        final_settings = settings_loader.merge_with_args(args_dict)

        output_dir = os.path.expanduser(final_settings['output'])

        overall_start_time = time.time()

        generator = StudyBlog(
            posts_dir=final_settings['posts'],
            output_dir=output_dir,
            templates_dir=final_settings['templates'],
            assets_dir=final_settings['assets'],
            site_title=final_settings['site_title'],
            site_tagline=final_settings['site_tagline'],
            highlight_style=final_settings['highlight_style'],
            excerpt_length=final_settings['excerpt_length'],
            extension=final_settings['extension'],
            minify=final_settings['minify'],
            lang=final_settings['lang']
        )

        generator.build()

        total_time = time.time() - overall_start_time
        generator.logger.info(f"Site build completed in {total_time:.6f} seconds.")
        generator.logger.info(f"Total posts generated: {generator.posts_generated}")
        generator.logger.info(f"Total categories generated: {generator.categories_generated}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
