"""
Post repository: listings, category lookups and single-post retrieval.

Every call re-reads the posts directory; nothing is cached between calls.
"""

import os
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from .content import (
    DEFAULT_EXCERPT_LENGTH,
    DEFAULT_EXTENSION,
    derive_excerpt,
    derive_title,
    normalize_date,
    parse_date,
    read_markdown_file,
    split_category,
    strip_extension,
    walk_markdown_files,
)
from .markdown_renderer import MarkdownRenderer
from .navigation import build_posts_tree

UNCATEGORIZED = 'uncategorized'


@dataclass(frozen=True)
class PostMeta:
    slug: str
    title: str
    category: str
    date: Optional[str] = None
    subcategory: Optional[str] = None
    excerpt: Optional[str] = None


@dataclass(frozen=True)
class PostDetail(PostMeta):
    content: str = ''


@dataclass(frozen=True)
class NotFound:
    """No post file exists for the slug."""

    slug: str


@dataclass(frozen=True)
class IOFailure:
    """The post file exists but could not be read."""

    slug: str
    path: str
    error: Exception


LookupResult = Union[PostDetail, NotFound, IOFailure]


class PostRepository:
    def __init__(self, posts_dir, extension=DEFAULT_EXTENSION, renderer=None,
                 excerpt_length=DEFAULT_EXCERPT_LENGTH):
        self.posts_dir = posts_dir
        self.extension = extension
        self.renderer = renderer or MarkdownRenderer()
        self.excerpt_length = excerpt_length
        self.logger = logging.getLogger('PostRepository')

    def _build_meta(self, relative_path, file_name, metadata, body):
        base_name = strip_extension(file_name, self.extension)
        slug = f"{relative_path}/{base_name}" if relative_path else base_name
        category, subcategory = split_category(relative_path, UNCATEGORIZED)
        return dict(
            slug=slug,
            title=derive_title(metadata, base_name),
            date=normalize_date(metadata.get('date')),
            category=category,
            subcategory=subcategory,
            excerpt=derive_excerpt(metadata, body, self.excerpt_length),
        )

    def list_all(self) -> List[PostMeta]:
        """All posts, newest first. Undated posts follow dated ones in walk order."""
        posts = []
        for post_path in walk_markdown_files(self.posts_dir, self.extension):
            metadata, body = read_markdown_file(post_path.full_path)
            fields = self._build_meta(post_path.relative_path, post_path.file_name, metadata, body)
            posts.append(PostMeta(**fields))

        self.logger.debug(f"Found {len(posts)} posts in {self.posts_dir}")
        return sorted(posts, key=lambda p: parse_date(p.date), reverse=True)

    def list_by_category(self, category) -> List[PostMeta]:
        return [post for post in self.list_all() if post.category == category]

    def list_categories(self) -> List[str]:
        """Distinct first path segments, in the order the walker meets them."""
        categories = []
        for post_path in walk_markdown_files(self.posts_dir, self.extension):
            category, _ = split_category(post_path.relative_path, UNCATEGORIZED)
            if category not in categories:
                categories.append(category)
        return categories

    def resolve(self, slug) -> LookupResult:
        """
        Look up one post by slug.

        Returns PostDetail when found, NotFound when no file matches the
        slug, and IOFailure when the file exists but reading it failed.
        """
        parts = slug.split('/') if slug else []
        if not parts or any(part in ('', '.', '..') for part in parts):
            return NotFound(slug)

        *dir_parts, base_name = parts
        relative_path = '/'.join(dir_parts)
        full_path = os.path.join(self.posts_dir, *dir_parts, base_name + self.extension)

        if not os.path.isfile(full_path):
            return NotFound(slug)

        try:
            metadata, body = read_markdown_file(full_path)
        except (IOError, OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Failed to read post {full_path}: {e}")
            return IOFailure(slug, full_path, e)

        fields = self._build_meta(relative_path, base_name + self.extension, metadata, body)
        return PostDetail(content=self.renderer.render(body), **fields)

    def get_by_slug(self, slug) -> Optional[PostDetail]:
        """Return the post for slug, or None when it is missing or unreadable."""
        result = self.resolve(slug)
        if isinstance(result, PostDetail):
            return result
        if isinstance(result, IOFailure):
            self.logger.error(f"Reporting unreadable post as not found: {result.slug}")
        else:
            self.logger.debug(f"Post not found: {slug}")
        return None

    def get_posts_tree(self):
        return build_posts_tree(self.posts_dir, self.extension)
