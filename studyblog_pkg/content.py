"""
Content discovery and front matter handling for Study Blog.

Walks the posts directory, splits YAML front matter from markdown bodies
and derives the display values (titles, excerpts, dates) used by listings.
"""

import os
import re
from collections import namedtuple
from datetime import datetime, date, timezone

import yaml

DEFAULT_EXTENSION = '.md'
DEFAULT_EXCERPT_LENGTH = 200
EXCERPT_SUFFIX = '...'

FRONT_MATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?\r?\n)?---[ \t]*(?:\r?\n|\Z)', re.DOTALL)
ORDERING_PREFIX_RE = re.compile(r'^\d+\.')

PostPath = namedtuple('PostPath', ['full_path', 'relative_path', 'file_name'])


def walk_markdown_files(root, extension=DEFAULT_EXTENSION):
    """
    Recursively collect markdown files below root.

    Args:
        root: Directory holding the posts.
        extension: File suffix that marks a post.

    Returns:
        List of PostPath entries. relative_path is the '/'-joined directory
        of the file relative to root ('' for files directly in root).
    """
    if not os.path.isdir(root):
        raise FileNotFoundError(f"Content directory not found: {root}")
    return _walk(root, '', extension)


def _walk(directory, relative_path, extension):
    posts = []
    for item in sorted(os.listdir(directory)):
        full_path = os.path.join(directory, item)
        if os.path.isdir(full_path):
            child_path = f"{relative_path}/{item}" if relative_path else item
            posts.extend(_walk(full_path, child_path, extension))
        elif item.endswith(extension):
            posts.append(PostPath(full_path, relative_path, item))
    return posts


def parse_front_matter(text):
    """
    Split a leading YAML front matter block from the markdown body.

    Returns (metadata, body). Missing or malformed front matter gives an
    empty dict and the whole text as the body.
    """
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        metadata = yaml.safe_load(match.group(1) or '')
    except (yaml.YAMLError, ValueError):
        # ValueError comes from values YAML accepts but cannot construct, e.g. 2024-02-30
        return {}, text

    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, dict):
        return {}, text

    return metadata, text[match.end():].lstrip('\r\n')


def read_markdown_file(filepath):
    """Read a post from disk and parse its front matter."""
    with open(filepath, 'r', encoding='utf-8') as f:
        content = f.read()
    return parse_front_matter(content)


def strip_extension(file_name, extension=DEFAULT_EXTENSION):
    if file_name.endswith(extension):
        return file_name[:-len(extension)]
    return file_name


def display_name(base_name):
    """Turn '01.intro-to-testing' into 'intro to testing'."""
    return ORDERING_PREFIX_RE.sub('', base_name).replace('-', ' ')


def derive_title(metadata, base_name):
    title = metadata.get('title')
    if title is None or title == '':
        return display_name(base_name)
    return str(title)


def derive_excerpt(metadata, body, length=DEFAULT_EXCERPT_LENGTH):
    excerpt = metadata.get('excerpt')
    if excerpt:
        return str(excerpt)
    return body.strip()[:length] + EXCERPT_SUFFIX


def normalize_date(value):
    """Return front matter dates as ISO strings, or None when unset."""
    if value is None or value == '':
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def parse_date(date_str):
    """Parse an ISO date string for sorting. Unknown formats give datetime.min."""
    if not date_str:
        return datetime.min
    try:
        parsed = datetime.fromisoformat(date_str)
    except ValueError:
        parsed = None
        for fmt in ['%Y-%m-%dT%H:%M:%S', '%Y-%m-%d', '%b %d, %Y', '%m/%d/%Y']:
            try:
                parsed = datetime.strptime(date_str, fmt)
                break
            except ValueError:
                continue
        if parsed is None:
            return datetime.min
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def split_category(relative_path, default='uncategorized'):
    """
    Derive (category, subcategory) from a post's relative directory.

    The first segment is the category; remaining segments, joined by '/',
    form the subcategory.
    """
    segments = [s for s in relative_path.split('/') if s] if relative_path else []
    if not segments:
        return default, None
    subcategory = '/'.join(segments[1:]) or None
    return segments[0], subcategory
