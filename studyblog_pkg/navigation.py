"""Sidebar navigation tree mirroring the posts directory."""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from .content import DEFAULT_EXTENSION, display_name, strip_extension

FOLDER = 'folder'
FILE = 'file'


@dataclass(frozen=True)
class TreeNode:
    """A folder with ordered children, or a file leaf pointing at a post."""

    type: str
    name: str
    slug: Optional[str] = None
    children: Tuple['TreeNode', ...] = ()

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER


def build_posts_tree(root: str, extension: str = DEFAULT_EXTENSION) -> Tuple[TreeNode, ...]:
    """
    Build folder/file nodes for everything below root.

    Folders keep sorted name order and are dropped when they hold no posts
    at any depth.
    """
    if not os.path.isdir(root):
        raise FileNotFoundError(f"Content directory not found: {root}")
    return _build(root, '', extension)


def _build(directory, relative_path, extension):
    nodes = []
    for item in sorted(os.listdir(directory)):
        full_path = os.path.join(directory, item)
        item_path = f"{relative_path}/{item}" if relative_path else item
        if os.path.isdir(full_path):
            children = _build(full_path, item_path, extension)
            if children:
                nodes.append(TreeNode(type=FOLDER, name=item, children=children))
        elif item.endswith(extension):
            base_name = strip_extension(item, extension)
            slug = f"{relative_path}/{base_name}" if relative_path else base_name
            nodes.append(TreeNode(type=FILE, name=display_name(base_name), slug=slug))
    return tuple(nodes)
