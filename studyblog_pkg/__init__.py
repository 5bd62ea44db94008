"""
Study Blog - a static blog built from a folder tree of markdown notes.

Posts are grouped into categories by the directories they live in, rendered
to HTML with syntax highlighting, and published with a collapsible folder
tree sidebar for navigation.
"""

__version__ = "1.0.0"

from .core import StudyBlog
from .posts import PostRepository, PostMeta, PostDetail, NotFound, IOFailure
from .navigation import TreeNode, build_posts_tree

__all__ = [
    'StudyBlog',
    'PostRepository',
    'PostMeta',
    'PostDetail',
    'NotFound',
    'IOFailure',
    'TreeNode',
    'build_posts_tree',
]
