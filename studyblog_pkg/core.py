import os
import shutil
import logging
from datetime import datetime
from jinja2 import Environment, FileSystemLoader, TemplateNotFound, TemplateSyntaxError, select_autoescape
import csscompressor
import rjsmin

from .content import DEFAULT_EXCERPT_LENGTH, DEFAULT_EXTENSION, parse_date
from .markdown_renderer import MarkdownRenderer
from .posts import PostRepository

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
PACKAGE_TEMPLATES_DIR = os.path.join(PACKAGE_DIR, 'templates')
PACKAGE_ASSETS_DIR = os.path.join(PACKAGE_DIR, 'assets')

# Top-level output entries owned by the builder; anything else is preserved
GENERATED_ITEMS = {'index.html', '404.html', 'posts', 'category', 'assets'}


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno > logging.INFO:
            return True
        allowed_messages = [
            "Site build completed in",
            "Total posts generated:",
            "Total categories generated:",
            "Building index page",
            "Building category pages",
            "Building post pages",
            "Building 404 page",
            "Loaded configuration from"
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def format_date(date_str, fmt='%B %d, %Y'):
    """Jinja2 filter for post dates; unparseable values are shown as written."""
    if not date_str:
        return ''
    parsed = parse_date(date_str)
    if parsed == datetime.min:
        return date_str
    return parsed.strftime(fmt)


class StudyBlog:
    def __init__(self, posts_dir='posts', output_dir='output', templates_dir=None, assets_dir=None,
                 site_title='Study Blog', site_tagline=None, highlight_style='default',
                 excerpt_length=DEFAULT_EXCERPT_LENGTH, extension=DEFAULT_EXTENSION,
                 minify=False, lang='en', log_dir=None):
        if not os.path.isdir(posts_dir):
            raise FileNotFoundError(f"Content directory not found: {posts_dir}")
        if templates_dir and not os.path.isdir(templates_dir):
            raise FileNotFoundError(f"Templates directory not found: {templates_dir}")
        if assets_dir and not os.path.isdir(assets_dir):
            raise FileNotFoundError(f"Assets directory not found: {assets_dir}")

        self.posts_dir = posts_dir
        self.output_dir = output_dir
        self.templates_dir = templates_dir or PACKAGE_TEMPLATES_DIR
        self.assets_dir = assets_dir
        self.site_title = site_title
        self.site_tagline = site_tagline
        self.minify = minify
        self.lang = lang
        self.log_dir = log_dir or os.path.join(os.getcwd(), 'logs')
        self.posts_generated = 0
        self.categories_generated = 0
        self.categories = []
        self.tree = ()

        self.setup_logging()

        self.renderer = MarkdownRenderer(style=highlight_style)
        self.repository = PostRepository(
            posts_dir,
            extension=extension,
            renderer=self.renderer,
            excerpt_length=excerpt_length
        )

        # Custom templates fall back to the packaged ones for anything they don't override
        search_path = [self.templates_dir]
        if self.templates_dir != PACKAGE_TEMPLATES_DIR:
            search_path.append(PACKAGE_TEMPLATES_DIR)
        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(['html'])
        )
        self.env.filters['format_date'] = format_date

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('StudyBlog')
        self.logger.setLevel(logging.DEBUG)
        repository_logger = logging.getLogger('PostRepository')

        if not any(type(h) is logging.StreamHandler for h in self.logger.handlers):
            # Console handler with filter
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.addFilter(InfoFilter())
            console_handler.setFormatter(logging.Formatter('%(message)s'))
            self.logger.addHandler(console_handler)

        # The file log follows this instance's log_dir; handlers left by an
        # earlier instance writing elsewhere are detached and closed.
        log_dir = os.path.abspath(self.log_dir)
        for handler in list(self.logger.handlers):
            if not isinstance(handler, logging.FileHandler):
                continue
            if os.path.dirname(handler.baseFilename) == log_dir:
                return
            self.logger.removeHandler(handler)
            repository_logger.removeHandler(handler)
            handler.close()

        # File handler for all logs
        os.makedirs(log_dir, exist_ok=True)
        log_filename = datetime.now().strftime('studyblog_%Y-%m-%d_%H-%M-%S.log')
        file_handler = logging.FileHandler(os.path.join(log_dir, log_filename))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        self.logger.addHandler(file_handler)

        # Repository lookups log under their own name into the same file
        repository_logger.addHandler(file_handler)

    def create_output_dir(self):
        """Create output directory, clearing previously generated pages but keeping custom files."""
        if not os.path.exists(self.output_dir):
            os.makedirs(self.output_dir, exist_ok=True)
            return

        preserved_items = []
        for item in os.listdir(self.output_dir):
            item_path = os.path.join(self.output_dir, item)
            if item in GENERATED_ITEMS:
                if os.path.isdir(item_path):
                    shutil.rmtree(item_path)
                else:
                    os.remove(item_path)
            else:
                preserved_items.append(item)

        if preserved_items:
            self.logger.info(f"Preserved non-generated files: {', '.join(sorted(preserved_items))}")

    def copy_assets_to_output(self):
        """Copy packaged (or user supplied) assets and write the highlight stylesheet."""
        output_assets_dir = os.path.join(self.output_dir, 'assets')
        source_assets = self.assets_dir or PACKAGE_ASSETS_DIR

        if os.path.exists(output_assets_dir):
            shutil.rmtree(output_assets_dir)
        if os.path.isdir(source_assets):
            shutil.copytree(source_assets, output_assets_dir)
            self.logger.info(f"Copied assets from {source_assets}")

        css_dir = os.path.join(output_assets_dir, 'css')
        os.makedirs(css_dir, exist_ok=True)
        with open(os.path.join(css_dir, 'highlight.css'), 'w', encoding='utf-8') as f:
            f.write(self.renderer.stylesheet())
        self.logger.debug(f"Wrote highlight.css for style {self.renderer.style}")

    def minify_assets(self):
        """Minify CSS and JS assets."""
        assets_output_dir = os.path.join(self.output_dir, 'assets')

        css_dir = os.path.join(assets_output_dir, 'css')
        if os.path.exists(css_dir):
            for file in os.listdir(css_dir):
                if file.endswith('.css') and not file.endswith('.min.css'):
                    self._minify_file(os.path.join(css_dir, file), '.css', csscompressor.compress)

        js_dir = os.path.join(assets_output_dir, 'js')
        if os.path.exists(js_dir):
            for file in os.listdir(js_dir):
                if file.endswith('.js') and not file.endswith('.min.js'):
                    self._minify_file(os.path.join(js_dir, file), '.js', rjsmin.jsmin)

    def _minify_file(self, path, ext, minifier):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                source = f.read()
            minified_path = path[:-len(ext)] + '.min' + ext
            with open(minified_path, 'w', encoding='utf-8') as f:
                f.write(minifier(source))
            self.logger.debug(f"Minified {os.path.basename(path)}")
        except (IOError, OSError) as e:
            self.logger.error(f"Failed to minify {path}: {e}")

    def calculate_relative_path(self, current_output_dir):
        """Calculate relative path from current directory to root."""
        rel_path = os.path.relpath(self.output_dir, current_output_dir)
        if rel_path == '.':
            return ''
        return rel_path.replace(os.sep, '/') + '/'

    def render_template(self, template_name, **context):
        """Render a Jinja2 template with the shared site context."""
        try:
            template = self.env.get_template(template_name)
        except (TemplateNotFound, TemplateSyntaxError) as e:
            self.logger.error(f"Template error in {template_name}: {e}")
            return None

        context.setdefault('relative_path', '')
        context.setdefault('tree', self.tree)
        context.setdefault('categories', self.categories)
        return template.render(
            site_title=self.site_title,
            site_tagline=self.site_tagline,
            lang=self.lang,
            minify=self.minify,
            **context
        )

    def write_page(self, output_dir, html, filename='index.html'):
        os.makedirs(output_dir, exist_ok=True)
        output_file = os.path.join(output_dir, filename)
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(html)
        self.logger.debug(f"Generated HTML: {output_file}")
        return output_file

    def build_index_page(self, posts):
        """Build the home page listing every post."""
        self.logger.info("Building index page")
        html = self.render_template('index.html', posts=posts, title=self.site_title)
        if html is not None:
            self.write_page(self.output_dir, html)

    def build_category_pages(self, posts):
        """Build one listing page per category."""
        self.logger.info("Building category pages")
        for category in self.categories:
            category_posts = [post for post in posts if post.category == category]
            if not category_posts:
                continue
            output_dir = os.path.join(self.output_dir, 'category', category)
            html = self.render_template(
                'category.html',
                category=category,
                posts=category_posts,
                title=category,
                relative_path=self.calculate_relative_path(output_dir)
            )
            if html is not None:
                self.write_page(output_dir, html)
                self.categories_generated += 1

    def build_post_pages(self, posts):
        """Render every post to posts/<slug>/index.html."""
        self.logger.info("Building post pages")
        for meta in posts:
            post = self.repository.get_by_slug(meta.slug)
            if post is None:
                self.logger.warning(f"Skipping post that could not be loaded: {meta.slug}")
                continue
            output_dir = os.path.join(self.output_dir, 'posts', *post.slug.split('/'))
            html = self.render_template(
                'post.html',
                post=post,
                title=post.title,
                relative_path=self.calculate_relative_path(output_dir)
            )
            if html is not None:
                self.write_page(output_dir, html)
                self.posts_generated += 1

    def build_404_page(self):
        """Build 404 error page."""
        self.logger.info("Building 404 page")
        html = self.render_template('404.html', title='Page not found', relative_path='/')
        if html is not None:
            self.write_page(self.output_dir, html, filename='404.html')

    def build(self):
        """Main build process."""
        self.logger.info("Starting site build...")
        self.create_output_dir()
        self.copy_assets_to_output()
        if self.minify:
            self.minify_assets()

        posts = self.repository.list_all()
        self.categories = self.repository.list_categories()
        self.tree = self.repository.get_posts_tree()
        if not posts:
            self.logger.warning(f"No markdown files found in {self.posts_dir}")

        self.build_index_page(posts)
        self.build_category_pages(posts)
        self.build_post_pages(posts)
        self.build_404_page()
