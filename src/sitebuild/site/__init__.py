"""Copy, inject and rewrite steps of the site build."""

from sitebuild.site.build import BuildResult, SourceNotFoundError, build_site
from sitebuild.site.copier import clean_output, copy_tree
from sitebuild.site.inject import inject_fragment, inject_projects
from sitebuild.site.rewrite import rewrite_html_content, rewrite_html_files

__all__ = [
    "BuildResult",
    "SourceNotFoundError",
    "build_site",
    "clean_output",
    "copy_tree",
    "inject_fragment",
    "inject_projects",
    "rewrite_html_content",
    "rewrite_html_files",
]
