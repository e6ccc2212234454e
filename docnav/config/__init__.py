"""Load and validate the site YAML for docnav navigation builds.

This subpackage parses the project's ``site.yaml`` file into page
definitions plus the pagination, URL scheme, and run metadata settings that
the navigation core consumes. The primary entry point is
:func:`load_site_config`, which checks required fields, applies defaults, and
returns a :class:`SiteConfig` ready to build the page tree.

Examples
--------
>>> from pathlib import Path
>>> from docnav.config import load_site_config
>>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> tree = site.build_tree()  # doctest: +SKIP
>>> tree.root.url  # doctest: +SKIP
'index.html'
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError

__all__ = ["SiteConfig", "SiteConfigError", "load_site_config"]
