"""Common literal values used across docnav.

These constants keep URL templates and pagination defaults centralized so the
tree builder, paginator, config loader, and tests import the same values
without drifting. Intended for internal use within the docnav package.

Examples
--------
>>> from docnav import _constants
>>> _constants.PAGED_URL_TEMPLATE.format(stem="changelog", number=2, suffix=".html")
'changelog_p2.html'
>>> _constants.DEFAULT_PAGE_LIMIT
50
"""

GENERATOR_NAME = "docnav"
GENERATOR_VERSION = "0.3.0"

PAGED_URL_TEMPLATE = "{stem}_p{number}{suffix}"
HTML_SUFFIX = ".html"

DEFAULT_PAGE_LIMIT = 50
DEFAULT_WINDOW_SPAN = 2
ALPHABETIC_FALLBACK_LABEL = "#"
