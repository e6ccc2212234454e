"""Page tree models and the builder that links them into a hierarchy."""

from .builder import PageTree
from .models import Entry, Page, PageDefinition

__all__ = ["Entry", "Page", "PageDefinition", "PageTree"]
