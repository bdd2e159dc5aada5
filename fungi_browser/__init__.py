"""
Top-level package for the fungi occurrence browser.

Most code should import from submodules such as:
    fungi_browser.core
    fungi_browser.views
    fungi_browser.ui
"""

__all__: list[str] = []
