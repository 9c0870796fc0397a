# render/__init__.py
# Package init for map preview rendering

from .render_topdown import render_topdown

__all__ = ["render_topdown"]
