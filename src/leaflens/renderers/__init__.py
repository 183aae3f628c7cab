"""
Visualization backends for health reports.

Renderers are decoupled from analysis - the analyzer produces a report,
renderers visualize it. Swapping Matplotlib for HTML or a terminal view
never touches the classification code.
"""

from leaflens.renderers.base_renderer import BaseRenderer
from leaflens.renderers.matplotlib_renderer import MatplotlibRenderer

__all__ = [
    "BaseRenderer",
    "MatplotlibRenderer",
]
