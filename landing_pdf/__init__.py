"""Render a landing page to PDF at desktop, tablet and mobile viewports."""

__version__ = "0.1.0"
