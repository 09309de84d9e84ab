"""stylecomplete - CSS class and PostCSS mixin completion from project stylesheets."""

__version__ = "0.1.0"
