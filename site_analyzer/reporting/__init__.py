"""
site_analyzer.reporting: format and export a ``SiteAnalysis``.

It does NOT compute anything; every function reads a finished analysis.

Modules:
  formatters - ASCII terminal report formatters for Typer CLI commands.
  export     - CSV/JSON flat-file export helpers.
"""
