"""
site_analyzer.ingestion: turn upstream site data into a ``SiteContext``.

Modules:
  site_parsing - lot-size text parsing, state code extraction, site JSON loading.
"""
