"""
site_analyzer.catalog: static reference data.

Modules:
  categories      - the business category catalog (thresholds and example brands).
  regions         - state code to expansion region group mapping.
  retailer_loader - load and validate the retailer requirement dataset.
"""
