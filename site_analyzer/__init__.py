"""Commercial site analyzer: feasibility scoring, category ranking and retailer matching."""

__version__ = "0.1.0"
