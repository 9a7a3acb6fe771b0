"""
site_analyzer.analysis: site-level scoring that needs no reference data.

Modules:
  district    - district archetype classification and per-archetype category gates.
  feasibility - overall 0-10 feasibility score with four weighted sub-scores.
"""
