"""
site_analyzer.recommendations: category ranking and brand recommendations.

Modules:
  brand_matching - fuzzy brand presence checks against nearby businesses.
  suitability    - per-category 1-10 suitability scores, ranked.
  brands         - prioritised, de-duplicated brand recommendation list.
"""
