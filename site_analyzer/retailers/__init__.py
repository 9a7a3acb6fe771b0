"""
site_analyzer.retailers: score expanding retail chains against a site.

Modules:
  matcher - weighted 0-100 match score with hard disqualifications.
"""
