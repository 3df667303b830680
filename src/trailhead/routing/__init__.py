"""Routing — pattern segments, ranked matching, and relative resolution.

Patterns are compiled per basepath and matched by specificity score,
never by registration order alone.
"""
