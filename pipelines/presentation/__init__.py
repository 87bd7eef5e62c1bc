"""
Presentation pipeline: paginated search over approved references.
"""
