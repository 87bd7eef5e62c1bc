"""
Curation pipeline: listing, editing and status changes of references.
"""
