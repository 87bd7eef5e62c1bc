"""
Domain model: configuration, record schemas, entities and engines.
"""
