"""
Clients for external services used by the reference catalogue.
"""
