"""
Acquisition pipeline: normalization, validation and storage of submissions.
"""
