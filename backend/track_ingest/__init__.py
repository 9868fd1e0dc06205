"""
Track Ingest

GPS workout ingestion: format detection, GPX/FIT parsing, track metrics,
Douglas-Peucker simplification and encoded polylines.
"""

__version__ = "0.1.0"
