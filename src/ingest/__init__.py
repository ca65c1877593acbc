"""Export ingestion and pipeline orchestration.

This package downloads and reads CHB exports and runs the
normalize, filter, flatten and project stages over them.
"""
