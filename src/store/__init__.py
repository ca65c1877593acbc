"""Output persistence layer.

This package writes pipeline views as versioned JSON documents
and exposes the client used by the CLI.
"""
