"""Sync layer.

This package is the single place where a freshly fetched server snapshot
is merged into the locally held one and turned into view updates.
"""
