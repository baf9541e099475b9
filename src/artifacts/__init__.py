"""Revision call graph documents and their serialization."""
