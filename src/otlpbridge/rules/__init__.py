"""Bundled name-rule documents."""
