"""Query text extraction helpers."""
