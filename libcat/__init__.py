"""Library Catalog - Core Application Package

This package contains the core application modules including:
- Book records (book.py)
- Catalog management logic (catalog.py)
- Snapshot persistence (storage.py)
- Input validation for the shell (validators.py)
- Output rendering (ui_helpers.py)
"""
