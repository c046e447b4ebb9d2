"""
File transfer module for server-side file operations.

Handles:
- Name resolution against existing and reserved filenames
- Receiving and inflating uploaded files
"""
