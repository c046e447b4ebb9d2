"""
File transfer module for client-side file operations.

Handles:
- Compressing and uploading files to the server
"""
