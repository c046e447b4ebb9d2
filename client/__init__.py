"""
Client package for the filedrop file-receiving service.

This package contains the client-side functionality:
- File upload
- Logging utilities
"""
