"""
Server package for the filedrop file-receiving service.

This package contains all server-side functionality including:
- Collision-free name resolution
- Per-connection file receiving
- Connection dispatch
- Configuration and utilities
"""
