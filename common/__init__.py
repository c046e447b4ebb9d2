"""Constants and wire protocol shared by client and server."""
