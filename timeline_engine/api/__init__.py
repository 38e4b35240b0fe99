"""
HTTP API Layer

Read-only FastAPI surface over the layout engine. Request bodies carry
everything needed for a computation; the server keeps no timeline data.
"""
