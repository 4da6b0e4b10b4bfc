"""
HTTP API for document translation (Flask)
"""
