"""
API package - dependencies, schemas and routes
"""
