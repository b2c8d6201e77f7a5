"""
API schemas package
"""
