"""
API Middleware - auth dependency and exception handlers
"""
