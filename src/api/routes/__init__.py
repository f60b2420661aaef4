"""
API Routes - HTTP endpoint handlers

Each area gets its own router; all are mounted under /api/v1.
"""
