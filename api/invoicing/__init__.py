"""
Invoice microservice (separate process from the main API).
"""
