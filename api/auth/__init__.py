"""
Admin authentication: bcrypt passwords + opaque bearer tokens.
"""
