"""
HTTP surface for the PropCast projection engine.
"""
