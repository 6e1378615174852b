# permissions/__init__.py
"""
Role/permission resolution (resolver) and its DRF adapters (drf).
"""
