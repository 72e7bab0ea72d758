"""
Service layer: provider gateway, CMS (admin) operations and discovery (public) reads.
"""
