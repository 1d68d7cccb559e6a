"""Routing — compiled route table with O(path-depth) matching.

This is the server-side table. Routers (``quest.router``) mount their
namespaced routes into it during the registration pass.
"""
