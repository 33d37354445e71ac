"""
API package.

``router.py`` exposes a top-level ``router`` that includes the routers
defined in the ``endpoints`` subpackage.
"""
