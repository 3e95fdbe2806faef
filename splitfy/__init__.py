"""Splitfy backend package.

Contract management, matching and engagement services for music-industry
collaborators. The package is layered the usual way: ``domain`` entities,
``application`` use cases, ``infrastructure`` adapters and ``interfaces``
(the HTTP API).
"""
