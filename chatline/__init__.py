"""Real-time direct messaging backend.

The package is split the same way across every feature: ``domain`` holds
entities and pure rules, ``application`` the use cases, ``infrastructure``
persistence and transports, and ``interfaces`` the HTTP and websocket API.
"""
