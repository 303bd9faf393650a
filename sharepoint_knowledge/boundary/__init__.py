"""
Boundary layer for external system integrations.

Handles all interactions with external systems (Microsoft Graph, Foundry,
Blob Storage, AI Search). Provides adapters and clients for those services.
"""
