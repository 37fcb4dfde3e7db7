"""
Masa MCP Service package.

The service exposes Masa API operations as MCP tools, enforcing:
- Authentication: bearer token injected into every upstream call
- Resilience: bounded retry with exponential backoff on transient errors
- Caching: namespaced in-memory cache with per-region capacity and TTL

Structure:
- app.main: Composition root and stdio entry point.
- app.adapters: Resilient HTTP client and Masa domain client.
- app.caching: Namespaced cache.
- app.services: Service facade used by tool handlers.
- app.tools: MCP tool registrations.
"""
