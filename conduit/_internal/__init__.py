"""Internal modules for conduit.

WARNING: This package contains system-level modules used by the Provider.
These are not intended for direct use in application code.

Modules:
    dispatch - Network and stub dispatch, cancellation tokens
    http - Shared HTTP client configuration and the default transport
"""
