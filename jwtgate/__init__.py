"""
jwtgate - JWT authentication and signing executors

Bearer-token verification for inbound requests and token issuance for
outbound use, pluggable into a request-processing pipeline.

Architecture:
- Each module is self-contained with clear interfaces
- Host configuration is injected, never looked up globally
- Executors are built by name through a registry

Modules:
- auth: Secret resolution, token verification, token signing, registry
- middleware: FastAPI request pipeline integration
"""

__version__ = "1.0.0"
