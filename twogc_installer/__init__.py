"""2GC service installer (Python-first, step-driven).

Installs exactly one of two client services and registers it with an
operator token:
- Tunnel agent (cloudflared, MSI package)
- Bridge client (CloudBridge Client, standalone executable)

Core design goals:
- One orchestration routine, parameterized by target descriptors
- Idempotent detection of prior installations
- Silent (non-interactive) install execution
- Temporary artifacts removed on every exit path
- Centralized logging
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
