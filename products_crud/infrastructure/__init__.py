"""Infrastructure Layer: database session management, migrations, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Startup-only concerns (probe, migrations) are never run per request
"""
