"""
Hospital CRUD service.

Structure:
- config.py    : settings from environment / .env
- log_setup.py : rich console logging for the ``hospital`` namespace
- db.py        : SQLAlchemy engine, sessions and the store lock
- models.py    : ORM models (doctors, patients)
- services.py  : schema manager and data access (CRUD, chart, health probe)
- api_main.py  : FastAPI routes and the bundled single-page client
- seed.py      : demo data (idempotent)
- cli.py       : operator commands
"""
