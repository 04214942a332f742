"""
db/ - Execution Layer
=====================
Binds the statements built in ``pgdocs.query`` to psycopg2 and maps rows
back through the configured serializer. Every operation takes an optional
``conn`` (run on the caller's connection and transaction) and an optional
``config`` (defaults to the process-wide configuration).
"""
