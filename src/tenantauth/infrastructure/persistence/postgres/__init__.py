"""PostgreSQL adapters (psycopg 3)."""
