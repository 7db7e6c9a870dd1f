import os

# Settings are read at import time; keep the suite off any real database.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
