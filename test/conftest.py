import os

# Use an in-memory SQLite database and a known signing secret for every test.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ORM"] = "peewee"
os.environ["AUTH_MODE"] = "jwt"
os.environ["JWT_SECRET"] = "test-secret"
