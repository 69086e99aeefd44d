"""Point the application at an in-memory database and throwaway directories before it is imported."""

import os
import tempfile

_tmp = tempfile.mkdtemp(prefix="essential-times-tests-")

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = os.path.join(_tmp, "uploads")
os.environ["CLIENT_BUILD_DIR"] = os.path.join(_tmp, "no-client-build")
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
