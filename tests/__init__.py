"""Test package. Forces a fast, isolated configuration before `app` is imported."""

import os
import tempfile

os.environ.setdefault("SEED_DATA", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="twittoo-uploads-"))
