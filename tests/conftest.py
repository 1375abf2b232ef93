"""Test environment: cheap bcrypt cost and a fixed signing secret, set before the app is imported."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-signing-secret-not-for-production"
os.environ["API_PREFIX"] = ""
os.environ["AUTH_COOKIE_NAME"] = "token"
