"""Tests for settings validation."""

import unittest

from pydantic import ValidationError

from app.core.config import Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettingsValidation(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings()
        self.assertEqual(s.DATABASE_URL, "sqlite://")
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 1440)
        self.assertEqual(s.UPLOAD_MAX_FILES, 4)

    def test_log_level_normalized(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL=" debug ").LOG_LEVEL, "DEBUG")

    def test_unknown_log_level_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="verbose")

    def test_prefix_trailing_slash_stripped(self) -> None:
        self.assertEqual(_settings(API_PREFIX="/api/").API_PREFIX, "/api")

    def test_prefix_must_be_absolute(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(API_PREFIX="api")

    def test_non_sqlite_database_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="postgresql://localhost/db")

    def test_empty_jwt_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="  ")

    def test_out_of_range_values_rejected(self) -> None:
        for field, value in (
            ("JWT_EXPIRE_MINUTES", 0),
            ("JWT_EXPIRE_MINUTES", 20000),
            ("BCRYPT_ROUNDS", 3),
            ("UPLOAD_MAX_FILES", 11),
            ("UPLOAD_MAX_BYTES", 0),
        ):
            with self.subTest(field=field, value=value):
                with self.assertRaises(ValidationError):
                    _settings(**{field: value})


if __name__ == "__main__":
    unittest.main()
