"""
Smoke tests to verify all critical dependencies are installed correctly.

These tests confirm that:
1. Python 3.11+ is installed
2. All core dependencies are importable
3. Project version is accessible
"""

import sys


class TestPythonVersion:
    """Verify Python version requirements."""

    def test_python_311_or_higher(self) -> None:
        assert sys.version_info >= (3, 11), (
            f"Python 3.11+ required, "
            f"got {sys.version_info.major}.{sys.version_info.minor}"
        )


class TestCoreDependencies:
    """Verify core framework dependencies."""

    def test_pydantic_v2(self) -> None:
        import pydantic

        major_version = int(pydantic.VERSION.split(".")[0])
        assert major_version >= 2, f"Pydantic v2 required, got {pydantic.VERSION}"

    def test_email_validation_available(self) -> None:
        """EmailStr needs the email-validator extra."""
        from pydantic import BaseModel, EmailStr

        class Contact(BaseModel):
            email: EmailStr

        assert Contact(email="mia@example.com").email == "mia@example.com"

    def test_structlog_import(self) -> None:
        import structlog

        assert structlog.get_logger() is not None

    def test_prometheus_client_import(self) -> None:
        from prometheus_client import CollectorRegistry

        assert CollectorRegistry() is not None

    def test_dotenv_import(self) -> None:
        from dotenv import load_dotenv

        assert callable(load_dotenv)


class TestProjectSetup:
    def test_version(self, project_version: str) -> None:
        assert project_version == "0.1.0"
