"""
Smoke tests to verify all critical dependencies are installed correctly.

These tests confirm that:
1. The interpreter meets the requires-python floor in pyproject.toml
2. All core dependencies are importable
3. Project version is accessible and matches the packaging metadata

Run with: pytest tests/unit/test_smoke.py -v
"""

import sys
import tomllib
from pathlib import Path

import pytest

PYPROJECT = Path(__file__).parent.parent.parent / "pyproject.toml"


@pytest.fixture
def project_metadata() -> dict[str, object]:
    with PYPROJECT.open("rb") as fh:
        return tomllib.load(fh)["project"]


class TestPythonVersion:
    """Verify the interpreter against the declared floor."""

    def test_meets_requires_python(self, project_metadata: dict[str, object]) -> None:
        floor = str(project_metadata["requires-python"]).removeprefix(">=")
        required = tuple(int(part) for part in floor.split("."))
        assert sys.version_info[: len(required)] >= required, (
            f"Python {floor}+ required, "
            f"got {sys.version_info.major}.{sys.version_info.minor}"
        )


class TestCoreDependencies:
    """Verify the runtime stack."""

    def test_pydantic_v2(self) -> None:
        """Pydantic v2 must be installed (model_validate is used by the Gemini adapter)."""
        import pydantic

        major_version = int(pydantic.VERSION.split(".")[0])
        assert major_version >= 2, f"Pydantic v2 required, got {pydantic.VERSION}"

    def test_httpx_async_import(self) -> None:
        """httpx async client must be importable."""
        from httpx import AsyncClient, MockTransport

        assert AsyncClient is not None
        assert MockTransport is not None

    def test_dotenv_import(self) -> None:
        from dotenv import load_dotenv

        assert load_dotenv is not None

    def test_structlog_configuration(self) -> None:
        """structlog can be bound with context."""
        import structlog

        logger = structlog.get_logger()
        bound_logger = logger.bind(problem_id="problem-1", operation="test")
        assert bound_logger is not None


class TestPropertyBasedTesting:
    """Verify hypothesis for transition invariant testing."""

    def test_hypothesis_import(self) -> None:
        from hypothesis import given, strategies

        assert given is not None
        assert strategies is not None


class TestProjectVersion:
    """Verify project metadata is accessible."""

    def test_version_accessible(self, project_version: str) -> None:
        assert isinstance(project_version, str)
        assert len(project_version) > 0

    def test_version_format(self, project_version: str) -> None:
        """Version must be in semver format."""
        parts = project_version.split(".")
        assert len(parts) >= 2, f"Version must be semver format, got {project_version}"

    def test_version_matches_pyproject(
        self, project_version: str, project_metadata: dict[str, object]
    ) -> None:
        assert project_version == project_metadata["version"]
