"""Pytest configuration for govukfield tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from django.template import Engine


def pytest_configure() -> None:
    """Configure minimal Django settings for template rendering."""
    import django
    from django.conf import settings

    if not settings.configured:
        settings.configure(
            DEBUG=True,
            DATABASES={},
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "govukfield",
            ],
            TEMPLATES=[
                {
                    "BACKEND": "django.template.backends.django.DjangoTemplates",
                    "DIRS": [],
                    "APP_DIRS": False,
                    "OPTIONS": {
                        "context_processors": [],
                    },
                }
            ],
            USE_TZ=True,
        )
        django.setup()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def error_map() -> dict:
    """An error map with two records for TEST_ERR."""
    return {
        "TEST_ERR": [
            {"inline": "inline_error_message_1", "validator": "dummy_error_validator_1"},
            {"inline": "inline_error_message_2", "validator": "dummy_error_validator_2"},
        ],
    }


@pytest.fixture
def template_engine() -> Engine:
    """A standalone template engine with the govuk_text tag library loaded."""
    return Engine(libraries={"govuk_text": "govukfield.templatetags.govuk_text"})


@pytest.fixture
def html_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for static HTML files."""
    html_path = tmp_path / "html"
    html_path.mkdir(exist_ok=True)
    return html_path


@pytest.fixture
def render_field_to_file(html_dir: Path) -> Callable:
    """Render field markup to a static HTML file.

    Returns a callable that accepts rendered markup and optional filename,
    writes a complete HTML document to the temporary directory, and returns
    the file path.
    """

    def _render(markup: str, filename: str = "field.html") -> Path:
        html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>govukfield Test</title>
</head>
<body>
    <form method="post" id="test-form">
        {markup}
        <button type="submit">Submit</button>
    </form>
</body>
</html>
"""
        file_path = html_dir / filename
        file_path.write_text(html_content)
        return file_path

    return _render


@pytest.fixture
def page_from_file(page):
    """Navigate a Playwright page to a local file.

    Returns a callable that accepts a file path, navigates to it using
    the file:// protocol, and returns the page ready for assertions.
    """

    def _navigate(file_path: Path):
        page.goto(f"file://{file_path.absolute()}")
        return page

    return _navigate
