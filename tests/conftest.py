"""Pytest configuration and shared fixtures for the canonmark test suite.

Markers are registered here, Hypothesis profiles for the idempotence
properties are selected through ``HYPOTHESIS_PROFILE``, and the fixtures
below provide scratch directories and a non-canonical sample document.
"""

import os
from pathlib import Path
from typing import Generator

import pytest
from utils import cleanup_test_dir, create_test_temp_dir

# Hypothesis profiles for the idempotence properties
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # only the property tests need Hypothesis
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def sample_markdown() -> str:
    """Provide a sample document exercising most block kinds.

    Returns
    -------
    str
        Markdown text that is not in canonical form.

    """
    return """# Sample Document

This is a **sample document** with *italic text* and some `inline code`.
It continues on a second line.[^note]

## Lists

* Item 1
* Item 2
    * Nested item

1. First item
2. Second item

### Code

```python
def hello_world():
    print("Hello, World!")
```

| Header 1 | Header 2 |
|:---------|---------:|
| Row 1 | Data 1 |

> A quote with a [link](https://example.com "Example").

---

[^note]: A footnote with *emphasis*.
"""
