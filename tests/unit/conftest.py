"""Unit test configuration.

Unit tests exercise one layer at a time against the in-memory database and a
temporary directory. No application instance is built.
"""

import pytest


# Mark all tests in this directory as unit tests
pytestmark = pytest.mark.unit
