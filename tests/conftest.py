"""Test configuration and fixtures for the absence API."""

from tests.fixtures import *  # noqa: F401,F403
