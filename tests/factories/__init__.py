"""Test data factories for scriptkit testing."""

from tests.factories.element_factory import ElementFactory, dialogue_lines

__all__ = ["ElementFactory", "dialogue_lines"]
