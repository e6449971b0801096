"""Pytest configuration and fixtures."""

import os

import pytest
from typer.testing import CliRunner

from scriptkit.config import reset_settings


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )
    config.addinivalue_line(
        "markers",
        "unit: mark test as unit test",
    )


@pytest.fixture(autouse=True)
def reset_global_settings(monkeypatch):
    """Give every test default settings and a clean SCRIPTKIT_ environment."""
    for var in [k for k in os.environ if k.startswith("SCRIPTKIT_")]:
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def cli_runner():
    """Create CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def coffee_shop_fountain():
    return "INT. COFFEE SHOP - DAY\n\njohn\nHello.\n\n(nervous)\nGreat.\n"


@pytest.fixture
def sample_fountain():
    return """Title: The Last Cup
Credit: Written by
Author: Jane Doe
Draft date: 2024-03-01
Contact: jane@example.com

INT. COFFEE SHOP - DAY #1#

Rain streaks the windows. MARY (30s) wipes the counter.

MARY
(quietly)
We're closing.

JOHN
Just one more cup.

CUT TO:

EXT. STREET - NIGHT #2#

John walks alone.
"""


@pytest.fixture
def sample_fdx():
    return b"""<?xml version="1.0" encoding="UTF-8" standalone="no" ?>
<FinalDraft DocumentType="Script" Template="No" Version="4">
  <Content>
    <Paragraph Number="1" Type="Scene Heading">
      <Text>INT. KITCHEN - NIGHT</Text>
    </Paragraph>
    <Paragraph Type="Action">
      <Text>The kettle </Text><Text Style="Bold">screams.</Text>
    </Paragraph>
    <Paragraph Type="Character">
      <Text>ANNA</Text>
    </Paragraph>
    <Paragraph Type="Parenthetical">
      <Text>(shouting)</Text>
    </Paragraph>
    <Paragraph Type="Dialogue">
      <Text>Turn it off!</Text>
    </Paragraph>
    <Paragraph Type="Character">
      <Text>BEN</Text>
    </Paragraph>
    <Paragraph Type="Dialogue">
      <Text>I'm trying!</Text>
    </Paragraph>
    <Paragraph Type="Character" Dual="Yes">
      <Text>ANNA</Text>
    </Paragraph>
    <Paragraph Type="Dialogue">
      <Text>Try harder!</Text>
    </Paragraph>
    <Paragraph Type="Transition">
      <Text>CUT TO:</Text>
    </Paragraph>
  </Content>
  <TitlePage>
    <Content>
      <Paragraph Type="General"><Text>KETTLE</Text></Paragraph>
      <Paragraph Type="General"><Text>Written by</Text></Paragraph>
      <Paragraph Type="General"><Text>Sam Lee</Text></Paragraph>
      <Paragraph Type="General"><Text>sam@example.com</Text></Paragraph>
    </Content>
  </TitlePage>
</FinalDraft>
"""


