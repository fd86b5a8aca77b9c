"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import pytest

from tests.specimens import (
    TD1_LINE1,
    TD1_LINE2,
    TD1_LINE3,
    TD3_LINE1,
    TD3_LINE2,
)


@pytest.fixture
def td3_lines():
    """Fixture providing a valid TD3 line pair."""
    return [TD3_LINE1, TD3_LINE2]


@pytest.fixture
def td1_lines():
    """Fixture providing a valid TD1 line triple."""
    return [TD1_LINE1, TD1_LINE2, TD1_LINE3]


@pytest.fixture
def noisy_td3_text():
    """Fixture providing OCR text of a passport page with visual-zone noise."""
    return "\n".join(
        [
            "PASSPORT  PASSEPORT",
            "Surname / Nom   ERIKSSON",
            "Given names  ANNA MARIA",
            "",
            "  P<UTO ERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<  ",
            "L898902C36UTO7408122F1204159ZE184226B<<<<<10",
        ]
    )
