import pytest

from bugua_calculator import BuguaCalculator, BuguaQuestion


@pytest.fixture
def calculator() -> BuguaCalculator:
    return BuguaCalculator()


@pytest.fixture
def make_question():
    def _make(category: str = "career", urgency: str = "high",
              text: str = "will my project succeed") -> BuguaQuestion:
        return BuguaQuestion(question=text, category=category, urgency=urgency)

    return _make
