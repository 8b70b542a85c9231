from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from bugua_calculator import BuguaCalculator, BuguaQuestion, InvalidInputError
from bugua_calculator.catalog import BAGUA, BINARY_TO_GUA, FORTUNE_LEVELS, GUA_ORDER, GUA_TO_BINARY
from bugua_calculator.models import HexagramInfo


def _java_style_hash(text: str) -> int:
    """Closed-form s[0]*31^(n-1) + ... + s[n-1], wrapped to a signed int32."""

    total = sum(ord(ch) * 31 ** (len(text) - 1 - i) for i, ch in enumerate(text))
    total &= 0xFFFFFFFF
    if total >= 0x80000000:
        total -= 0x100000000
    return abs(total)


def test_seed_for_short_inputs(calculator) -> None:
    assert calculator.generate_seed("", 0) == 48
    assert calculator.generate_seed("a", 1) == 3056


def test_seed_matches_closed_form_hash(calculator) -> None:
    for text, timestamp in [
        ("will my project succeed", 0),
        ("我的事业能否成功", 1700000000000),
        ("a much longer question that overflows thirty-two bits many times", 42),
    ]:
        seed = calculator.generate_seed(text, timestamp)
        assert seed == _java_style_hash(f"{text}{timestamp}")
        assert 0 <= seed <= 2 ** 31


def test_seed_accepts_lone_surrogate(calculator) -> None:
    assert calculator.generate_seed("\ud83d", 0) == _java_style_hash("\ud83d0")
    question = BuguaQuestion(question="\ud83d", category="career", urgency="high")
    assert calculator.by_timestamp(question, 0).hexagram.name


def test_gua_indices_from_seed(calculator) -> None:
    assert calculator.get_gua_indices(0) == (4, 0)
    assert calculator.get_gua_indices(48) == (4, 0)
    assert calculator.get_gua_indices(3056) == (4, 0)
    assert calculator.get_gua_indices(5) == (1, 5)


def test_timestamp_scenario_selects_indices_from_seed(calculator, make_question) -> None:
    question = make_question()
    seed = calculator.generate_seed(question.question, 0)

    result = calculator.by_timestamp(question, 0)

    assert result.hexagram.lower == GUA_ORDER[seed % 8]
    assert result.hexagram.upper == GUA_ORDER[(seed + 100) % 8]


def test_empty_question_at_epoch_gives_qian_over_xun(calculator, make_question) -> None:
    result = calculator.by_timestamp(make_question(text=""), 0)

    assert result.hexagram.lower == "☰"
    assert result.hexagram.upper == "☴"
    assert result.hexagram.name == "风天小畜"


def test_by_timestamp_is_deterministic(calculator, make_question) -> None:
    question = make_question()

    first = calculator.by_timestamp(question, 1700000000000)
    second = BuguaCalculator().by_timestamp(question, 1700000000000)

    assert first == second
    assert first.model_dump() == second.model_dump()


def test_by_timestamp_defaults_to_wall_clock(calculator, make_question, monkeypatch) -> None:
    monkeypatch.setattr("bugua_calculator.calculator.time.time", lambda: 1234.5678)
    question = make_question()

    assert calculator.by_timestamp(question) == calculator.by_timestamp(question, 1234567)


@pytest.mark.parametrize("bits", sorted(BINARY_TO_GUA))
def test_each_parity_pattern_resolves_lower_slot(calculator, bits) -> None:
    throws = [3 if bit == "1" else 0 for bit in bits] + [0, 0, 0]

    upper, lower = calculator.resolve_coins(throws)

    assert lower == BINARY_TO_GUA[bits]
    assert upper == "☷"


@pytest.mark.parametrize("bits", sorted(BINARY_TO_GUA))
def test_each_parity_pattern_resolves_upper_slot(calculator, bits) -> None:
    throws = [0, 0, 0] + [1 if bit == "1" else 2 for bit in bits]

    upper, lower = calculator.resolve_coins(throws)

    assert upper == BINARY_TO_GUA[bits]
    assert lower == "☷"


def test_first_throw_is_bottom_line(calculator) -> None:
    # bottom line yang only -> thunder, top line yang only -> mountain
    assert calculator.resolve_coins([3, 0, 0, 0, 0, 0])[1] == "☳"
    assert calculator.resolve_coins([0, 0, 3, 0, 0, 0])[1] == "☶"


def test_young_and_old_lines_share_parity(calculator) -> None:
    yaos = calculator.coins_to_yaos([0, 1, 2, 3, 1, 2])

    assert [yao.value for yao in yaos] == [6, 7, 8, 9, 7, 8]
    assert [yao.type for yao in yaos] == ["老阴", "少阳", "少阴", "老阳", "少阳", "少阴"]
    assert [yao.is_yang for yao in yaos] == [False, True, False, True, True, False]
    assert calculator.resolve_coins([0, 1, 2, 3, 1, 2]) == ("☱", "☵")


def test_all_heads_is_heaven_over_heaven(calculator, make_question) -> None:
    result = calculator.by_coins(make_question(category="career"), [3, 3, 3, 3, 3, 3])

    assert (result.hexagram.upper, result.hexagram.lower) == ("☰", "☰")
    assert result.hexagram.name == "乾为天"
    assert result.hexagram.number == 1
    assert result.hexagram.fortune == "大吉"
    assert result.scores.model_dump() == {
        "success_rate": 100,
        "risk_level": 0,
        "timing_score": 70,
        "overall_score": 90,
    }


def test_all_tails_is_earth_over_earth(calculator, make_question) -> None:
    result = calculator.by_coins(make_question(category="love"), [0, 0, 0, 0, 0, 0])

    assert (result.hexagram.upper, result.hexagram.lower) == ("☷", "☷")
    assert result.hexagram.name == "坤为地"
    assert result.hexagram.fortune == "吉"
    assert result.scores.model_dump() == {
        "success_rate": 75,
        "risk_level": 25,
        "timing_score": 63,
        "overall_score": 71,
    }


def test_reversing_throws_swaps_upper_and_lower(calculator, make_question) -> None:
    question = make_question(category="other")

    forward = calculator.by_coins(question, [3, 3, 3, 0, 0, 0])
    backward = calculator.by_coins(question, [0, 0, 0, 3, 3, 3])

    assert (forward.hexagram.upper, forward.hexagram.lower) == ("☷", "☰")
    assert forward.hexagram.name == "地天泰"
    assert (backward.hexagram.upper, backward.hexagram.lower) == ("☰", "☷")
    assert backward.hexagram.name == "天地否"


@pytest.mark.parametrize(
    "throws",
    [
        [1, 2, 3, 4, 5],
        [],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 4],
        [-1, 0, 0, 0, 0, 0],
        [1.5, 0, 0, 0, 0, 0],
        [True, 0, 0, 0, 0, 0],
        ["1", 0, 0, 0, 0, 0],
        None,
    ],
)
def test_invalid_throws_raise(calculator, make_question, throws) -> None:
    with pytest.raises(InvalidInputError):
        calculator.by_coins(make_question(), throws)


def test_invalid_throws_do_no_partial_work(calculator, make_question, monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(calculator, "compose_hexagram", lambda *args: calls.append(args))

    with pytest.raises(InvalidInputError) as excinfo:
        calculator.by_coins(make_question(), [1, 2, 3, 4, 5])

    assert calls == []
    assert "6" in excinfo.value.message


def test_missing_pair_falls_back_to_placeholder(caplog) -> None:
    calculator = BuguaCalculator(hexagrams={})

    with caplog.at_level(logging.WARNING, logger="bugua_calculator.calculator"):
        hexagram = calculator.compose_hexagram("☰", "☷")

    assert hexagram.name == "乾坤"
    assert hexagram.number == 0
    assert hexagram.fortune == "中平"
    assert hexagram.element == "金"
    assert hexagram.meaning == BuguaCalculator.PLACEHOLDER_MEANING
    assert "☰☷" in caplog.text


def test_every_pair_composes_without_catalog(make_question) -> None:
    calculator = BuguaCalculator(hexagrams={})
    question = make_question()

    for upper in GUA_ORDER:
        for lower in GUA_ORDER:
            throws = [3 if bit == "1" else 0 for bit in GUA_TO_BINARY[lower] + GUA_TO_BINARY[upper]]
            result = calculator.by_coins(question, throws)
            assert result.hexagram.fortune == "中平"
            assert result.hexagram.name == BAGUA[upper].name + BAGUA[lower].name


@pytest.mark.parametrize("fortune", FORTUNE_LEVELS)
@pytest.mark.parametrize(
    "category", ["career", "love", "wealth", "health", "study", "family", "travel", "other"]
)
def test_scores_stay_in_bounds(calculator, make_question, fortune, category) -> None:
    question = make_question(category=category)
    hexagram = HexagramInfo(name="test", number=0, meaning="", element="金", fortune=fortune)

    for upper in GUA_ORDER:
        for lower in GUA_ORDER:
            scores = calculator.calculate_scores(question, upper, lower, hexagram)
            values = scores.model_dump().values()
            assert all(isinstance(value, int) and 0 <= value <= 100 for value in values)
            assert scores.risk_level == 100 - scores.success_rate


def test_inauspicious_scores(calculator, make_question) -> None:
    hexagram = HexagramInfo(name="test", number=0, meaning="", element="水", fortune="凶")

    scores = calculator.calculate_scores(make_question(category="other"), "☵", "☵", hexagram)

    assert scores.model_dump() == {
        "success_rate": 25,
        "risk_level": 75,
        "timing_score": 38,
        "overall_score": 29,
    }


def test_wealth_bonus_needs_metal_upper(calculator, make_question) -> None:
    question = make_question(category="wealth")
    hexagram = HexagramInfo(name="test", number=0, meaning="", element="金", fortune="中吉")

    with_bonus = calculator.calculate_scores(question, "☰", "☷", hexagram)
    without_bonus = calculator.calculate_scores(question, "☷", "☰", hexagram)

    assert with_bonus.model_dump() == {
        "success_rate": 75,
        "risk_level": 25,
        "timing_score": 58,
        "overall_score": 69,
    }
    assert without_bonus.success_rate == 65


def test_love_bonus_uses_upper_fire_or_lower_water(calculator, make_question) -> None:
    question = make_question(category="love")
    hexagram = HexagramInfo(name="test", number=0, meaning="", element="火", fortune="中平")

    assert calculator.calculate_scores(question, "☲", "☷", hexagram).success_rate == 60
    assert calculator.calculate_scores(question, "☷", "☵", hexagram).success_rate == 60
    assert calculator.calculate_scores(question, "☵", "☲", hexagram).success_rate == 50


def test_career_bonus_needs_heaven_upper(calculator, make_question) -> None:
    question = make_question(category="career")
    hexagram = HexagramInfo(name="test", number=0, meaning="", element="金", fortune="中平")

    assert calculator.calculate_scores(question, "☰", "☷", hexagram).success_rate == 60
    assert calculator.calculate_scores(question, "☷", "☰", hexagram).success_rate == 50


def test_result_is_immutable(calculator, make_question) -> None:
    result = calculator.by_coins(make_question(), [3, 3, 3, 3, 3, 3])

    with pytest.raises(ValidationError):
        result.scores.success_rate = 1


def test_catalog_listing_is_ordered(calculator) -> None:
    catalog = calculator.catalog()

    assert [item["number"] for item in catalog] == list(range(1, 65))
    assert catalog[0]["upper"] == "☰" and catalog[0]["lower"] == "☰"


def test_fortune_must_be_a_known_tier() -> None:
    with pytest.raises(ValidationError):
        HexagramInfo(name="test", number=0, meaning="", element="金", fortune="bogus")

    assert FORTUNE_LEVELS == ("大吉", "吉", "中吉", "小吉", "中平", "凶")
