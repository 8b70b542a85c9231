"""Калькулятор гадания 卜卦: построение гексаграммы по времени или по броскам монет"""
import logging
import math
import time
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .catalog import (
    BAGUA, BINARY_TO_GUA, DEFAULT_FORTUNE, FORTUNE_BONUS, GUA_ORDER, HEXAGRAMS, YAO_TYPES
)
from .exceptions import InvalidInputError
from .interpretations import generate_details, generate_interpretation, generate_timeframe
from .models import BuguaQuestion, BuguaResult, Hexagram, HexagramInfo, Scores, Yao

logger = logging.getLogger(__name__)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: int = 0, high: int = 100) -> float:
    return max(low, min(high, value))


class BuguaCalculator:
    """Класс для построения и толкования гексаграммы"""

    COINS_COUNT = 6
    BASE_SCORE = 50
    CATEGORY_BONUS = 10
    UPPER_OFFSET = 100
    PLACEHOLDER_MEANING = '此卦需要深入分析'

    def __init__(self, hexagrams: Optional[Mapping[str, HexagramInfo]] = None):
        self.hexagrams = HEXAGRAMS if hexagrams is None else hexagrams

    def generate_seed(self, question: str, timestamp: int) -> int:
        """
        Строит неотрицательный seed из текста вопроса и временной метки.

        Полиномиальный хеш (h * 31 + code) по UTF-16 кодам строки
        `question + str(timestamp)` с переполнением до 32 бит.
        Одиночные суррогаты хешируются как обычные кодовые единицы.
        """
        combined = f'{question}{timestamp}'.encode('utf-16-le', 'surrogatepass')
        seed = 0
        for i in range(0, len(combined), 2):
            code = combined[i] | (combined[i + 1] << 8)
            seed = _to_int32(seed * 31 + code)
        return abs(seed)

    def get_gua_indices(self, seed: int) -> Tuple[int, int]:
        """Индексы (верхняя, нижняя) триграмм по seed"""
        upper = (seed + self.UPPER_OFFSET) % len(GUA_ORDER)
        lower = seed % len(GUA_ORDER)
        return upper, lower

    def coins_to_yaos(self, coin_results: Sequence[int]) -> List[Yao]:
        """Преобразует шесть бросков (число орлов 0..3) в черты"""
        if not isinstance(coin_results, (list, tuple)):
            raise InvalidInputError('投币结果必须是列表')
        if len(coin_results) != self.COINS_COUNT:
            raise InvalidInputError(f'需要{self.COINS_COUNT}次投币结果，实际为{len(coin_results)}次')

        yaos = []
        for coins in coin_results:
            # bool является подклассом int, но броском не является
            if isinstance(coins, bool) or not isinstance(coins, int) or coins not in YAO_TYPES:
                raise InvalidInputError(f'无效的投币结果: {coins!r}，必须是0-3之间的整数')
            yao_type, symbol, value = YAO_TYPES[coins]
            yaos.append(Yao(type=yao_type, symbol=symbol, value=value))
        return yaos

    def yaos_to_gua(self, yaos: Sequence[Yao]) -> str:
        """Три черты (снизу вверх) -> символ триграммы"""
        binary = ''.join('1' if yao.is_yang else '0' for yao in yaos)
        return BINARY_TO_GUA[binary]

    def resolve_coins(self, coin_results: Sequence[int]) -> Tuple[str, str]:
        """
        Определяет (верхнюю, нижнюю) триграммы по броскам монет.

        Черты строятся снизу вверх: броски 1-3 дают нижнюю триграмму,
        броски 4-6 - верхнюю.
        """
        yaos = self.coins_to_yaos(coin_results)
        lower = self.yaos_to_gua(yaos[:3])
        upper = self.yaos_to_gua(yaos[3:])
        return upper, lower

    def compose_hexagram(self, upper: str, lower: str) -> HexagramInfo:
        """Находит гексаграмму в каталоге или синтезирует замену"""
        hexagram = self.hexagrams.get(upper + lower)
        if hexagram is not None:
            return hexagram

        upper_info = BAGUA[upper]
        lower_info = BAGUA[lower]
        logger.warning(f'Гексаграмма {upper}{lower} отсутствует в каталоге, используется синтезированная')
        return HexagramInfo(
            name=f'{upper_info.name}{lower_info.name}',
            number=0,
            meaning=self.PLACEHOLDER_MEANING,
            element=upper_info.element,
            fortune=DEFAULT_FORTUNE,
        )

    def _category_bonus(self, question: BuguaQuestion, upper: str, lower: str) -> int:
        upper_info = BAGUA[upper]
        lower_info = BAGUA[lower]

        if question.category == 'career' and upper_info.nature == '天':
            return self.CATEGORY_BONUS
        if question.category == 'love' and (upper_info.element == '火' or lower_info.element == '水'):
            return self.CATEGORY_BONUS
        if question.category == 'wealth' and upper_info.element == '金':
            return self.CATEGORY_BONUS
        return 0

    def calculate_scores(self, question: BuguaQuestion, upper: str, lower: str,
                         hexagram: HexagramInfo) -> Scores:
        """Вычисляет оценки успеха, риска, времени и общую оценку"""
        fortune_bonus = FORTUNE_BONUS.get(hexagram.fortune, 0)
        category_bonus = self._category_bonus(question, upper, lower)

        success_rate = int(_clamp(self.BASE_SCORE + fortune_bonus + category_bonus))
        risk_level = int(_clamp(100 - success_rate))
        timing = _clamp(self.BASE_SCORE + fortune_bonus / 2)
        # Общая оценка считается по неокругленному timing
        overall_score = _round_half_up((success_rate + (100 - risk_level) + timing) / 3)

        return Scores(
            success_rate=success_rate,
            risk_level=risk_level,
            timing_score=_round_half_up(timing),
            overall_score=overall_score,
        )

    def _build_result(self, question: BuguaQuestion, upper: str, lower: str) -> BuguaResult:
        hexagram = self.compose_hexagram(upper, lower)
        upper_info = BAGUA[upper]
        lower_info = BAGUA[lower]

        interpretation = generate_interpretation(question, upper_info, lower_info, hexagram)
        details = generate_details(upper_info, lower_info)
        scores = self.calculate_scores(question, upper, lower, hexagram)
        timeframe = generate_timeframe(question, hexagram, scores)

        return BuguaResult(
            question=question,
            hexagram=Hexagram(
                upper=upper,
                lower=lower,
                name=hexagram.name,
                number=hexagram.number,
                meaning=hexagram.meaning,
                element=hexagram.element,
                fortune=hexagram.fortune,
            ),
            interpretation=interpretation,
            details=details,
            scores=scores,
            timeframe=timeframe,
        )

    def by_timestamp(self, question: BuguaQuestion, timestamp: Optional[int] = None) -> BuguaResult:
        """Гадание по времени: timestamp в миллисекундах, по умолчанию - текущее время"""
        if timestamp is None:
            timestamp = int(time.time() * 1000)

        seed = self.generate_seed(question.question, timestamp)
        upper_index, lower_index = self.get_gua_indices(seed)
        upper, lower = GUA_ORDER[upper_index], GUA_ORDER[lower_index]
        logger.debug(f'seed={seed}, верх={upper}, низ={lower}')

        return self._build_result(question, upper, lower)

    def by_coins(self, question: BuguaQuestion, coin_results: Sequence[int]) -> BuguaResult:
        """Гадание по шести броскам трех монет"""
        upper, lower = self.resolve_coins(coin_results)
        return self._build_result(question, upper, lower)

    def catalog(self) -> List[Dict]:
        """Каталог гексаграмм для отображения"""
        return [
            {'upper': key[0], 'lower': key[1], **info.model_dump()}
            for key, info in sorted(self.hexagrams.items(), key=lambda item: item[1].number)
        ]
