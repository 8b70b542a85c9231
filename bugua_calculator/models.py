"""Модели данных для гадания по И-Цзин (卜卦)"""
from pydantic import BaseModel, ConfigDict
from typing import Literal


Category = Literal['career', 'love', 'wealth', 'health', 'study', 'family', 'travel', 'other']
Urgency = Literal['high', 'medium', 'low']
FortuneTier = Literal['大吉', '吉', '中吉', '小吉', '中平', '凶']


class Trigram(BaseModel):
    """Один из восьми триграмм (八卦)"""
    model_config = ConfigDict(frozen=True)

    symbol: str     # ☰ ☱ ☲ ☳ ☴ ☵ ☶ ☷
    name: str       # 乾, 兑, ...
    number: int     # 1..8
    element: str    # 金 / 木 / 水 / 火 / 土
    nature: str     # 天, 泽, 火, ...
    direction: str  # 西北, 西, ...


class Yao(BaseModel):
    """Черта гексаграммы, полученная из одного броска трех монет"""
    model_config = ConfigDict(frozen=True)

    type: str    # 老阴 / 少阳 / 少阴 / 老阳
    symbol: str
    value: int   # 6, 7, 8, 9

    @property
    def is_yang(self) -> bool:
        return self.value % 2 == 1


class BuguaQuestion(BaseModel):
    """Вопрос для гадания"""
    model_config = ConfigDict(frozen=True)

    question: str
    category: Category
    urgency: Urgency


class HexagramInfo(BaseModel):
    """Запись каталога гексаграмм"""
    model_config = ConfigDict(frozen=True)

    name: str
    number: int
    meaning: str
    element: str
    fortune: FortuneTier


class Hexagram(BaseModel):
    """Гексаграмма в результате гадания"""
    model_config = ConfigDict(frozen=True)

    upper: str  # символ верхней триграммы
    lower: str  # символ нижней триграммы
    name: str
    number: int  # 0 для синтезированной гексаграммы
    meaning: str
    element: str
    fortune: FortuneTier


class Interpretation(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall: str
    advice: str
    timing: str
    caution: str


class Details(BaseModel):
    model_config = ConfigDict(frozen=True)

    upper_gua_analysis: str
    lower_gua_analysis: str
    interaction: str
    five_elements: str


class Scores(BaseModel):
    """Оценки 0-100"""
    model_config = ConfigDict(frozen=True)

    success_rate: int
    risk_level: int
    timing_score: int
    overall_score: int


class Timeframe(BaseModel):
    model_config = ConfigDict(frozen=True)

    short_term: str   # 1-3 месяца
    medium_term: str  # 3-12 месяцев
    long_term: str    # 1-3 года


class BuguaResult(BaseModel):
    """Результат гадания"""
    model_config = ConfigDict(frozen=True)

    question: BuguaQuestion
    hexagram: Hexagram
    interpretation: Interpretation
    details: Details
    scores: Scores
    timeframe: Timeframe
