"""Анализ взаимодействия пяти стихий (五行) верхней и нижней триграмм"""
from enum import Enum
from typing import Dict, NamedTuple, Optional


# Цикл порождения: каждая стихия порождает следующую
GENERATION_CYCLE: Dict[str, str] = {
    '木': '火',
    '火': '土',
    '土': '金',
    '金': '水',
    '水': '木',
}

# Цикл подавления: каждая стихия подавляет указанную
DESTRUCTION_CYCLE: Dict[str, str] = {
    '木': '土',
    '火': '金',
    '土': '水',
    '金': '木',
    '水': '火',
}


class ElementRelation(str, Enum):
    SAME = 'same'                # 比和
    GENERATING = 'generating'    # 相生
    DESTRUCTIVE = 'destructive'  # 相克
    NEUTRAL = 'neutral'


class ElementInteraction(NamedTuple):
    relation: ElementRelation
    # 'upper' - действует верхняя триграмма, 'lower' - нижняя
    source: Optional[str] = None


def generates(source: str, target: str) -> bool:
    return GENERATION_CYCLE.get(source) == target


def destroys(source: str, target: str) -> bool:
    return DESTRUCTION_CYCLE.get(source) == target


def classify_elements(upper: str, lower: str) -> ElementInteraction:
    """
    Классифицирует отношение стихий.

    Порядок проверок: одинаковые стихии, порождение (в любую сторону),
    подавление (в любую сторону), иначе нейтральное отношение.
    """
    if upper == lower:
        return ElementInteraction(ElementRelation.SAME)
    if generates(upper, lower):
        return ElementInteraction(ElementRelation.GENERATING, 'upper')
    if generates(lower, upper):
        return ElementInteraction(ElementRelation.GENERATING, 'lower')
    if destroys(upper, lower):
        return ElementInteraction(ElementRelation.DESTRUCTIVE, 'upper')
    if destroys(lower, upper):
        return ElementInteraction(ElementRelation.DESTRUCTIVE, 'lower')
    return ElementInteraction(ElementRelation.NEUTRAL)


def describe_interaction(upper: str, lower: str) -> str:
    """Текст взаимодействия верхней и нижней триграмм"""
    interaction = classify_elements(upper, lower)

    if interaction.relation == ElementRelation.SAME:
        return f'上下卦同属{upper}，力量集中，效果显著，但需要注意过犹不及'
    if interaction.relation == ElementRelation.GENERATING:
        if interaction.source == 'upper':
            return f'上卦{upper}生下卦{lower}，上下相生，发展顺利，有贵人相助'
        return f'下卦{lower}生上卦{upper}，基础坚实，能量向上，前景良好'
    if interaction.relation == ElementRelation.DESTRUCTIVE:
        if interaction.source == 'upper':
            return f'上卦{upper}克下卦{lower}，上下相制，形成压制之势，需要调和平衡'
        return f'下卦{lower}克上卦{upper}，内外相制，形成牵制之势，需要调和平衡'
    return '上下卦五行无直接生克，彼此相安，格局平和'


def describe_five_elements(upper: str, lower: str) -> str:
    """Текст о подавлении между стихиями (порождение здесь не учитывается)"""
    if destroys(upper, lower):
        return f'上卦{upper}克下卦{lower}，外部环境对内在基础有压制作用，需要增强内在力量'
    if destroys(lower, upper):
        return f'下卦{lower}克上卦{upper}，内在力量制约外在发展，需要调整策略'
    return '五行配置和谐，内外协调，发展平衡'
