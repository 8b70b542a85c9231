"""Шаблонные толкования гексаграммы по категории вопроса"""
from .elements import describe_five_elements, describe_interaction
from .models import (
    BuguaQuestion, Details, HexagramInfo, Interpretation, Scores, Timeframe, Trigram
)


def is_auspicious(fortune: str) -> bool:
    """Любой уровень со знаком 吉 считается благоприятным"""
    return '吉' in fortune


def generate_interpretation(question: BuguaQuestion, upper: Trigram, lower: Trigram,
                            hexagram: HexagramInfo) -> Interpretation:
    """Выбирает шаблон по категории вопроса и заполняет его данными гексаграммы"""
    fortune = hexagram.fortune
    name = hexagram.name

    if question.category == 'career':
        if fortune == '大吉':
            outlook = '前景光明，发展顺利'
        elif fortune == '吉':
            outlook = '稳步发展，需要耐心'
        else:
            outlook = '需要谨慎处理，避免冒进'

        if upper.nature == '天':
            strategy = '积极主动'
        elif upper.nature == '地':
            strategy = '稳重踏实'
        else:
            strategy = '灵活变通'

        return Interpretation(
            overall=f'在事业方面，{name}预示着{outlook}',
            advice=f'建议采取{strategy}的策略',
            timing=f'当前时机{"较为有利" if is_auspicious(fortune) else "需要等待"}，{upper.direction}方向有利',
            caution=f'需要注意{lower.nature}的特性，避免{"重大决策" if fortune == "凶" else "急躁冒进"}',
        )

    if question.category == 'love':
        if fortune == '大吉':
            outlook = '感情和谐美满'
        elif fortune == '吉':
            outlook = '关系稳定向好'
        else:
            outlook = '需要更多沟通理解'

        if upper.element == '火':
            attitude = '热情主动'
        elif upper.element == '水':
            attitude = '温柔包容'
        else:
            attitude = '真诚坦率'

        return Interpretation(
            overall=f'在感情方面，{name}显示{outlook}',
            advice=f'建议保持{attitude}的态度',
            timing=f'感情发展{"时机良好" if is_auspicious(fortune) else "需要耐心培养"}',
            caution=f'注意{lower.element}属性的影响，避免{"争执冲突" if fortune == "凶" else "过于被动"}',
        )

    if question.category == 'wealth':
        if fortune == '大吉':
            outlook = '财源广进，收益丰厚'
        elif fortune == '吉':
            outlook = '财运稳定，小有收获'
        else:
            outlook = '需要谨慎理财，控制支出'

        if upper.element == '金':
            strategy = '保守稳健'
        elif upper.element == '木':
            strategy = '积极投资'
        else:
            strategy = '多元化配置'

        return Interpretation(
            overall=f'在财运方面，{name}暗示{outlook}',
            advice=f'建议采用{strategy}的理财策略',
            timing=f'投资时机{"相对适宜" if is_auspicious(fortune) else "不宜急进"}',
            caution=f'注意{lower.element}元素的制约，避免{"高风险投资" if fortune == "凶" else "盲目跟风"}',
        )

    return Interpretation(
        overall=f'关于您的问题，{name}提供了{fortune}的指引',
        advice=f'建议根据{upper.nature}的特性，采取相应的行动策略',
        timing=f'时机选择需要考虑{upper.direction}方向的有利因素',
        caution=f'需要注意{lower.nature}的影响，保持谨慎乐观的态度',
    )


def generate_details(upper: Trigram, lower: Trigram) -> Details:
    """Разбор верхней и нижней триграмм и их стихий"""
    return Details(
        upper_gua_analysis=(
            f'上卦{upper.name}({upper.symbol})代表{upper.nature}，五行属{upper.element}，'
            f'象征着外在环境和发展趋势'
        ),
        lower_gua_analysis=(
            f'下卦{lower.name}({lower.symbol})代表{lower.nature}，五行属{lower.element}，'
            f'象征着内在基础和根本态度'
        ),
        interaction=describe_interaction(upper.element, lower.element),
        five_elements=describe_five_elements(upper.element, lower.element),
    )


def generate_timeframe(question: BuguaQuestion, hexagram: HexagramInfo, scores: Scores) -> Timeframe:
    """Прогноз на ближайшие месяцы, год и несколько лет"""
    base_short = '近期运势向好' if is_auspicious(hexagram.fortune) else '近期需要谨慎'
    base_medium = '中期发展稳定' if scores.overall_score > 60 else '中期需要调整策略'
    base_long = '长期前景稳固' if hexagram.element == '金' else '长期发展需要持续努力'
    pace = '可以积极行动' if question.urgency == 'high' else '稳步推进'

    return Timeframe(
        short_term=f'{base_short}，建议把握当前机会，{pace}',
        medium_term=f'{base_medium}，关注{hexagram.element}属性的发展，适时调整方向',
        long_term=f'{base_long}，持续关注内外环境变化，保持初心不变',
    )
