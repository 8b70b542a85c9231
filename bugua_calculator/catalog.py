"""Справочники: восемь триграмм и шестьдесят четыре гексаграммы"""
from typing import Dict, List, Tuple, get_args

from .models import FortuneTier, HexagramInfo, Trigram


# Восемь триграмм. Порядок ключей задает индексы 0..7 для выбора по seed
BAGUA: Dict[str, Trigram] = {
    '☰': Trigram(symbol='☰', name='乾', number=1, element='金', nature='天', direction='西北'),
    '☱': Trigram(symbol='☱', name='兑', number=2, element='金', nature='泽', direction='西'),
    '☲': Trigram(symbol='☲', name='离', number=3, element='火', nature='火', direction='南'),
    '☳': Trigram(symbol='☳', name='震', number=4, element='木', nature='雷', direction='东'),
    '☴': Trigram(symbol='☴', name='巽', number=5, element='木', nature='风', direction='东南'),
    '☵': Trigram(symbol='☵', name='坎', number=6, element='水', nature='水', direction='北'),
    '☶': Trigram(symbol='☶', name='艮', number=7, element='土', nature='山', direction='东北'),
    '☷': Trigram(symbol='☷', name='坤', number=8, element='土', nature='地', direction='西南'),
}

GUA_ORDER: Tuple[str, ...] = tuple(BAGUA.keys())

# Черты читаются снизу вверх: первый символ - нижняя черта (1 = ян)
BINARY_TO_GUA: Dict[str, str] = {
    '111': '☰',  # 乾
    '110': '☱',  # 兑
    '101': '☲',  # 离
    '100': '☳',  # 震
    '011': '☴',  # 巽
    '010': '☵',  # 坎
    '001': '☶',  # 艮
    '000': '☷',  # 坤
}

GUA_TO_BINARY: Dict[str, str] = {gua: bits for bits, gua in BINARY_TO_GUA.items()}

# Количество орлов из трех монет -> (тип черты, символ, значение)
YAO_TYPES: Dict[int, Tuple[str, str, int]] = {
    0: ('老阴', '--x--', 6),
    1: ('少阳', '-----', 7),
    2: ('少阴', '-- --', 8),
    3: ('老阳', '--o--', 9),
}

# Уровни удачи от лучшего к худшему
FORTUNE_LEVELS: Tuple[str, ...] = get_args(FortuneTier)
DEFAULT_FORTUNE = '中平'

FORTUNE_BONUS: Dict[str, int] = {
    '大吉': 40,
    '吉': 25,
    '中吉': 15,
    '小吉': 10,
    '中平': 0,
    '凶': -25,
}

CATEGORY_LABELS: Dict[str, str] = {
    'career': '事业工作',
    'love': '感情婚姻',
    'wealth': '财运投资',
    'health': '健康身体',
    'study': '学习考试',
    'family': '家庭关系',
    'travel': '出行旅游',
    'other': '其他事务',
}

URGENCY_LABELS: Dict[str, str] = {
    'high': '紧急重要',
    'medium': '一般重要',
    'low': '不太紧急',
}


def _hexagram(name: str, number: int, meaning: str, upper: str, fortune: str) -> HexagramInfo:
    # Стихия гексаграммы - стихия верхней триграммы
    return HexagramInfo(
        name=name,
        number=number,
        meaning=meaning,
        element=BAGUA[upper].element,
        fortune=fortune,
    )


# (верх, низ, название, номер по Вэнь-вану, слова к гексаграмме, удача)
_HEXAGRAM_TABLE: List[Tuple[str, str, str, int, str, str]] = [
    ('☰', '☰', '乾为天', 1, '元亨利贞', '大吉'),
    ('☷', '☷', '坤为地', 2, '元亨利牝马之贞', '吉'),
    ('☵', '☳', '水雷屯', 3, '元亨利贞勿用有攸往', '中平'),
    ('☶', '☵', '山水蒙', 4, '亨匪我求童蒙', '中平'),
    ('☵', '☰', '水天需', 5, '有孚光亨贞吉', '吉'),
    ('☰', '☵', '天水讼', 6, '有孚窒惕中吉', '凶'),
    ('☷', '☵', '地水师', 7, '贞丈人吉无咎', '中吉'),
    ('☵', '☷', '水地比', 8, '吉原筮元永贞', '吉'),
    ('☴', '☰', '风天小畜', 9, '亨密云不雨', '小吉'),
    ('☰', '☱', '天泽履', 10, '履虎尾不咥人亨', '中吉'),
    ('☷', '☰', '地天泰', 11, '小往大来吉亨', '大吉'),
    ('☰', '☷', '天地否', 12, '否之匪人不利君子', '凶'),
    ('☰', '☲', '天火同人', 13, '同人于野亨', '吉'),
    ('☲', '☰', '火天大有', 14, '元亨', '大吉'),
    ('☷', '☶', '地山谦', 15, '亨君子有终', '大吉'),
    ('☳', '☷', '雷地豫', 16, '利建侯行师', '吉'),
    ('☱', '☳', '泽雷随', 17, '元亨利贞无咎', '吉'),
    ('☶', '☴', '山风蛊', 18, '元亨利涉大川', '中平'),
    ('☷', '☱', '地泽临', 19, '元亨利贞至于八月', '吉'),
    ('☴', '☷', '风地观', 20, '盥而不荐有孚颙若', '中吉'),
    ('☲', '☳', '火雷噬嗑', 21, '亨利用狱', '中吉'),
    ('☶', '☲', '山火贲', 22, '亨小利有攸往', '小吉'),
    ('☶', '☷', '山地剥', 23, '不利有攸往', '凶'),
    ('☷', '☳', '地雷复', 24, '亨出入无疾朋来无咎', '吉'),
    ('☰', '☳', '天雷无妄', 25, '元亨利贞其匪正有眚', '中吉'),
    ('☶', '☰', '山天大畜', 26, '利贞不家食吉', '吉'),
    ('☶', '☳', '山雷颐', 27, '贞吉观颐自求口实', '中吉'),
    ('☱', '☴', '泽风大过', 28, '栋桡利有攸往亨', '中平'),
    ('☵', '☵', '坎为水', 29, '习坎有孚维心亨', '凶'),
    ('☲', '☲', '离为火', 30, '利贞亨畜牝牛吉', '吉'),
    ('☱', '☶', '泽山咸', 31, '亨利贞取女吉', '吉'),
    ('☳', '☴', '雷风恒', 32, '亨无咎利贞利有攸往', '吉'),
    ('☰', '☶', '天山遁', 33, '亨小利贞', '中平'),
    ('☳', '☰', '雷天大壮', 34, '利贞', '吉'),
    ('☲', '☷', '火地晋', 35, '康侯用锡马蕃庶', '大吉'),
    ('☷', '☲', '地火明夷', 36, '利艰贞', '凶'),
    ('☴', '☲', '风火家人', 37, '利女贞', '吉'),
    ('☲', '☱', '火泽睽', 38, '小事吉', '小吉'),
    ('☵', '☶', '水山蹇', 39, '利西南不利东北', '凶'),
    ('☳', '☵', '雷水解', 40, '利西南无所往其来复吉', '吉'),
    ('☶', '☱', '山泽损', 41, '有孚元吉无咎可贞', '中吉'),
    ('☴', '☳', '风雷益', 42, '利有攸往利涉大川', '大吉'),
    ('☱', '☰', '泽天夬', 43, '扬于王庭孚号有厉', '中平'),
    ('☰', '☴', '天风姤', 44, '女壮勿用取女', '中平'),
    ('☱', '☷', '泽地萃', 45, '亨王假有庙利见大人', '吉'),
    ('☷', '☴', '地风升', 46, '元亨用见大人勿恤南征吉', '大吉'),
    ('☱', '☵', '泽水困', 47, '亨贞大人吉无咎', '凶'),
    ('☵', '☴', '水风井', 48, '改邑不改井无丧无得', '中平'),
    ('☱', '☲', '泽火革', 49, '巳日乃孚元亨利贞悔亡', '吉'),
    ('☲', '☴', '火风鼎', 50, '元吉亨', '大吉'),
    ('☳', '☳', '震为雷', 51, '亨震来虩虩笑言哑哑', '中吉'),
    ('☶', '☶', '艮为山', 52, '艮其背不获其身', '中平'),
    ('☴', '☶', '风山渐', 53, '女归吉利贞', '吉'),
    ('☳', '☱', '雷泽归妹', 54, '征凶无攸利', '凶'),
    ('☳', '☲', '雷火丰', 55, '亨王假之勿忧宜日中', '吉'),
    ('☲', '☶', '火山旅', 56, '小亨旅贞吉', '小吉'),
    ('☴', '☴', '巽为风', 57, '小亨利有攸往利见大人', '小吉'),
    ('☱', '☱', '兑为泽', 58, '亨利贞', '吉'),
    ('☴', '☵', '风水涣', 59, '亨王假有庙利涉大川', '中吉'),
    ('☵', '☱', '水泽节', 60, '亨苦节不可贞', '中平'),
    ('☴', '☱', '风泽中孚', 61, '豚鱼吉利涉大川利贞', '吉'),
    ('☳', '☶', '雷山小过', 62, '亨利贞可小事不可大事', '小吉'),
    ('☵', '☲', '水火既济', 63, '亨小利贞初吉终乱', '中吉'),
    ('☲', '☵', '火水未济', 64, '亨小狐汔济濡其尾无攸利', '中平'),
]

# Ключ - символ верхней триграммы + символ нижней
HEXAGRAMS: Dict[str, HexagramInfo] = {
    upper + lower: _hexagram(name, number, meaning, upper, fortune)
    for upper, lower, name, number, meaning, fortune in _HEXAGRAM_TABLE
}
