"""Генератор текстовых и визуальных отчетов по результату гадания"""
from typing import Any, Dict, Optional
from PIL import Image, ImageDraw, ImageFont
import io
import os
import logging

from bugua_calculator.catalog import BAGUA, CATEGORY_LABELS, GUA_TO_BINARY
from bugua_calculator.models import BuguaQuestion, BuguaResult

from .narrative import NarrativeClient

logger = logging.getLogger(__name__)

FONT_PATHS = [
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",  # Linux (CJK)
    "/usr/share/fonts/truetype/wqy/wqy-zenhei.ttc",  # Linux (CJK)
    "/System/Library/Fonts/PingFang.ttc",  # macOS
    "C:/Windows/Fonts/msyh.ttc",  # Windows
]


def build_title(question: BuguaQuestion) -> str:
    """Заголовок записи истории"""
    return f"{CATEGORY_LABELS[question.category]} - {question.question}"


def build_summary(result: BuguaResult) -> str:
    """Краткое описание записи истории"""
    return (
        f"{result.hexagram.name}，{result.hexagram.fortune}。"
        f"综合评分{result.scores.overall_score}分。{result.interpretation.advice}"
    )


def _load_font(size: int) -> Optional[ImageFont.FreeTypeFont]:
    """Ищет шрифт с китайскими иероглифами"""
    for path in FONT_PATHS:
        if not os.path.exists(path):
            continue
        try:
            return ImageFont.truetype(path, size)
        except OSError as e:
            logger.warning(f"Не удалось загрузить шрифт {path}: {e}")
    return None


class ReportGenerator:
    """Генератор текстовых и визуальных отчетов"""
    
    def __init__(self, narrative_client: Optional[NarrativeClient] = None):
        """
        Инициализация генератора отчетов
        
        Args:
            narrative_client: Клиент AI-толкования (без него отчет строится без толкования)
        """
        self.narrative_client = narrative_client
    
    def generate_text_report(self, result: BuguaResult, ai_analysis: Optional[str] = None) -> str:
        """Генерирует текстовый отчет"""
        question = result.question
        hexagram = result.hexagram
        upper = BAGUA[hexagram.upper]
        lower = BAGUA[hexagram.lower]
        number = f"第{hexagram.number}卦" if hexagram.number else "未收录卦"
        
        report = f"""
╔════════════════════════════════════════╗
║              卜卦分析报告              ║
╚════════════════════════════════════════╝

❓ 问题：{question.question}
📂 类别：{CATEGORY_LABELS[question.category]}

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

☯️ 卦象：{hexagram.name}（{number}）

• 上卦：{upper.name} {hexagram.upper}（{upper.nature}，{upper.element}，{upper.direction}）
• 下卦：{lower.name} {hexagram.lower}（{lower.nature}，{lower.element}，{lower.direction}）
• 卦辞：{hexagram.meaning}
• 五行：{hexagram.element}
• 吉凶：{hexagram.fortune}

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

📖 解释：

• 总体：{result.interpretation.overall}
• 建议：{result.interpretation.advice}
• 时机：{result.interpretation.timing}
• 注意：{result.interpretation.caution}

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

🔍 详细分析：

{result.details.upper_gua_analysis}
{result.details.lower_gua_analysis}
{result.details.interaction}
{result.details.five_elements}

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

📊 评分：

• 成功概率：{result.scores.success_rate}
• 风险等级：{result.scores.risk_level}
• 时机评分：{result.scores.timing_score}
• 综合评分：{result.scores.overall_score}

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

🕰 时间预测：

• 近期：{result.timeframe.short_term}
• 中期：{result.timeframe.medium_term}
• 远期：{result.timeframe.long_term}
"""
        
        if ai_analysis:
            report += f"\n━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━\n"
            report += f"🤖 深度分析：\n\n{ai_analysis.strip()}\n"
        
        report += f"\n━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━\n"
        report += f"✨ 报告自动生成\n"
        
        return report
    
    async def generate_enhanced_report(self, result: BuguaResult) -> Dict[str, Any]:
        """Генерирует отчет с AI-толкованием и изображением гексаграммы"""
        ai_analysis = None
        if self.narrative_client is not None:
            ai_analysis = await self.narrative_client.generate(result.question, result)
        
        return {
            'text_report': self.generate_text_report(result, ai_analysis),
            'visual_hexagram': self.generate_visual_hexagram(result),
            'ai_analysis': ai_analysis,
            'summary': build_summary(result)
        }
    
    def generate_visual_hexagram(self, result: BuguaResult) -> bytes:
        """Генерирует изображение гексаграммы: сплошные черты - ян, прерывистые - инь"""
        img_width = 400
        line_height = 30
        line_gap = 24
        margin = 50
        label_height = 50
        gua_gap = 20  # дополнительный отступ между триграммами
        
        img_height = margin * 2 + 6 * line_height + 5 * line_gap + gua_gap + label_height
        img = Image.new('RGB', (img_width, img_height), color='white')
        draw = ImageDraw.Draw(img)
        
        line_color = (0, 0, 0)
        line_width = img_width - margin * 2
        yin_gap = line_width // 5
        
        # Черты снизу вверх: нижняя триграмма, затем верхняя
        bits = GUA_TO_BINARY[result.hexagram.lower] + GUA_TO_BINARY[result.hexagram.upper]
        
        for row in range(6):
            position = 5 - row  # row 0 - верхняя черта
            y = margin + row * (line_height + line_gap)
            if position < 3:
                y += gua_gap
            
            if bits[position] == '1':
                draw.rectangle([margin, y, margin + line_width, y + line_height], fill=line_color)
            else:
                half = (line_width - yin_gap) // 2
                draw.rectangle([margin, y, margin + half, y + line_height], fill=line_color)
                draw.rectangle(
                    [margin + line_width - half, y, margin + line_width, y + line_height],
                    fill=line_color
                )
        
        # Подпись: иероглифы только при наличии CJK-шрифта
        font = _load_font(28)
        if font is not None:
            label_text = f"{result.hexagram.name} · {result.hexagram.fortune}"
        else:
            font = ImageFont.load_default()
            label_text = f"Hexagram #{result.hexagram.number}" if result.hexagram.number else "Hexagram"
        
        bbox = draw.textbbox((0, 0), label_text, font=font)
        text_width = bbox[2] - bbox[0]
        draw.text(
            ((img_width - text_width) // 2, img_height - margin - label_height // 2),
            label_text,
            fill=line_color,
            font=font
        )
        
        # Сохраняем в bytes
        img_bytes = io.BytesIO()
        img.save(img_bytes, format='PNG')
        img_bytes.seek(0)
        
        return img_bytes.getvalue()
