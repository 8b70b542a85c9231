"""
Клиент AI-толкования гексаграммы через OpenAI-совместимый API
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from bugua_calculator.catalog import CATEGORY_LABELS, URGENCY_LABELS
from bugua_calculator.models import BuguaQuestion, BuguaResult

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "你是一位专业的易经卜卦分析师，精通六十四卦的含义和应用。"
    "你的分析基于传统易经智慧，同时结合现代实际情况，为咨询者提供实用的人生指导。"
)


def build_prompt(question: BuguaQuestion, result: BuguaResult) -> str:
    """Формирует запрос к модели из вопроса и результата гадания"""
    hexagram = result.hexagram
    details = result.details
    interpretation = result.interpretation
    scores = result.scores

    return f"""作为一位精通易经卜卦的大师，请为以下卜卦提供深度分析：

【占卜信息】
问题：{question.question}
类别：{CATEGORY_LABELS[question.category]}
紧急程度：{URGENCY_LABELS[question.urgency]}

【卦象结果】
卦名：{hexagram.name}
上卦：{hexagram.upper} ({details.upper_gua_analysis})
下卦：{hexagram.lower} ({details.lower_gua_analysis})
卦辞：{hexagram.meaning}
吉凶：{hexagram.fortune}

【系统分析】
总体解释：{interpretation.overall}
建议：{interpretation.advice}
时机：{interpretation.timing}
注意事项：{interpretation.caution}

【评分情况】
成功概率：{scores.success_rate}分
风险等级：{scores.risk_level}分
时机评分：{scores.timing_score}分
综合评分：{scores.overall_score}分

请从以下角度提供专业分析：
1. 【卦象解读】：详细解释此卦在当前问题上的含义
2. 【行动指南】：基于卦象给出具体的行动建议
3. 【时机把握】：分析最佳行动时机和需要注意的时间节点
4. 【风险预警】：指出可能遇到的困难和规避方法
5. 【成功要素】：分析成功的关键因素和必要条件

分析要求：
- 基于传统易经理论，结合现代实际情况
- 语言准确专业，避免迷信色彩
- 重点给出实用的指导建议
- 字数控制在600-1000字
- 条理清晰，逻辑严密"""


def fallback_analysis(result: BuguaResult) -> str:
    """Толкование без обращения к модели"""
    return (
        f"系统分析：根据{result.hexagram.name}的卦象，您的问题显示{result.hexagram.fortune}的趋势。"
        f"建议{result.interpretation.advice}，注意{result.interpretation.caution}。"
        f"时机方面{result.interpretation.timing}，整体而言需要保持谨慎乐观的态度，"
        f"相信智慧和努力终将带来好的结果。"
    )


class NarrativeClient:
    """
    Клиент для получения развернутого толкования от языковой модели.

    Ошибки сети и API не пробрасываются: при любой неудаче возвращается
    шаблонное толкование.
    """
    
    def __init__(
        self,
        base_url: str,
        api_key: Optional[str],
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1500,
        timeout: int = 60
    ):
        """
        Инициализация клиента
        
        :param base_url: Базовый URL OpenAI-совместимого API
        :param api_key: API ключ (без ключа запросы не выполняются)
        :param model: Название модели
        :param temperature: Температура генерации
        :param max_tokens: Максимальная длина ответа
        :param timeout: Таймаут запроса в секундах
        """
        self.api_url = f"{base_url.rstrip('/')}/chat/completions"
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        
        if not self.api_key:
            logger.warning("NarrativeClient: API ключ не задан, будет использоваться шаблонное толкование")
    
    def _prepare_headers(self) -> Dict[str, str]:
        """Подготовка заголовков запроса"""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
    
    def _prepare_payload(self, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        """Подготовка payload для запроса"""
        return {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
    
    async def _request_completion(self, prompt: str) -> Optional[str]:
        """Выполняет запрос к API и возвращает текст ответа"""
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(
                self.api_url,
                headers=self._prepare_headers(),
                json=self._prepare_payload(messages)
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(f"Ошибка API толкования: статус {response.status}, ответ: {error_text[:200]}")
                    return None
                data = await response.json()
        
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            logger.warning(f"Ответ API толкования не содержит choices: {str(data)[:200]}")
            return None
        message = choices[0].get("message")
        if not isinstance(message, dict):
            logger.warning("Ответ API толкования не содержит message")
            return None
        content = message.get("content")
        return content if isinstance(content, str) else None
    
    async def generate(self, question: BuguaQuestion, result: BuguaResult) -> str:
        """
        Получение развернутого толкования
        
        :param question: Вопрос
        :param result: Результат гадания
        :return: Текст толкования
        """
        if not self.api_key:
            return fallback_analysis(result)
        
        try:
            content = await self._request_completion(build_prompt(question, result))
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Ошибка при получении AI-толкования: {e}")
            content = None
        
        return content or fallback_analysis(result)
