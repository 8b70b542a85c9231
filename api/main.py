"""FastAPI приложение"""
import io
import logging
from datetime import datetime, timezone
from typing import Any, List, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from bugua_calculator import BuguaCalculator, BuguaQuestion, BuguaResult, InvalidInputError
from bugua_calculator.catalog import BAGUA
from bugua_calculator.models import Category, Urgency
from config import settings
from database import DivinationRecord, get_db, init_db
from reports import NarrativeClient, ReportGenerator, build_summary, build_title

# Настройка логирования
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, settings.log_level.upper(), logging.INFO)
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="卜卦 API",
    description="API для гадания по И-Цзин: построение и толкование гексаграммы",
    version="1.0.0"
)

# Инициализация
calculator = BuguaCalculator()
narrative_client = NarrativeClient(
    base_url=settings.deepseek_base_url,
    api_key=settings.deepseek_api_key,
    model=settings.deepseek_model,
    temperature=settings.ai_temperature,
    max_tokens=settings.ai_max_tokens,
    timeout=settings.ai_timeout
)
report_generator = ReportGenerator(narrative_client)


# Инициализация БД при старте
@app.on_event("startup")
async def startup_event():
    init_db()


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    """Ошибки входных данных гадания -> 400"""
    logger.info(f"Некорректный запрос {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content={"success": False, "error": exc.message})


# Модели запросов
class BuguaRequest(BaseModel):
    question: str
    category: Category
    urgency: Urgency
    method: Literal['time', 'coins']
    # для метода 'coins': 6 бросков, типы значений проверяет калькулятор
    coin_results: Optional[List[Any]] = None
    timestamp: Optional[int] = None  # для метода 'time', в миллисекундах
    with_ai: bool = True

    def to_question(self) -> BuguaQuestion:
        return BuguaQuestion(
            question=self.question,
            category=self.category,
            urgency=self.urgency
        )


def divine(request: BuguaRequest) -> BuguaResult:
    """Построение гексаграммы выбранным способом"""
    question = request.to_question()
    if request.method == 'coins':
        if request.coin_results is None:
            raise InvalidInputError("硬币占卜法需要6次投币结果")
        return calculator.by_coins(question, request.coin_results)
    return calculator.by_timestamp(question, request.timestamp)


def serialize_record(record: DivinationRecord) -> dict:
    return {
        "id": record.id,
        "title": record.title,
        "summary": record.summary,
        "method": record.method,
        "created_at": str(record.created_at)
    }


# API endpoints
@app.get("/")
async def root():
    """Корневой endpoint"""
    return {
        "message": "卜卦 API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/api/bugua/trigrams")
async def get_trigrams():
    """Восемь триграмм"""
    return {
        "success": True,
        "data": [trigram.model_dump() for trigram in BAGUA.values()]
    }


@app.get("/api/bugua/hexagrams")
async def get_hexagrams():
    """Каталог гексаграмм"""
    hexagrams = calculator.catalog()
    return {
        "success": True,
        "count": len(hexagrams),
        "data": hexagrams
    }


@app.post("/api/bugua/analyze")
async def analyze(request: BuguaRequest, db: Session = Depends(get_db)):
    """Гадание с толкованием и сохранением в историю"""
    result = divine(request)
    question = result.question

    ai_analysis = None
    if request.with_ai:
        ai_analysis = await narrative_client.generate(question, result)

    result_data = result.model_dump()
    record = DivinationRecord(
        question=question.question,
        category=question.category,
        urgency=question.urgency,
        method=request.method,
        coin_results=request.coin_results,
        title=build_title(question),
        summary=build_summary(result),
        result_data=result_data,
        ai_analysis=ai_analysis
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(f"Гадание сохранено: id={record.id}, {result.hexagram.name} ({result.hexagram.fortune})")

    return {
        "success": True,
        **result_data,
        "ai_analysis": ai_analysis,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "method": request.method,
        "record_id": record.id
    }


@app.post("/api/bugua/visual")
async def visual(request: BuguaRequest):
    """Изображение гексаграммы"""
    result = divine(request)
    image = report_generator.generate_visual_hexagram(result)

    return StreamingResponse(
        io.BytesIO(image),
        media_type="image/png",
        headers={"Content-Disposition": "attachment; filename=hexagram.png"}
    )


@app.get("/api/bugua/records")
async def get_records(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    """История гаданий"""
    records = (
        db.query(DivinationRecord)
        .order_by(DivinationRecord.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )

    return {
        "success": True,
        "count": len(records),
        "data": [serialize_record(r) for r in records]
    }


@app.get("/api/bugua/records/{record_id}")
async def get_record(record_id: int, db: Session = Depends(get_db)):
    """Запись истории по ID"""
    record = db.query(DivinationRecord).filter(DivinationRecord.id == record_id).first()

    if not record:
        raise HTTPException(status_code=404, detail="Record not found")

    return {
        "success": True,
        "data": {
            **serialize_record(record),
            "question": record.question,
            "category": record.category,
            "urgency": record.urgency,
            "coin_results": record.coin_results,
            "result": record.result_data,
            "ai_analysis": record.ai_analysis
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
