"""
Mock language detection server for local runs and integration tests.

POST /detect accepts plain text and always answers with
{"lang": settings.MOCK_LANGUAGE}.

Usage:
    python -m caption_validator.mock_server
    caption-validator --endpoint http://127.0.0.1:8081/detect --t_end 30 captions.vtt
"""
from fastapi import FastAPI, Request
from loguru import logger
from pydantic import BaseModel

from caption_validator.config import settings


class LanguageResponse(BaseModel):
    """Detection service response"""
    lang: str


def create_app(language: str = None) -> FastAPI:
    """
    Build the mock app.

    Args:
        language: Tag to answer with (settings.MOCK_LANGUAGE if not provided)
    """
    app = FastAPI(title="Mock Language Detection", version="1.0.0")
    app.state.language = language or settings.MOCK_LANGUAGE

    @app.get("/health")
    async def health():
        return {"status": "ok", "language": app.state.language}

    @app.post("/detect", response_model=LanguageResponse)
    async def detect(request: Request) -> LanguageResponse:
        body = await request.body()
        text = body.decode("utf-8", errors="replace")
        logger.info(f"Received text ({len(text)} chars): {text[:200]}")
        return LanguageResponse(lang=app.state.language)

    return app


app = create_app()


def main() -> None:
    import uvicorn

    logger.info(f"Mock language detection server starting on {settings.MOCK_SERVER_HOST}:{settings.MOCK_SERVER_PORT}")
    logger.info(f'POST /detect - accepts plaintext, returns {{"lang": "{settings.MOCK_LANGUAGE}"}}')
    uvicorn.run(app, host=settings.MOCK_SERVER_HOST, port=settings.MOCK_SERVER_PORT)


if __name__ == "__main__":
    main()
