import uvicorn

from services.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "presentation:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
