"""
Run the Tailor Shop Order API with uvicorn
"""
import uvicorn
from tailorshop.core.config import settings

if __name__ == "__main__":
    print(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    print(f"Database: {settings.DATABASE_URL}")
    print(f"Style images: {settings.UPLOAD_DIR} (served at {settings.UPLOAD_URL_PATH})")
    print(f"Server will be available at: http://{settings.HOST}:{settings.PORT}")
    print("Press Ctrl+C to stop the server")

    uvicorn.run(
        "tailorshop.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
