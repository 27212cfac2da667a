import uvicorn
from app.config import settings

if __name__ == "__main__":
    # Start the API server
    print(f"Starting dashboard API on {settings.API_HOST}:{settings.API_PORT}...")
    print(f"Deployment API: {settings.DEPLOY_API_BASE_URL}")
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD
    )
