from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from daguerreo.api.v1.router import api_router
from daguerreo.core.config import settings
from daguerreo.core.database import init_db, close_db
from daguerreo.utils.helpers import logger

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Welcome to the Daguerreo API", "status": "active"}

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "daguerreo"}

@app.on_event("startup")
async def startup_event():
    """Create missing tables on startup"""
    init_db()
    logger.info("Database initialized successfully")

@app.on_event("shutdown")
async def shutdown_event():
    """Close database connection on shutdown"""
    try:
        close_db()
        logger.info("Database connection closed")
    except Exception as e:
        logger.warning(f"Error closing database connection: {str(e)}")

def run():
    """Run the API with uvicorn"""
    import uvicorn

    uvicorn.run("daguerreo.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)

if __name__ == "__main__":
    run()
