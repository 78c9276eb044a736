from fastapi import APIRouter, Depends
from daguerreo.core.auth import verify_token
from .endpoints import book_apis

api_router = APIRouter()

# Include book APIs router with authentication
api_router.include_router(
    book_apis.router,
    prefix="/book-apis",
    tags=["book-apis"],
    dependencies=[Depends(verify_token)]
)

@api_router.get("/", dependencies=[Depends(verify_token)])
async def api_root():
    """API root endpoint"""
    return {"message": "API v1 is active", "endpoints": ["/book-apis"]}
