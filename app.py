"""
Recipe Assistant API - KBJU analysis, Vita recipe generation, saved recipes
and the shopping list for the Telegram Mini App front-end.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import host, preferences, recipes, shopping_cart
from config.settings import settings

app = FastAPI(
    title="Recipe Assistant API",
    description="Analyze recipes into structured nutrition data, generate new ones, keep a shopping list.",
    version="1.0.0",
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(recipes.router, prefix="/recipes", tags=["recipes"])
app.include_router(shopping_cart.router, prefix="/shopping-cart", tags=["shopping-cart"])
app.include_router(preferences.router, prefix="/preferences", tags=["preferences"])
app.include_router(host.router, prefix="/host", tags=["host"])


@app.get("/health")
async def health_check():
    """Liveness plus whether the OpenRouter key is usable"""
    return {
        "status": "healthy",
        "api_key_configured": settings.api_key_configured,
        "model": settings.model,
    }
