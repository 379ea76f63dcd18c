import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_carbon.api.v1.carbon_endpoints import router as carbon_router
from recipe_carbon.api.v1.recipe_endpoints import router as recipe_router
from recipe_carbon.core.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description="API for recipe search with per-ingredient carbon footprint estimates",
    version="1.0.0"
)

# --- CORS: allow the frontend to call this API ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],          # tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(recipe_router, prefix="/api/v1")
app.include_router(carbon_router, prefix="/api/v1")

@app.get("/")
def read_root():
    return {"message": "Welcome to the Recipe Carbon API!"}
