"""
context-analyzer — FastAPI app.
Analyzes inline file sets posted by clients; nothing is stored.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import analyze

app = FastAPI(title="Context Analyzer API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analyze.router)


@app.get("/api/health")
def health():
    return {"status": "ok"}
