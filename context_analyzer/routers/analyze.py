from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..analytics.context import analyze_records
from ..analytics.summary import generate_summary
from ..config import AnalyzerConfig, ConfigurationError

router = APIRouter()


class SourceFile(BaseModel):
    path:    str
    content: str = ""


class AnalyzeRequest(BaseModel):
    files:  list[SourceFile] = Field(default_factory=list)
    config: AnalyzerConfig   = Field(default_factory=AnalyzerConfig)


def _run(req: AnalyzeRequest) -> list[dict]:
    try:
        return analyze_records(((f.path, f.content) for f in req.files), req.config)
    except ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/api/analyze")
def analyze(req: AnalyzeRequest):
    results = _run(req)
    return {"results": results, "summary": generate_summary(results)}


@router.post("/api/analyze/summary")
def analyze_summary(req: AnalyzeRequest):
    return generate_summary(_run(req))
