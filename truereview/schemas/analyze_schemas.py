from pydantic import BaseModel
from typing import Any, Dict, List


class BlockResultSchema(BaseModel):
    """Score of one review block."""
    text: str
    lang: str  # "en" | "hi"
    score: int
    verdict: str
    reasons: List[str]


class AnalyzeResponse(BaseModel):
    avg: int
    verdict: str  # verdict of the average score
    results: List[BlockResultSchema]
    combined: List[str]  # at most 8 distinct reasons
    mode: str


class StatusResponse(BaseModel):
    status: str
    version: str
    environment: str
    auth_enabled: bool
    rate_limit: Dict[str, Any]
    supported_languages: List[str]
    sensitivity_levels: List[int]
    max_input_chars: int
