"""
Customer Health API
===================

FastAPI endpoints over the customer health engine.

Usage:
    uvicorn api.main:app --reload

Endpoints:
    POST /datasets/{name} - Replace a dataset from an uploaded CSV
    GET /stats/{name} - Population statistics for one dataset
    GET /kpis - Dashboard averages
    GET /customers/{customer_id} - Customer health profile
    POST /customers/{customer_id}/actions - Dispatch recommended actions
    GET /action-tier - Action tier for a health score
    GET /health - Health check
"""

import sys
import os
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi import FastAPI, HTTPException, UploadFile, File
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Optional
from io import StringIO
from loguru import logger

from health_engine import HealthScoreEngine, DatasetName, NotFound
from health_engine.common import ActionDispatcher, DataLoader, load_settings

# Initialize FastAPI
app = FastAPI(
    title="Customer Health API",
    description="Composite customer health scoring and retention tiers",
    version="1.0.0"
)

# Add CORS middleware with environment-based configuration
cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8080").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

settings = load_settings(os.getenv("HEALTH_ENGINE_CONFIG"))
engine = HealthScoreEngine(centroids=settings.centroids)
loader = DataLoader()
dispatcher = ActionDispatcher()


# Response models
class HealthResponse(BaseModel):
    status: str
    version: str
    state_version: int


class ActionTierResponse(BaseModel):
    score: float
    tier: str
    actions: List[str]


class DispatchResponse(BaseModel):
    status: str
    customer_id: str
    tier: Optional[str] = None
    dispatched: dict = {}


def _dataset_name(name: str) -> DatasetName:
    try:
        return DatasetName.coerce(name)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


# Health check
@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version="1.0.0", state_version=engine.version)


@app.post("/datasets/{name}")
async def upload_dataset(name: str, file: UploadFile = File(...)):
    """
    Replace one dataset from an uploaded CSV.

    The previous dataset stays in place if the upload cannot be parsed.
    """
    dataset = _dataset_name(name)
    try:
        contents = await file.read()
        records = loader.load_records(StringIO(contents.decode('utf-8')))
    except Exception as e:
        logger.error(f"Upload error for {dataset.value}: {e}")
        raise HTTPException(status_code=400, detail=f"Could not parse CSV: {e}")

    is_valid, report = loader.validate_records(
        records, dataset, settings.required_columns.get(dataset.value)
    )
    engine.load_dataset(dataset, records)

    return {
        "status": "success",
        "dataset": dataset.value,
        "n_records": len(records),
        "state_version": engine.version,
        "validation": {
            "is_valid": is_valid,
            "errors": report['errors'],
            "warnings": report['warnings'],
        },
    }


@app.get("/stats/{name}")
async def population_stats(name: str):
    """Population statistics for one dataset."""
    dataset = _dataset_name(name)
    stats = engine.get_population_stats(dataset)
    return {"status": "success", **engine.calculator.summarize(stats)}


@app.get("/kpis")
async def kpis():
    """Average loyalty score, 12-month CLV and churn risk."""
    return {"status": "success", "kpis": engine.get_kpis()}


@app.get("/customers/{customer_id}")
async def lookup_customer(customer_id: str):
    """Composite health profile for one customer."""
    result = engine.lookup_customer(customer_id)
    if isinstance(result, NotFound):
        return {"status": "not_found", "customer_id": result.customer_id}
    return {"status": "success", "profile": result.to_dict()}


@app.post("/customers/{customer_id}/actions", response_model=DispatchResponse)
async def dispatch_actions(customer_id: str):
    """Dispatch the two actions recommended for the customer's tier."""
    result = engine.lookup_customer(customer_id)
    if isinstance(result, NotFound):
        return DispatchResponse(status="not_found", customer_id=result.customer_id)

    dispatched = engine.dispatch_actions(result, dispatcher)
    return DispatchResponse(
        status="success",
        customer_id=result.customer_id,
        tier=result.action_tier.tier,
        dispatched=dispatched,
    )


@app.get("/action-tier", response_model=ActionTierResponse)
async def action_tier(score: float):
    """Action tier for a health score."""
    tier = engine.get_action_tier(score)
    return ActionTierResponse(score=score, tier=tier.tier, actions=list(tier.actions))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
