"""Profile, log, weight and plan routes."""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from fitgenius.api.auth_routes import current_account
from fitgenius.api.store import Account
from fitgenius.schemas.auth import WeightUpdate
from fitgenius.schemas.plan import WorkoutPlan
from fitgenius.schemas.user import UserProfile, WeightEntry
from fitgenius.schemas.workout_log import WorkoutLog
from fitgenius.services.metrics import merge_log_into
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(tags=["data"])


@router.get("/profile", response_model=UserProfile)
async def get_profile(account: Account = Depends(current_account)):
    if account.profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return account.profile


@router.post("/profile")
async def save_profile(profile: UserProfile, account: Account = Depends(current_account)):
    account.profile = profile
    return {"ok": True}


@router.post("/weight")
async def record_weight(payload: WeightUpdate, account: Account = Depends(current_account)):
    """Append a weight sample; the profile's current weight follows it."""
    profile = account.profile or UserProfile()
    history = [*profile.weight_history, WeightEntry(date=datetime.now(), weight=payload.weight)]
    account.profile = profile.model_copy(update={"weight": payload.weight, "weight_history": history})
    return {"ok": True, "samples": len(history)}


@router.get("/logs", response_model=List[WorkoutLog])
async def get_logs(account: Account = Depends(current_account)):
    return account.logs


@router.post("/logs")
async def add_log(log: WorkoutLog, account: Account = Depends(current_account)):
    """Store a log; a second log on the same day is merged into the first."""
    before = len(account.logs)
    account.logs = merge_log_into(account.logs, log)
    merged = len(account.logs) == before
    logger.info(f"{'Merged' if merged else 'Stored'} log {log.id} for {account.username}")
    return {"ok": True, "merged": merged}


@router.get("/plan", response_model=WorkoutPlan)
async def get_plan(account: Account = Depends(current_account)):
    if account.plan is None:
        raise HTTPException(status_code=404, detail="No active plan")
    return account.plan


@router.post("/plan")
async def save_plan(plan: WorkoutPlan, account: Account = Depends(current_account)):
    account.plan = plan
    return {"ok": True}
