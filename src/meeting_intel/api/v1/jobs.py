# src/meeting_intel/api/v1/jobs.py
"""
Background Jobs API Routes

Manages background job execution and listing.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Header, Request
from fastapi.responses import JSONResponse

from .auth import check_cron_api_key

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{job_name}/run")
async def run_background_job(
    job_name: str,
    request: Request,
    x_api_key: Optional[str] = Header(None),
):
    """
    Execute a background job by name.

    Called by an external cron via HTTP; also available for manual triggering.

    Jobs:
    - deadline_sweep: Deadline-approaching and overdue notifications
    """
    from ...services.jobs import get_job_configs, run_job

    check_cron_api_key(x_api_key)

    # Get optional run_id from the cron trigger
    run_id = request.headers.get("X-Job-Run-Id")

    valid_jobs = list(get_job_configs().keys())
    if job_name not in valid_jobs:
        return JSONResponse({
            "error": f"Unknown job: {job_name}",
            "available_jobs": valid_jobs,
        }, status_code=400)

    try:
        result = run_job(job_name)
        status = result.get("status", "completed")

        return JSONResponse({
            "job_name": job_name,
            "status": status,
            "run_id": run_id,
            "result": result,
            "executed_at": datetime.now().isoformat(),
        }, status_code=500 if status == "failed" else 200)
    except Exception as e:
        logger.error(f"Job {job_name} failed: {str(e)}")
        return JSONResponse({
            "job_name": job_name,
            "status": "failed",
            "run_id": run_id,
            "error": str(e),
            "executed_at": datetime.now().isoformat(),
        }, status_code=500)


@router.get("")
async def list_background_jobs():
    """List all available background jobs and their schedules."""
    from ...services.jobs import get_job_configs
    from ...services.scheduler import get_scheduler, get_next_job_runs

    jobs = []
    for key, config in get_job_configs().items():
        jobs.append({
            "name": key,
            "display_name": config.name,
            "description": config.description,
            "schedule": config.schedule,
            "enabled": config.enabled,
        })

    scheduler = get_scheduler()
    if scheduler:
        scheduling_info = {
            "method": "apscheduler",
            "status": "running" if scheduler.running else "stopped",
            "next_runs": get_next_job_runs(),
        }
    else:
        scheduling_info = {
            "method": "external_cron",
            "description": "Scheduler not running in this process; trigger via POST /api/v1/jobs/{job_name}/run",
            "status": "disabled",
        }

    return JSONResponse({
        "jobs": jobs,
        "scheduling": scheduling_info,
    })
