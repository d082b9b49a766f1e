# src/meeting_intel/services/jobs/base.py
"""
Background Jobs Base Module

Job configuration and runner.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
import logging

from ...config import get_config

logger = logging.getLogger(__name__)


@dataclass
class JobConfig:
    """Configuration for a background job."""
    name: str
    description: str
    schedule: str  # cron expression
    enabled: bool = True


def get_job_configs() -> Dict[str, JobConfig]:
    """Job registry; schedules come from configuration."""
    config = get_config()
    return {
        "deadline_sweep": JobConfig(
            name="Action Item Deadline Sweep",
            description="Notify owners of action items due within a day or overdue",
            schedule=config.deadline_sweep_schedule,
            enabled=True,
        ),
    }


def run_job(job_name: str, now: Optional[int] = None) -> Dict[str, Any]:
    """
    Run a specific background job by name.

    Args:
        job_name: One of the keys of get_job_configs()
        now: Optional epoch-ms instant to run the job "as of"

    Returns:
        Job result dict
    """
    # Import here to avoid circular imports
    from .deadline_sweep import DeadlineSweepJob

    jobs = {
        "deadline_sweep": DeadlineSweepJob,
    }

    if job_name not in jobs:
        raise ValueError(f"Unknown job: {job_name}. Available: {list(jobs.keys())}")

    job = jobs[job_name]()
    return job.run(now=now)


__all__ = [
    "JobConfig",
    "get_job_configs",
    "run_job",
]
