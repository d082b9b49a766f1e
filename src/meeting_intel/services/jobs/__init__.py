"""
Background Jobs Module

Scheduled jobs that generate notifications:
- Deadline sweep (hourly by default)

Can be triggered manually via the jobs API or scheduled via APScheduler.
"""

from .base import JobConfig, get_job_configs, run_job
from .deadline_sweep import DeadlineSweepJob

__all__ = [
    # Configuration
    "JobConfig",
    "get_job_configs",
    # Job classes
    "DeadlineSweepJob",
    # Runner functions
    "run_job",
]
