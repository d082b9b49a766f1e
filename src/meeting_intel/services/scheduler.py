"""
Background Job Scheduler for Meeting Intelligence

Uses APScheduler to run background jobs at their scheduled times.

Only one process should run the scheduler (scheduler_enabled / production):
the deadline sweep relies on sweeps never overlapping.
"""

import logging
from typing import Optional

from ..config import get_config

logger = logging.getLogger(__name__)

# Global scheduler instance
_scheduler = None


def get_scheduler():
    """Get the global scheduler instance."""
    global _scheduler
    return _scheduler


def run_deadline_sweep():
    """Scheduler entry point for the deadline sweep."""
    from .jobs import DeadlineSweepJob

    try:
        job = DeadlineSweepJob()
        result = job.run()
        logger.info(
            f"DeadlineSweepJob {result.get('status')}: "
            f"notifications={result.get('notifications_created', 0)} failures={len(result.get('failures', []))}"
        )
    except Exception as e:
        logger.error(f"DeadlineSweepJob failed: {e}")


def init_scheduler(force: bool = False):
    """
    Initialize the APScheduler with all background jobs.

    Runs when scheduler_enabled is set or the environment is production,
    to avoid duplicate job execution across development processes.
    """
    global _scheduler

    config = get_config()
    if not (force or config.scheduler_enabled or config.environment == "production"):
        logger.info(f"Scheduler disabled in {config.environment} environment")
        return None

    if _scheduler is not None:
        return _scheduler

    from apscheduler.schedulers.background import BackgroundScheduler
    from apscheduler.triggers.cron import CronTrigger

    from .jobs import get_job_configs

    try:
        _scheduler = BackgroundScheduler(
            job_defaults={
                'coalesce': True,  # Combine missed executions
                'max_instances': 1,  # One instance at a time
                'misfire_grace_time': 60 * 30,  # 30 min grace period
            }
        )

        sweep_config = get_job_configs()["deadline_sweep"]
        if sweep_config.enabled:
            _scheduler.add_job(
                run_deadline_sweep,
                CronTrigger.from_crontab(sweep_config.schedule, timezone=config.timezone),
                id="deadline_sweep",
                name=sweep_config.name,
                replace_existing=True,
            )

        _scheduler.start()
        logger.info("Background job scheduler started")

        for job in _scheduler.get_jobs():
            logger.info(f"  {job.name}: next run at {job.next_run_time}")

        return _scheduler

    except Exception as e:
        logger.error(f"Failed to initialize scheduler: {e}")
        _scheduler = None
        return None


def shutdown_scheduler():
    """Shutdown the scheduler gracefully."""
    global _scheduler
    if _scheduler:
        _scheduler.shutdown(wait=False)
        logger.info("Scheduler shutdown complete")
        _scheduler = None


def get_next_job_runs() -> list:
    """Get the next scheduled run times for all jobs."""
    if not _scheduler:
        return []

    jobs = []
    for job in _scheduler.get_jobs():
        jobs.append({
            "id": job.id,
            "name": job.name,
            "next_run": job.next_run_time.isoformat() if job.next_run_time else None,
        })
    return jobs
